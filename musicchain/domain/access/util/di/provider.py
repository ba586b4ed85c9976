from dishka import from_context, provide

from musicchain.config import Config
from musicchain.domain.access.command.view_certificate import ViewCertificateHandler
from musicchain.domain.access.model.certificate import CertificateLinks
from musicchain.domain.access.port.confirmation import PaymentConfirmation
from musicchain.domain.access.service.gate import AccessGate
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.util.di.base import Provider
from musicchain.util.di.scope import Scope


class AccessProvider(Provider):
    # Supplied by the presentation layer when it opens an ACTION scope
    confirmation = from_context(provides=PaymentConfirmation, scope=Scope.ACTION)

    @provide(scope=Scope.APP)
    def get_certificate_links(self, config: Config) -> CertificateLinks:
        return CertificateLinks(
            contract_address=config.ledger.contract_address,
            explorer_url=config.ledger.explorer_url,
            gateway_url=config.content_store.gateway_url,
        )

    @provide(scope=Scope.ACTION)
    def get_access_gate(
        self,
        ledger: LedgerClient,
        fee_cache: FeeCache,
        catalog: RecordCatalog,
        links: CertificateLinks,
        config: Config,
    ) -> AccessGate:
        return AccessGate(
            ledger=ledger,
            fee_cache=fee_cache,
            catalog=catalog,
            links=links,
            confirmation_timeout=config.ledger.confirmation_timeout,
        )

    view_certificate_handler = provide(ViewCertificateHandler, scope=Scope.ACTION)
