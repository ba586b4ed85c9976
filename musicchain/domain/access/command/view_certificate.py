import logfire

from musicchain.domain.access.model.attempt import AccessState
from musicchain.domain.access.model.certificate import Certificate
from musicchain.domain.access.port.confirmation import PaymentConfirmation
from musicchain.domain.access.service.gate import AccessGate
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.shared.command import Command, CommandHandler, Result
from musicchain.domain.shared.error import MusicChainError
from musicchain.domain.shared.model.value import Address


class ViewCertificate(Command):
    song_id: int
    viewer: Address | None = None


class CertificateView(Result):
    state: AccessState
    certificate: Certificate | None = None
    reason: str | None = None
    code: str | None = None
    warnings: list[str] = []


class ViewCertificateHandler(CommandHandler[ViewCertificate, CertificateView]):
    gate: AccessGate
    catalog: RecordCatalog
    ledger: LedgerClient
    confirmation: PaymentConfirmation

    async def run(self, cmd: ViewCertificate) -> CertificateView:
        with logfire.span("ViewCertificate", song_id=cmd.song_id):
            record = self.catalog.get(cmd.song_id)
            if record is None:
                try:
                    record = await self.ledger.read_record(cmd.song_id)
                except MusicChainError as e:
                    return CertificateView(state=AccessState.FAILED, reason=e.message, code=e.code)

            attempt = await self.gate.run(cmd.viewer, record, self.confirmation)
            logfire.info("Certificate access finished", song_id=cmd.song_id, state=attempt.state)
            return CertificateView(
                state=attempt.state,
                certificate=attempt.certificate,
                reason=attempt.reason,
                code=attempt.cause.code if attempt.cause else None,
                warnings=attempt.warnings,
            )
