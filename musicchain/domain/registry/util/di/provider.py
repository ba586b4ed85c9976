from dishka import provide

from musicchain.config import Config
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.command.register_song import (
    RegisterSongHandler,
    UploadSongHandler,
)
from musicchain.domain.registry.command.sync import SyncRegistryHandler
from musicchain.domain.registry.port.content_store import ContentStore
from musicchain.domain.registry.query.list_songs import ListSongsHandler
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.domain.registry.service.registration import RegistrationFlow
from musicchain.util.di.base import Provider
from musicchain.util.di.scope import Scope


class RegistryProvider(Provider):
    # Shared caches live for the whole process
    fee_cache = provide(FeeCache, scope=Scope.APP)
    catalog = provide(RecordCatalog, scope=Scope.APP)

    @provide(scope=Scope.ACTION)
    def get_registration_flow(
        self,
        ledger: LedgerClient,
        content_store: ContentStore,
        fee_cache: FeeCache,
        catalog: RecordCatalog,
        config: Config,
    ) -> RegistrationFlow:
        return RegistrationFlow(
            ledger=ledger,
            content_store=content_store,
            fee_cache=fee_cache,
            catalog=catalog,
            confirmation_timeout=config.ledger.confirmation_timeout,
        )

    # Command Handlers
    register_song_handler = provide(RegisterSongHandler, scope=Scope.ACTION)
    upload_song_handler = provide(UploadSongHandler, scope=Scope.ACTION)
    sync_registry_handler = provide(SyncRegistryHandler, scope=Scope.ACTION)

    # Query Handlers
    list_songs_handler = provide(ListSongsHandler, scope=Scope.ACTION)
