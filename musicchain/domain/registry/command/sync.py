import logfire

from musicchain.domain.ledger.model.value import FeeSchedule
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.domain.shared.command import Command, CommandHandler, Result
from musicchain.domain.shared.error import MusicChainError


class SyncRegistry(Command):
    """Refresh the fee schedule and the song catalog from the ledger."""


class RegistrySynced(Result):
    fees: FeeSchedule | None
    song_count: int
    errors: list[str] = []


class SyncRegistryHandler(CommandHandler[SyncRegistry, RegistrySynced]):
    fee_cache: FeeCache
    catalog: RecordCatalog

    async def run(self, cmd: SyncRegistry) -> RegistrySynced:
        with logfire.span("SyncRegistry"):
            # Fees and songs refresh independently; one failing keeps the other.
            errors: list[str] = []
            try:
                await self.fee_cache.refresh()
            except MusicChainError as e:
                logfire.warn("Fee refresh failed", error=e.message)
                errors.append(e.message)
            try:
                await self.catalog.refresh_all()
            except MusicChainError as e:
                logfire.warn("Catalog refresh failed", error=e.message)
                errors.append(e.message)

            return RegistrySynced(
                fees=self.fee_cache.current(),
                song_count=len(self.catalog.records),
                errors=errors,
            )
