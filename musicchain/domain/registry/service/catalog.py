"""RecordCatalog - local materialized view of every registered song."""

import logging
from dataclasses import field
from datetime import UTC, datetime

from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.error import MusicChainError, PartialLoadError
from musicchain.domain.shared.model.value import Address
from musicchain.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RecordCatalog(Service):
    """Newest-first snapshot of all songs, rebuilt from the ledger on demand.

    The ledger assigns dense ids starting at 1, so a full view is obtained by
    reading ``1..total_count``. A snapshot is only published when every read
    succeeded; readers see either the previous snapshot or the new one.
    """

    ledger: LedgerClient
    _snapshot: tuple[Record, ...] | None = field(default=None, init=False, repr=False)
    _refreshed_at: datetime | None = field(default=None, init=False, repr=False)
    last_error: MusicChainError | None = field(default=None, init=False, repr=False)

    async def refresh_all(self) -> tuple[Record, ...]:
        """Rebuild the snapshot.

        Raises:
            LedgerConnectionError: If the total count cannot be read
            PartialLoadError: If any individual record read fails
        """
        try:
            total = await self.ledger.read_total_count()
        except MusicChainError as e:
            self.last_error = e
            raise

        loaded: list[Record] = []
        for song_id in range(1, total + 1):
            try:
                loaded.append(await self.ledger.read_record(song_id))
            except MusicChainError as e:
                error = PartialLoadError(song_id=song_id, loaded=len(loaded), total=total)
                self.last_error = error
                logger.warning("Catalog refresh aborted at song %d: %s", song_id, e.message)
                raise error from e

        snapshot = tuple(reversed(loaded))
        self._snapshot = snapshot
        self._refreshed_at = datetime.now(UTC)
        self.last_error = None
        logger.debug("Catalog refreshed: %d songs", total)
        return snapshot

    @property
    def records(self) -> tuple[Record, ...]:
        return self._snapshot or ()

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def refreshed_at(self) -> datetime | None:
        return self._refreshed_at

    def get(self, song_id: int) -> Record | None:
        return next((r for r in self.records if r.id == song_id), None)

    def filter_by_registrant(self, address: Address | str) -> list[Record]:
        """Songs registered by ``address`` in the last good snapshot. No ledger call."""
        return [r for r in self.records if r.is_registrant(address)]

    async def ids_on_ledger(self, address: Address) -> list[int]:
        """Ask the ledger directly which ids ``address`` registered."""
        return await self.ledger.read_records_by_registrant(address)
