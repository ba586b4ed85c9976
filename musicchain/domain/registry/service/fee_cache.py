"""FeeCache - process-wide view of the ledger's fee schedule."""

import logging
from dataclasses import field
from datetime import UTC, datetime

from musicchain.domain.ledger.model.value import FeeKind, FeeSchedule
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.shared.error import FeeNotLoadedError
from musicchain.domain.shared.service import Service

logger = logging.getLogger(__name__)


class FeeCache(Service):
    """Holds the last fee schedule read from the ledger.

    ``current()`` returns ``None`` until the first successful refresh. That
    state is distinct from a loaded schedule whose fees are zero: an unloaded
    cache must never be read as "free".
    """

    ledger: LedgerClient
    _schedule: FeeSchedule | None = field(default=None, init=False, repr=False)
    _refreshed_at: datetime | None = field(default=None, init=False, repr=False)

    async def refresh(self) -> FeeSchedule:
        """Re-read both fees and swap them in as one value.

        On failure the previous schedule is kept and the error propagates;
        retry policy belongs to the caller.
        """
        registration_fee = await self.ledger.read_fee(FeeKind.REGISTRATION)
        access_fee = await self.ledger.read_fee(FeeKind.ACCESS)
        schedule = FeeSchedule(registration_fee=registration_fee, access_fee=access_fee)
        self._schedule = schedule
        self._refreshed_at = datetime.now(UTC)
        logger.debug(
            "Fees refreshed: registration=%d access=%d", registration_fee, access_fee
        )
        return schedule

    def current(self) -> FeeSchedule | None:
        return self._schedule

    def require(self) -> FeeSchedule:
        if self._schedule is None:
            raise FeeNotLoadedError()
        return self._schedule

    @property
    def loaded(self) -> bool:
        return self._schedule is not None

    @property
    def refreshed_at(self) -> datetime | None:
        return self._refreshed_at
