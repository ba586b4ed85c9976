"""AccessGate - decides free vs. paid certificate access and drives payment."""

import logging

import pydantic

from musicchain.domain.access.model.attempt import AccessAttempt, AccessState
from musicchain.domain.access.model.certificate import CertificateLinks
from musicchain.domain.access.port.confirmation import PaymentConfirmation
from musicchain.domain.ledger.model.value import CallDescriptor
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.model.record import Record
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.domain.shared.error import (
    FeeNotLoadedError,
    MusicChainError,
    NotConnectedError,
    RejectedError,
    RevertError,
    RevertReason,
    ValidationError,
)
from musicchain.domain.shared.model.value import Address
from musicchain.domain.shared.service import Service

logger = logging.getLogger(__name__)

_REGISTRANT_SIGNER_WARNING = (
    "The connected signer is the registrant of this song; access is free and no payment was sent."
)


class AccessGate(Service):
    """Runs one access attempt per call.

    The payment path is: confirm the exact fee with the viewer, simulate the
    payment as the signing account, and only then ask for a signature. A
    simulated revert ends the attempt before any transaction is sent.
    Attempts share nothing but the fee cache and the catalog.
    """

    ledger: LedgerClient
    fee_cache: FeeCache
    catalog: RecordCatalog
    links: CertificateLinks
    confirmation_timeout: float | None = None

    async def run(
        self,
        viewer: Address | str | None,
        record: Record,
        confirmation: PaymentConfirmation,
    ) -> AccessAttempt:
        attempt = AccessAttempt(song_id=record.id)
        try:
            attempt.viewer = _parse_viewer(viewer)
            await self._run(attempt, record, confirmation)
        except MusicChainError as e:
            logger.info("Access to song %d failed in %s: %s", record.id, attempt.state, e.message)
            attempt.fail(e)
        return attempt

    async def _run(
        self,
        attempt: AccessAttempt,
        record: Record,
        confirmation: PaymentConfirmation,
    ) -> None:
        attempt.advance(AccessState.CHECKING_IDENTITY)
        if attempt.viewer is None:
            raise NotConnectedError("Connect a wallet to view certificates")
        if record.is_registrant(attempt.viewer):
            attempt.grant(AccessState.FREE_ACCESS, self.links.issue(record))
            return

        fees = self.fee_cache.current()
        if fees is None:
            raise FeeNotLoadedError("Access fee not loaded; cannot decide whether payment is due")
        # Global switch: a zero access fee opens every record.
        if fees.access_fee == 0:
            attempt.grant(AccessState.FREE_ACCESS, self.links.issue(record))
            return

        attempt.advance(AccessState.NEEDS_PAYMENT)
        attempt.fee = fees.access_fee
        _check_payable(record)

        attempt.advance(AccessState.AWAITING_USER_CONFIRMATION)
        if not await confirmation.confirm(record, fees.access_fee):
            raise RejectedError("Access payment cancelled by user")

        attempt.advance(AccessState.SIMULATING)
        signer = await self.ledger.signer_address()
        if record.is_registrant(signer):
            # Wallet switched accounts since the viewer was resolved.
            logger.warning("Signer %s is the registrant of song %d", signer, record.id)
            attempt.warn(_REGISTRANT_SIGNER_WARNING)
            attempt.grant(AccessState.FREE_ACCESS, self.links.issue(record))
            return

        call = CallDescriptor.pay_for_access(record.id)
        try:
            await self.ledger.simulate(call, value=fees.access_fee, sender=signer)
        except RevertError as e:
            if e.reason != RevertReason.REGISTRANT_EXEMPT:
                raise
            logger.warning("Ledger reports %s as registrant of song %d", signer, record.id)
            attempt.warn(_REGISTRANT_SIGNER_WARNING)
            attempt.grant(AccessState.FREE_ACCESS, self.links.issue(record))
            return

        # Signing and broadcast are one call; SUBMITTING starts once the hash is known.
        attempt.advance(AccessState.AWAITING_SIGNATURE)
        pending = await self.ledger.submit(call, value=fees.access_fee)

        attempt.advance(AccessState.SUBMITTING)
        attempt.tx_hash = pending.tx_hash
        logger.info("Access payment submitted: song=%d tx=%s", record.id, pending.tx_hash)

        attempt.advance(AccessState.CONFIRMING)
        attempt.receipt = await self.ledger.await_confirmation(
            pending, timeout=self.confirmation_timeout
        )

        unlocked = record
        try:
            await self.catalog.refresh_all()
            unlocked = self.catalog.get(record.id) or record
        except MusicChainError as e:
            # Payment is final; failing here would invite a second payment.
            logger.warning("Paid for song %d but catalog refresh failed: %s", record.id, e.message)
            attempt.warn(f"Access counts may be stale: {e.message}")
        attempt.grant(AccessState.UNLOCKED, self.links.issue(unlocked))


def _check_payable(record: Record) -> None:
    if record.registrant.is_zero:
        raise ValidationError(
            f"Song {record.id} has no registrant; the contract may not be deployed correctly",
            field="registrant",
        )


def _parse_viewer(viewer: Address | str | None) -> Address | None:
    if not isinstance(viewer, str):
        return viewer
    try:
        return Address(viewer)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid viewer address: {viewer!r}", field="viewer") from e
