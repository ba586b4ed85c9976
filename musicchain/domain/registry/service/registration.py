"""RegistrationFlow - upload, fee lookup and submission for a new song."""

import logging

from musicchain.domain.ledger.model.value import CallDescriptor
from musicchain.domain.ledger.port.client import LedgerClient
from musicchain.domain.registry.model.record import License
from musicchain.domain.registry.model.value import RegistrationResult
from musicchain.domain.registry.port.content_store import ContentStore
from musicchain.domain.registry.service.catalog import RecordCatalog
from musicchain.domain.registry.service.fee_cache import FeeCache
from musicchain.domain.shared.error import MusicChainError, ValidationError
from musicchain.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RegistrationFlow(Service):
    """Registers a song on the ledger, paying the current registration fee.

    Nothing is kept between attempts: a failed registration must be retried
    with all fields supplied again.
    """

    ledger: LedgerClient
    content_store: ContentStore
    fee_cache: FeeCache
    catalog: RecordCatalog
    confirmation_timeout: float | None = None

    async def register(
        self,
        title: str,
        author: str,
        content_id: str,
        license: str = License.ALL_RIGHTS_RESERVED,
    ) -> RegistrationResult:
        title, author, content_id, license = _require_fields(
            title=title, author=author, content_id=content_id, license=license
        )
        # Never submit with an unknown fee; under- or over-paying both lose money.
        fees = self.fee_cache.require()

        call = CallDescriptor.register_song(title, author, content_id, license)
        pending = await self.ledger.submit(call, value=fees.registration_fee)
        logger.info("Registration submitted: tx=%s fee=%d", pending.tx_hash, fees.registration_fee)

        receipt = await self.ledger.await_confirmation(pending, timeout=self.confirmation_timeout)
        logger.info("Registration confirmed in block %d", receipt.block_number)

        try:
            await self.catalog.refresh_all()
        except MusicChainError as e:
            logger.warning("Registered but catalog refresh failed: %s", e.message)
            return RegistrationResult(
                receipt=receipt,
                fee_paid=fees.registration_fee,
                content_id=content_id,
                refresh_error=e.message,
            )

        record = next(
            (
                r
                for r in self.catalog.records
                if r.is_registrant(pending.sender) and r.content_id == content_id
            ),
            None,
        )
        return RegistrationResult(
            receipt=receipt,
            fee_paid=fees.registration_fee,
            content_id=content_id,
            record=record,
        )

    async def upload_and_register(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        title: str,
        author: str,
        license: str = License.ALL_RIGHTS_RESERVED,
    ) -> RegistrationResult:
        """Upload an audio file to the content store, then register it."""
        if not content_type.startswith("audio/"):
            raise ValidationError(
                f"Only audio files can be registered, got '{content_type}'",
                field="content_type",
            )
        if not content:
            raise ValidationError("Audio file is empty", field="content")
        _require_fields(title=title, author=author, license=license)
        self.fee_cache.require()

        content_id = await self.content_store.add(filename, content)
        logger.info("Uploaded %s to content store: %s", filename, content_id)
        return await self.register(title, author, content_id, license)


def _require_fields(**fields: str) -> tuple[str, ...]:
    """Strip each field and reject blanks."""
    cleaned = []
    for name, value in fields.items():
        value = str(value).strip()
        if not value:
            raise ValidationError(f"'{name}' must not be empty", field=name)
        cleaned.append(value)
    return tuple(cleaned)
