"""Record - a registered work as stored on the ledger."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from musicchain.domain.shared.model.value import Address, ValueObject


class License(StrEnum):
    """License choices offered at registration. The ledger stores free text."""

    ALL_RIGHTS_RESERVED = "All Rights Reserved"
    CC_BY = "CC-BY-4.0"
    CC_BY_NC = "CC-BY-NC-4.0"
    CC0 = "CC0"


class Record(ValueObject):
    """An immutable snapshot of one song entry.

    ``access_count`` and ``active`` are mutated by the ledger only; a fresh
    snapshot is obtained by re-reading the record, never by editing this one.
    """

    id: int = Field(ge=1)
    registrant: Address
    title: str
    author: str
    content_id: str
    license: str
    registered_at: datetime
    access_count: int = Field(default=0, ge=0)
    active: bool = True

    def is_registrant(self, address: Address | str | None) -> bool:
        if address is None:
            return False
        return self.registrant == address
