from enum import StrEnum
from typing import Any

from pydantic import Field

from musicchain.domain.shared.model.value import Address, ValueObject


class FeeKind(StrEnum):
    """Fees published by the registry contract, named after their getters."""

    REGISTRATION = "registrationFee"
    ACCESS = "accessFee"


class FeeSchedule(ValueObject):
    registration_fee: int = Field(ge=0)
    access_fee: int = Field(ge=0)


class CallDescriptor(ValueObject):
    """A state-changing contract call, independent of wire encoding."""

    function: str
    args: tuple[Any, ...] = ()

    @classmethod
    def register_song(
        cls, title: str, author: str, content_id: str, license: str
    ) -> "CallDescriptor":
        return cls(function="registerSong", args=(title, author, content_id, license))

    @classmethod
    def pay_for_access(cls, song_id: int) -> "CallDescriptor":
        return cls(function="payForAccess", args=(song_id,))

    def __str__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"{self.function}({rendered})"


class PendingTransaction(ValueObject):
    tx_hash: str
    call: CallDescriptor
    value: int
    sender: Address


class Receipt(ValueObject):
    tx_hash: str
    block_number: int
    gas_used: int
    success: bool = True
