import re
from typing import Generic, NewType, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel, field_validator

T = TypeVar("T")

# Amounts in the ledger's base unit
Wei = NewType("Wei", int)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_ZERO_ADDRESS = "0x" + "0" * 40


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    model_config = ConfigDict(frozen=True)


class Address(RootValueObject[str]):
    """An account address on the ledger.

    Addresses arrive in mixed case (checksummed from the node, lower-cased from
    wallets), so equality and hashing ignore case. The original spelling is
    kept for display.
    """

    @field_validator("root")
    @classmethod
    def _check_format(cls, v: str) -> str:
        if not _ADDRESS_RE.match(v):
            raise ValueError(f"Invalid address: {v!r}")
        return v

    @property
    def normalized(self) -> str:
        return self.root.lower()

    @property
    def is_zero(self) -> bool:
        return self.normalized == _ZERO_ADDRESS

    def short(self) -> str:
        return f"{self.root[:6]}...{self.root[-4:]}"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Address):
            return self.normalized == other.normalized
        if isinstance(other, str):
            return self.normalized == other.lower()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.normalized)

    def __str__(self) -> str:
        return self.root
