from abc import abstractmethod
from typing import Protocol

from musicchain.domain.ledger.model.value import (
    CallDescriptor,
    FeeKind,
    PendingTransaction,
    Receipt,
)
from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.model.value import Address
from musicchain.domain.shared.port import Port


class LedgerClient(Port, Protocol):
    """Typed gateway to the registry contract.

    Reads go through a read-only connection and work without a signer.
    ``submit`` is the only method that needs one.
    """

    @abstractmethod
    async def read_fee(self, kind: FeeKind) -> int:
        """Read a named fee in wei.

        Raises:
            LedgerConnectionError: If the read endpoint is unreachable
        """
        ...

    @abstractmethod
    async def read_record(self, song_id: int) -> Record:
        """Read one song.

        Raises:
            NotFoundError: If song_id is outside [1, total_count]
        """
        ...

    @abstractmethod
    async def read_total_count(self) -> int: ...

    @abstractmethod
    async def read_records_by_registrant(self, address: Address) -> list[int]: ...

    @abstractmethod
    async def signer_address(self) -> Address:
        """Address the next ``submit`` would be signed with.

        Raises:
            NotConnectedError: If the signer has no account
        """
        ...

    @abstractmethod
    async def simulate(self, call: CallDescriptor, value: int, sender: Address) -> None:
        """Dry-run a state-changing call as ``sender`` without mutating the ledger.

        ``sender`` must be the address that will sign the real transaction,
        since the contract's checks depend on the caller.

        Raises:
            RevertError: If the call would revert
        """
        ...

    @abstractmethod
    async def submit(self, call: CallDescriptor, value: int) -> PendingTransaction:
        """Sign and broadcast a call.

        Raises:
            NotConnectedError: If no signer account is available
            RejectedError: If the signer declines
            RevertError: If execution reverts
        """
        ...

    @abstractmethod
    async def await_confirmation(
        self, pending: PendingTransaction, timeout: float | None = None
    ) -> Receipt:
        """Suspend until the transaction is included.

        Raises:
            ConfirmationTimeoutError: If not included within ``timeout`` seconds
            RevertError: If the transaction reverted on-chain
        """
        ...
