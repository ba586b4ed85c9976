from abc import abstractmethod
from typing import Any, Protocol

from musicchain.domain.shared.model.value import Address
from musicchain.domain.shared.port import Port


class Signer(Port, Protocol):
    """Externally managed signing capability (wallet or node account).

    This package never sees key material; it hands a fully described
    transaction to the signer and gets back its hash.
    """

    @abstractmethod
    async def address(self) -> Address:
        """Raises NotConnectedError if no account is available."""
        ...

    @abstractmethod
    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        """Sign and broadcast; returns the transaction hash as 0x-hex.

        Raises:
            RejectedError: If the user or wallet declines
        """
        ...
