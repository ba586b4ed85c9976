from abc import abstractmethod
from typing import Protocol

from musicchain.domain.registry.model.record import Record
from musicchain.domain.shared.port import Port


class PaymentConfirmation(Port, Protocol):
    """Asks the viewer to approve an exact access fee before anything is signed."""

    @abstractmethod
    async def confirm(self, record: Record, fee: int) -> bool: ...
