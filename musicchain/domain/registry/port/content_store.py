from abc import abstractmethod
from typing import Protocol

from musicchain.domain.shared.port import Port


class ContentStore(Port, Protocol):
    @abstractmethod
    async def add(self, filename: str, content: bytes) -> str:
        """Store a payload and return its content identifier.

        Raises:
            ContentStoreError: If the store rejects the upload or is unreachable
        """
        ...
