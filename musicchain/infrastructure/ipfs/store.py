"""IPFS HTTP API adapter for the ContentStore port."""

import logging

import httpx

from musicchain.domain.registry.port.content_store import ContentStore
from musicchain.domain.shared.error import ContentStoreError

logger = logging.getLogger(__name__)


class IpfsContentStore(ContentStore):
    """Adds payloads through a Kubo daemon's ``/api/v0/add`` endpoint."""

    def __init__(self, client: httpx.AsyncClient, api_url: str) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")

    async def add(self, filename: str, content: bytes) -> str:
        try:
            response = await self._client.post(
                f"{self._api_url}/api/v0/add",
                params={"pin": "true", "cid-version": "0"},
                files={"file": (filename, content)},
            )
        except httpx.RequestError as e:
            logger.exception("IPFS upload failed: %s", e)
            raise ContentStoreError(
                "Failed to connect to IPFS", code="content_store_unavailable"
            ) from e

        if response.status_code != 200:
            logger.error(
                "IPFS add failed: status=%d, body=%s", response.status_code, response.text
            )
            raise ContentStoreError(
                f"IPFS add failed: {response.status_code}", code="content_store_rejected"
            )

        # {"Name": "song.mp3", "Hash": "Qm...", "Size": "12345"}
        try:
            body = response.json()
        except ValueError as e:
            raise ContentStoreError(
                "IPFS response is not valid JSON", code="content_store_rejected"
            ) from e
        content_id = body.get("Hash") if isinstance(body, dict) else None
        if not content_id:
            raise ContentStoreError("IPFS response missing Hash field", code="content_store_rejected")
        return content_id
