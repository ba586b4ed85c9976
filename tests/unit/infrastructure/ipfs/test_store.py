"""Unit tests for IpfsContentStore adapter."""

from unittest.mock import AsyncMock

import httpx
import pytest

from musicchain.domain.shared.error import ContentStoreError
from musicchain.infrastructure.ipfs.store import IpfsContentStore

ADD_URL = "http://localhost:5001/api/v0/add"


def _response(status_code: int, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", ADD_URL), **kwargs)


class TestIpfsContentStore:
    @pytest.mark.asyncio
    async def test_returns_hash_of_added_file(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _response(
            200, json={"Name": "song.mp3", "Hash": "QmSong", "Size": "6"}
        )

        store = IpfsContentStore(client=client, api_url="http://localhost:5001/")
        content_id = await store.add("song.mp3", b"ID3abc")

        assert content_id == "QmSong"
        client.post.assert_called_once_with(
            ADD_URL,
            params={"pin": "true", "cid-version": "0"},
            files={"file": ("song.mp3", b"ID3abc")},
        )

    @pytest.mark.asyncio
    async def test_unreachable_daemon(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.side_effect = httpx.ConnectError("Connection refused")

        store = IpfsContentStore(client=client, api_url="http://localhost:5001")
        with pytest.raises(ContentStoreError) as exc_info:
            await store.add("song.mp3", b"x")
        assert exc_info.value.code == "content_store_unavailable"

    @pytest.mark.asyncio
    async def test_rejected_upload(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _response(500, text="blockstore full")

        store = IpfsContentStore(client=client, api_url="http://localhost:5001")
        with pytest.raises(ContentStoreError) as exc_info:
            await store.add("song.mp3", b"x")
        assert exc_info.value.code == "content_store_rejected"

    @pytest.mark.asyncio
    async def test_missing_hash(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _response(200, json={"Name": "song.mp3"})

        store = IpfsContentStore(client=client, api_url="http://localhost:5001")
        with pytest.raises(ContentStoreError):
            await store.add("song.mp3", b"x")

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        client.post.return_value = _response(200, text="<html>502 Bad Gateway</html>")

        store = IpfsContentStore(client=client, api_url="http://localhost:5001")
        with pytest.raises(ContentStoreError) as exc_info:
            await store.add("song.mp3", b"x")
        assert exc_info.value.code == "content_store_rejected"
