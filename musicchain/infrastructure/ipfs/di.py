"""DI provider for the IPFS content store."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from musicchain.config import Config
from musicchain.domain.registry.port.content_store import ContentStore
from musicchain.infrastructure.ipfs.store import IpfsContentStore
from musicchain.util.di.base import Provider
from musicchain.util.di.scope import Scope

IpfsHttpClient = NewType("IpfsHttpClient", httpx.AsyncClient)


class IpfsProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_ipfs_http_client(self, config: Config) -> AsyncIterable[IpfsHttpClient]:
        """Dedicated HTTP client; audio uploads need a long write timeout."""
        timeout = httpx.Timeout(config.content_store.timeout, connect=5.0)
        client = httpx.AsyncClient(timeout=timeout)
        yield IpfsHttpClient(client)
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_content_store(self, client: IpfsHttpClient, config: Config) -> ContentStore:
        return IpfsContentStore(client=client, api_url=config.content_store.api_url)
