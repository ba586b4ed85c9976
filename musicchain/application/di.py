from dishka import AsyncContainer, make_async_container

from musicchain.config import Config
from musicchain.domain.access.util.di import AccessProvider
from musicchain.domain.registry.util.di import RegistryProvider
from musicchain.infrastructure.ipfs.di import IpfsProvider
from musicchain.infrastructure.ledger.di import LedgerProvider
from musicchain.util.di.base import ConfigProvider
from musicchain.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        LedgerProvider(),
        IpfsProvider(),
        RegistryProvider(),
        AccessProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
