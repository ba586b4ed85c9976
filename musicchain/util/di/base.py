from dishka import Provider as DishkaProvider
from dishka import from_context

from musicchain.config import Config
from musicchain.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all MusicChain DI providers."""


class ConfigProvider(Provider):
    """Exposes the Config passed as container context."""

    config = from_context(provides=Config, scope=Scope.APP)
