from musicchain.util.di.base import ConfigProvider, Provider
from musicchain.util.di.scope import Scope

__all__ = ["ConfigProvider", "Provider", "Scope"]
