from musicchain.domain.registry.util.di.provider import RegistryProvider

__all__ = ["RegistryProvider"]
