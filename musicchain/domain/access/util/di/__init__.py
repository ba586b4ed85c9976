from musicchain.domain.access.util.di.provider import AccessProvider

__all__ = ["AccessProvider"]
