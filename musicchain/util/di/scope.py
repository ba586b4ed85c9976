"""Custom Dishka scopes for MusicChain."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """MusicChain dependency injection scopes.

    Hierarchy: APP -> ACTION

    - APP: Process lifetime (RPC clients, fee cache, record catalog)
    - ACTION: One user action (a registration or an access attempt)
    """

    APP = new_scope("APP")
    ACTION = new_scope("ACTION")
