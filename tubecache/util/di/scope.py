"""Dishka scopes for tubecache."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """tubecache dependency injection scopes.

    Hierarchy: APP -> REQUEST

    - APP: Process lifetime (cache store, sweeper, upstream HTTP client)
    - REQUEST: One HTTP request (query handlers)
    """

    APP = new_scope("APP")
    REQUEST = new_scope("REQUEST")
