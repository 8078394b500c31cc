"""
Error taxonomy for the hub core.

Callers can tell an absent entity (NotFound) from a misbehaving contributor
(ListenerFailure) from a degraded cache (CacheBackendUnavailable).
"""
from __future__ import annotations

from typing import Any


class HubError(Exception):
    pass


class NotFound(HubError):
    """A lookup key does not resolve in the persistent store."""

    def __init__(self, kind: str, **criteria: Any) -> None:
        self.kind = kind
        self.criteria = criteria
        rendered = ", ".join(f"{k}={v!r}" for k, v in criteria.items())
        super().__init__(f"{kind} not found ({rendered})")


class ListenerFailure(HubError):
    """
    An extension listener raised while contributing data.

    Instances are collected by the resolver and returned next to the
    successful contributions; they are never raised by ``resolve``.
    """

    def __init__(
        self,
        kind: str,
        listener: str,
        cause: BaseException,
        entity_id: Any = None,
    ) -> None:
        self.kind = kind
        self.listener = listener
        self.cause = cause
        self.entity_id = entity_id
        super().__init__(
            f"Listener '{listener}' failed for {kind} {entity_id!r}: {cause}"
        )


class CacheBackendUnavailable(HubError):
    """The cache store cannot be reached."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cache backend unavailable during '{operation}'{detail}")


class ModuleLoadError(HubError):
    pass
