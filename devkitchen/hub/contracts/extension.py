# devkitchen/hub/contracts/extension.py
"""
Contracts for cross-module extension data.

A module that wants to add fields to an entity it does not own registers a
listener for the entity kind. When extension data is requested, every
listener receives the same event and may add one namespaced contribution.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Protocol

from devkitchen.hub.core.errors import ListenerFailure

if TYPE_CHECKING:
    from devkitchen.hub.core.extension.event import ExtensionDataEvent


# Listener receives the event, the target entity and caller arguments.
# It may be a plain function or a coroutine function.
ExtensionListener = Callable[
    ["ExtensionDataEvent", Any, Mapping[str, Any]], Awaitable[None] | None
]


@dataclass(frozen=True)
class ExtensionListenerRegistration:
    """
    One listener registered for one entity kind.

    Attributes:
        kind: Entity kind the listener contributes to.
        listener: The callable invoked on dispatch.
        name: Human readable name used in logs and failure reports.
    """

    kind: str
    listener: ExtensionListener
    name: str


@dataclass(frozen=True)
class ExtensionDataResult:
    """
    Outcome of one resolution.

    Attributes:
        kind: Entity kind that was resolved.
        data: Merged contributions, namespace -> data, in invocation order.
        failures: Listeners that raised; their partial writes were discarded.
    """

    kind: str
    data: Mapping[str, Any]
    failures: tuple[ListenerFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_listeners(self) -> list[str]:
        return [f.listener for f in self.failures]


class ListenerRegistry(Protocol):
    """Protocol for extension listener registries."""

    def register(
        self,
        kind: str,
        listener: ExtensionListener,
        *,
        name: str | None = None,
    ) -> ExtensionListenerRegistration: ...

    def listeners_for(self, kind: str) -> tuple[ExtensionListenerRegistration, ...]: ...


class HubModule(Protocol):
    """A deployable module that contributes listeners at startup."""

    name: str
    version: str

    def register(self, registry: ListenerRegistry) -> None: ...
