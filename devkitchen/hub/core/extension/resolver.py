# devkitchen/hub/core/extension/resolver.py
"""
Extension data resolver: dispatch an event to every listener for an
entity kind, then collect what they contributed.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Mapping

from devkitchen.hub.contracts.entity import entity_kind
from devkitchen.hub.contracts.extension import (
    ExtensionDataResult,
    ExtensionListenerRegistration,
    ListenerRegistry,
)
from devkitchen.hub.core.errors import ListenerFailure
from devkitchen.hub.core.extension.event import ExtensionDataEvent

logger = logging.getLogger(__name__)


class ExtensionDataResolver:
    """
    Resolves extension data for entity instances.

    Listeners run one after another in registration order, never
    concurrently, so last-write-wins is deterministic.

    Failure policy is isolate-and-continue: a listener that raises has
    its partial writes rolled back, is reported as a ListenerFailure in the
    result, and the remaining listeners still run. Contributions made by
    earlier listeners are kept. Only ``Exception`` is isolated; cancellation
    from the surrounding request propagates.

    Example:
        resolver = ExtensionDataResolver(registry=listener_registry)

        result = await resolver.resolve(organization, {"locale": "pt-BR"})
        result.data      # {"realEstate": {...}, "billing": {...}}
        result.failures  # ()
    """

    def __init__(self, registry: ListenerRegistry) -> None:
        self._registry = registry
        self._dispatch_count = 0
        self._failure_count = 0

    @property
    def registry(self) -> ListenerRegistry:
        return self._registry

    @property
    def dispatch_count(self) -> int:
        """Total number of dispatches performed."""
        return self._dispatch_count

    @property
    def failure_count(self) -> int:
        """Total number of listener failures isolated."""
        return self._failure_count

    async def resolve(
        self,
        entity: Any,
        args: Mapping[str, Any] | None = None,
        *,
        kind: str | None = None,
    ) -> ExtensionDataResult:
        """
        Collect extension data for one entity.

        Args:
            entity: The entity being extended.
            args: Optional caller arguments forwarded to every listener.
            kind: Entity kind override; defaults to ``entity.kind``.

        Returns:
            Merged contributions plus any isolated listener failures.
        """
        kind = kind or entity_kind(entity)
        event = ExtensionDataEvent(entity)

        failures = await self.dispatch(kind, event, args)

        return ExtensionDataResult(
            kind=kind,
            data=event.get_all_extension_data(),
            failures=tuple(failures),
        )

    async def resolve_extension_data(
        self,
        entity: Any,
        args: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Caller-facing variant returning only the merged mapping."""
        result = await self.resolve(entity, args)
        return dict(result.data)

    async def dispatch(
        self,
        kind: str,
        event: ExtensionDataEvent,
        args: Mapping[str, Any] | None = None,
    ) -> list[ListenerFailure]:
        """
        Invoke every listener registered for ``kind`` with ``event``.

        Returns:
            Failures of listeners that raised, in invocation order.
        """
        self._dispatch_count += 1
        call_args: Mapping[str, Any] = args if args is not None else {}

        registrations = self._registry.listeners_for(kind)
        if not registrations:
            logger.debug("No extension listeners registered for '%s'", kind)
            return []

        logger.debug(
            "Dispatching extension event for '%s' to %d listener(s)",
            kind,
            len(registrations),
        )

        failures: list[ListenerFailure] = []
        for registration in registrations:
            failure = await self._invoke_listener(registration, event, call_args)
            if failure is not None:
                failures.append(failure)

        return failures

    async def _invoke_listener(
        self,
        registration: ExtensionListenerRegistration,
        event: ExtensionDataEvent,
        args: Mapping[str, Any],
    ) -> ListenerFailure | None:
        checkpoint = event._checkpoint()
        target = event.target

        try:
            outcome = registration.listener(event, target, args)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            event._restore(checkpoint)
            self._failure_count += 1

            failure = ListenerFailure(
                kind=registration.kind,
                listener=registration.name,
                cause=exc,
                entity_id=getattr(target, "id", None),
            )
            logger.error(
                "Extension listener '%s' failed for %s %r: %s",
                registration.name,
                registration.kind,
                failure.entity_id,
                exc,
                exc_info=True,
            )
            return failure

        logger.debug(
            "Extension listener '%s' completed for '%s'",
            registration.name,
            registration.kind,
        )
        return None

    def reset_counters(self) -> None:
        self._dispatch_count = 0
        self._failure_count = 0
