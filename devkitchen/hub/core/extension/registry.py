# devkitchen/hub/core/extension/registry.py
"""
Extension listener registry.

Stores, per entity kind, the ordered list of listeners that contribute
extension data. Modules register at startup; afterwards the registry is
only read.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterator

from devkitchen.hub.contracts.extension import (
    ExtensionListener,
    ExtensionListenerRegistration,
)

logger = logging.getLogger(__name__)


def _listener_name(listener: ExtensionListener) -> str:
    name = getattr(listener, "__qualname__", None) or getattr(listener, "__name__", None)
    if name is None:
        name = type(listener).__qualname__
    module = getattr(listener, "__module__", None)
    return f"{module}.{name}" if module else name


class ExtensionListenerRegistry:
    """
    Thread-safe registry of extension listeners keyed by entity kind.

    Order of registration is the order of invocation. Registering the
    same listener twice makes it run twice.

    Example:
        registry = ExtensionListenerRegistry()
        registry.register("organization", inject_billing, name="billing")

        for registration in registry.listeners_for("organization"):
            ...
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[ExtensionListenerRegistration]] = {}
        self._lock = threading.RLock()

    def register(
        self,
        kind: str,
        listener: ExtensionListener,
        *,
        name: str | None = None,
    ) -> ExtensionListenerRegistration:
        """
        Append a listener for an entity kind.

        Args:
            kind: Entity kind, e.g. "organization".
            listener: Callable ``(event, entity, args)``, sync or async.
            name: Optional display name; defaults to the listener's qualified name.

        Returns:
            The registration record.

        Raises:
            ValueError: If kind is empty.
            TypeError: If listener is not callable.
        """
        if not kind:
            raise ValueError("Entity kind must be a non-empty string")
        if not callable(listener):
            raise TypeError(f"Listener for '{kind}' is not callable: {listener!r}")

        registration = ExtensionListenerRegistration(
            kind=kind,
            listener=listener,
            name=name or _listener_name(listener),
        )

        with self._lock:
            self._listeners.setdefault(kind, []).append(registration)
            position = len(self._listeners[kind])

        logger.info(
            "Registered extension listener '%s' for '%s' (position %d)",
            registration.name,
            kind,
            position,
        )
        return registration

    def unregister(self, kind: str, listener: ExtensionListener) -> bool:
        """
        Remove the first registration of ``listener`` for ``kind``.

        Remaining listeners keep their relative order.

        Returns:
            True if a registration was removed, False otherwise.
        """
        with self._lock:
            registrations = self._listeners.get(kind, [])
            for index, registration in enumerate(registrations):
                if registration.listener == listener:
                    del registrations[index]
                    if not registrations:
                        del self._listeners[kind]
                    logger.info(
                        "Unregistered extension listener '%s' for '%s'",
                        registration.name,
                        kind,
                    )
                    return True

        logger.warning("Attempted to unregister unknown listener for '%s'", kind)
        return False

    def listeners_for(self, kind: str) -> tuple[ExtensionListenerRegistration, ...]:
        """Listeners for a kind in registration order (empty if none)."""
        with self._lock:
            return tuple(self._listeners.get(kind, ()))

    def kinds(self) -> list[str]:
        with self._lock:
            return list(self._listeners)

    def describe(self) -> dict[str, list[str]]:
        with self._lock:
            return {
                kind: [r.name for r in registrations]
                for kind, registrations in self._listeners.items()
            }

    def clear(self) -> int:
        """
        Remove all registrations.

        Returns:
            Number of registrations removed.
        """
        with self._lock:
            count = sum(len(r) for r in self._listeners.values())
            self._listeners.clear()
            logger.info("Cleared %d extension listener(s)", count)
            return count

    def __len__(self) -> int:
        with self._lock:
            return sum(len(r) for r in self._listeners.values())

    def __contains__(self, kind: str) -> bool:
        with self._lock:
            return bool(self._listeners.get(kind))

    def __iter__(self) -> Iterator[ExtensionListenerRegistration]:
        with self._lock:
            return iter([r for regs in self._listeners.values() for r in regs])
