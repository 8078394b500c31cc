# devkitchen/hub/core/extension/event.py
"""
Accumulator passed to every extension listener during one resolution.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping


class ExtensionDataEvent:
    """
    Collects namespaced contributions for one target entity.

    A namespace written twice keeps the last value (last-write-wins); the
    value is replaced, never deep-merged. The target is exposed read-only
    and is never modified by the event.

    Example:
        event = ExtensionDataEvent(organization)
        event.add_extension_data("billing", {"plan": "pro"})
        event.get_all_extension_data()  # {"billing": {"plan": "pro"}}
    """

    __slots__ = ("_target", "_contributions")

    def __init__(self, target: Any) -> None:
        self._target = target
        self._contributions: dict[str, Any] = {}

    @property
    def target(self) -> Any:
        """The entity being extended."""
        return self._target

    def add_extension_data(self, namespace: str, data: Any) -> None:
        """
        Store ``data`` under ``namespace``, replacing any earlier value.

        Raises:
            ValueError: If the namespace is empty or not a string.
        """
        if not isinstance(namespace, str) or not namespace:
            raise ValueError(f"Invalid extension namespace {namespace!r}")
        self._contributions[namespace] = data

    def get_extension_data(self, namespace: str) -> Any | None:
        return self._contributions.get(namespace)

    def has_extension_data(self, namespace: str) -> bool:
        return namespace in self._contributions

    def get_all_extension_data(self) -> Mapping[str, Any]:
        """Read-only snapshot of all contributions at call time."""
        return MappingProxyType(dict(self._contributions))

    @property
    def namespaces(self) -> list[str]:
        return list(self._contributions)

    # ---- resolver support ------------------------------------------

    def _checkpoint(self) -> dict[str, Any]:
        return dict(self._contributions)

    def _restore(self, checkpoint: dict[str, Any]) -> None:
        self._contributions = dict(checkpoint)

    def __len__(self) -> int:
        return len(self._contributions)

    def __repr__(self) -> str:
        return (
            f"ExtensionDataEvent(target={self._target!r}, "
            f"namespaces={list(self._contributions)})"
        )
