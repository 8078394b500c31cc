from __future__ import annotations

import pytest

from devkitchen.hub.core.extension.registry import ExtensionListenerRegistry


def listener_a(event, entity, args):
    event.add_extension_data("a", {})


def listener_b(event, entity, args):
    event.add_extension_data("b", {})


def listener_c(event, entity, args):
    event.add_extension_data("c", {})


def test_listeners_for_unknown_kind_is_empty() -> None:
    registry = ExtensionListenerRegistry()

    assert registry.listeners_for("organization") == ()
    assert "organization" not in registry


def test_register_preserves_order() -> None:
    registry = ExtensionListenerRegistry()

    registry.register("organization", listener_a)
    registry.register("organization", listener_b)
    registry.register("user", listener_c)

    assert [r.listener for r in registry.listeners_for("organization")] == [
        listener_a,
        listener_b,
    ]
    assert [r.listener for r in registry.listeners_for("user")] == [listener_c]
    assert len(registry) == 3
    assert sorted(registry.kinds()) == ["organization", "user"]


def test_same_listener_registered_twice_is_kept_twice() -> None:
    registry = ExtensionListenerRegistry()

    registry.register("organization", listener_a)
    registry.register("organization", listener_a)

    assert len(registry.listeners_for("organization")) == 2


def test_default_name_is_qualified_name() -> None:
    registry = ExtensionListenerRegistry()

    registration = registry.register("organization", listener_a)

    assert registration.name.endswith("listener_a")
    assert registration.kind == "organization"


def test_explicit_name_is_used() -> None:
    registry = ExtensionListenerRegistry()

    registration = registry.register("organization", listener_a, name="billing")

    assert registration.name == "billing"
    assert registry.describe() == {"organization": ["billing"]}


def test_listeners_for_returns_snapshot() -> None:
    registry = ExtensionListenerRegistry()
    registry.register("organization", listener_a)

    listeners = registry.listeners_for("organization")
    registry.register("organization", listener_b)

    assert len(listeners) == 1
    assert isinstance(listeners, tuple)


def test_unregister_keeps_relative_order() -> None:
    registry = ExtensionListenerRegistry()
    for listener in (listener_a, listener_b, listener_c):
        registry.register("organization", listener)

    assert registry.unregister("organization", listener_b) is True

    assert [r.listener for r in registry.listeners_for("organization")] == [
        listener_a,
        listener_c,
    ]


def test_unregister_unknown_returns_false() -> None:
    registry = ExtensionListenerRegistry()

    assert registry.unregister("organization", listener_a) is False


def test_register_rejects_bad_input() -> None:
    registry = ExtensionListenerRegistry()

    with pytest.raises(ValueError):
        registry.register("", listener_a)
    with pytest.raises(TypeError):
        registry.register("organization", "not callable")  # type: ignore[arg-type]


def test_clear() -> None:
    registry = ExtensionListenerRegistry()
    registry.register("organization", listener_a)
    registry.register("user", listener_b)

    assert registry.clear() == 2
    assert len(registry) == 0
