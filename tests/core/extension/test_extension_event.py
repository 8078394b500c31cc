from __future__ import annotations

import pytest

from devkitchen.hub.contracts.entity import Organization
from devkitchen.hub.core.extension.event import ExtensionDataEvent


def test_event_exposes_target_read_only(organization: Organization) -> None:
    event = ExtensionDataEvent(organization)

    assert event.target is organization
    with pytest.raises(AttributeError):
        event.target = Organization(id=2, name="Other")  # type: ignore[misc]


def test_add_extension_data_replaces_whole_namespace(organization: Organization) -> None:
    event = ExtensionDataEvent(organization)

    event.add_extension_data("billing", {"plan": "pro", "seats": 5})
    event.add_extension_data("billing", {"plan": "free"})

    assert event.get_extension_data("billing") == {"plan": "free"}
    assert len(event) == 1


def test_namespaces_keep_insertion_order(organization: Organization) -> None:
    event = ExtensionDataEvent(organization)

    event.add_extension_data("realEstate", {"creci": "123"})
    event.add_extension_data("billing", {"plan": "pro"})

    assert event.namespaces == ["realEstate", "billing"]
    assert list(event.get_all_extension_data()) == ["realEstate", "billing"]


def test_get_all_extension_data_is_read_only_snapshot(organization: Organization) -> None:
    event = ExtensionDataEvent(organization)
    event.add_extension_data("billing", {"plan": "pro"})

    snapshot = event.get_all_extension_data()
    event.add_extension_data("crm", {"owner": "bob"})

    assert "crm" not in snapshot
    with pytest.raises(TypeError):
        snapshot["crm"] = {}  # type: ignore[index]


def test_unknown_namespace_returns_none(organization: Organization) -> None:
    event = ExtensionDataEvent(organization)

    assert event.get_extension_data("missing") is None
    assert not event.has_extension_data("missing")


@pytest.mark.parametrize("namespace", ["", None, 3])
def test_invalid_namespace_rejected(organization: Organization, namespace) -> None:
    event = ExtensionDataEvent(organization)

    with pytest.raises(ValueError):
        event.add_extension_data(namespace, {"x": 1})


def test_event_never_mutates_target(organization: Organization) -> None:
    before = organization.model_dump()
    event = ExtensionDataEvent(organization)

    event.add_extension_data("billing", {"plan": "pro"})

    assert organization.model_dump() == before
