# devkitchen/hub/core/extension/__init__.py
"""
Cross-module extension data.

Modules contribute namespaced data to entities they do not own:

    from devkitchen.hub.core.extension import (
        ExtensionListenerRegistry,
        ExtensionDataResolver,
    )

    registry = ExtensionListenerRegistry()

    def inject_billing(event, organization, args):
        event.add_extension_data("billing", {"plan": "pro"})

    registry.register("organization", inject_billing)

    resolver = ExtensionDataResolver(registry=registry)
    data = await resolver.resolve_extension_data(organization)
"""

from devkitchen.hub.core.extension.event import ExtensionDataEvent
from devkitchen.hub.core.extension.registry import ExtensionListenerRegistry
from devkitchen.hub.core.extension.resolver import ExtensionDataResolver

__all__ = [
    "ExtensionDataEvent",
    "ExtensionListenerRegistry",
    "ExtensionDataResolver",
]
