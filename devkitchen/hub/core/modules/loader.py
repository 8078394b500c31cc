from __future__ import annotations

import logging

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from devkitchen.hub.contracts.extension import HubModule, ListenerRegistry
from devkitchen.hub.core.errors import ModuleLoadError
from devkitchen.hub.core.loader import import_attr
from devkitchen.hub.core.modules.config import ModulesConfig

logger = logging.getLogger(__name__)


def _satisfies(version: str, specifier: str) -> bool:
    try:
        return Version(version) in SpecifierSet(specifier)
    except (InvalidSpecifier, InvalidVersion) as exc:
        raise ModuleLoadError(
            f"Cannot compare version {version!r} with {specifier!r}"
        ) from exc


def load_and_register_modules(
    *, registry: ListenerRegistry, cfg: ModulesConfig
) -> list[HubModule]:
    """
    Import enabled modules, validate versions and dependencies, then let
    each module register its extension listeners.

    Modules register in configuration order, which fixes the order their
    listeners run in.

    Returns:
        The registered modules.
    """
    modules: dict[str, HubModule] = {}

    for spec in cfg.modules:
        if not spec.enabled:
            logger.info("Skipping disabled module: %s", spec.name)
            continue

        try:
            module: HubModule = import_attr(spec.import_path)
        except Exception:
            logger.exception("Failed importing module %s", spec.import_path)
            raise

        if module.name != spec.name:
            raise ModuleLoadError(f"Module name mismatch: {spec.name} vs {module.name}")

        if not _satisfies(module.version, spec.version):
            raise ModuleLoadError(
                f"Module '{module.name}' version {module.version} "
                f"does not satisfy '{spec.version}'"
            )

        configure = getattr(module, "configure", None)
        if callable(configure) and spec.config:
            configure(spec.config)

        modules[module.name] = module

    # dependencies
    for spec in cfg.modules:
        if not spec.enabled:
            continue
        for dep in spec.depends_on:
            if dep.name not in modules:
                raise ModuleLoadError(
                    f"Module '{spec.name}' depends on missing '{dep.name}'"
                )
            if not _satisfies(modules[dep.name].version, dep.version):
                raise ModuleLoadError(
                    f"Module '{spec.name}' dependency version mismatch on '{dep.name}'"
                )

    # register
    for name, module in modules.items():
        try:
            module.register(registry)
        except Exception:
            logger.exception("Error registering module %s", name)
            raise
        logger.info("Registered module %s %s", name, module.version)

    return list(modules.values())
