from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable

from devkitchen.hub.core.errors import ModuleLoadError
from devkitchen.hub.core.loader import load_yaml_files, substitute_env_vars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencySpec:
    name: str
    version: str


@dataclass(frozen=True)
class ModuleSpec:
    """
    Specification of a contributor module from configuration.

    Attributes:
        name: Module name, must match the imported module's ``name``.
        version: PEP 440 specifier the module version must satisfy.
        import_path: 'package.module:attribute' of the module object.
        enabled: Disabled modules are skipped entirely.
        depends_on: Other modules (and versions) this one requires.
        config: Free-form settings handed to the module.
    """

    name: str
    version: str
    import_path: str
    enabled: bool = True
    depends_on: list[DependencySpec] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ModulesConfig:
    modules: list[ModuleSpec] = field(default_factory=list)


def load_modules_config(patterns: Iterable[str]) -> ModulesConfig:
    """
    Load module specifications from YAML files.

    Expected YAML structure:
    ```yaml
    modules:
      - name: real_estate
        version: ">=1.0.0"
        import: devkitchen.hub.modules.real_estate.module:module
        enabled: true
        depends_on: []
        config:
          namespace: realEstate
    ```

    A module declared in several files keeps the definition from the
    last file (files are read in sorted path order).
    """
    yamls = load_yaml_files(patterns)

    modules_map: Dict[str, dict[str, Any]] = {}
    for data in yamls:
        for m in data.get("modules", []) or []:
            if "name" not in m:
                raise ModuleLoadError("Module entry missing required 'name' field")
            if "import" not in m:
                raise ModuleLoadError(
                    f"Module '{m['name']}' missing required 'import' field"
                )
            modules_map[m["name"]] = m  # override by later files

    specs: list[ModuleSpec] = []
    for m in modules_map.values():
        deps = [DependencySpec(**d) for d in (m.get("depends_on") or [])]
        specs.append(
            ModuleSpec(
                name=m["name"],
                version=str(m.get("version", ">=0")),
                import_path=m["import"],
                enabled=bool(m.get("enabled", True)),
                depends_on=deps,
                config=substitute_env_vars(m.get("config") or {}),
            )
        )

    logger.info("Loaded %d module spec(s): %s", len(specs), [s.name for s in specs])

    return ModulesConfig(modules=specs)
