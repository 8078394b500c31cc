from devkitchen.hub.core.modules.config import (
    DependencySpec,
    ModuleSpec,
    ModulesConfig,
    load_modules_config,
)
from devkitchen.hub.core.modules.loader import load_and_register_modules

__all__ = [
    "DependencySpec",
    "ModuleSpec",
    "ModulesConfig",
    "load_modules_config",
    "load_and_register_modules",
]
