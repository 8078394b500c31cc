# devkitchen/hub/core/loader.py
"""
Shared utilities for dynamic loading and configuration processing.
"""
from __future__ import annotations

import importlib
import logging
import os
import re
from glob import glob
from pathlib import Path
from typing import Any, Iterable

import yaml

logger = logging.getLogger(__name__)

# ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def import_attr(path: str) -> Any:
    """
    Import an attribute given as 'package.module:attribute'.

    Raises:
        ValueError: If the path has no ':' separator.
        ImportError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
    """
    if ":" not in path:
        raise ValueError(f"Invalid import path '{path}', expected 'module:attr'")

    mod_name, attr = path.split(":", 1)

    try:
        mod = importlib.import_module(mod_name)
    except ImportError as exc:
        logger.error("Failed to import module '%s'", mod_name)
        raise ImportError(f"Cannot import module '{mod_name}'") from exc

    try:
        return getattr(mod, attr)
    except AttributeError as exc:
        logger.error("Module '%s' has no attribute '%s'", mod_name, attr)
        raise AttributeError(f"Module '{mod_name}' has no attribute '{attr}'") from exc


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute ${VAR} and ${VAR:-default} in strings, dicts
    and lists. A missing variable without default raises ValueError.
    """
    if isinstance(value, str):
        return _substitute_string(value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def _substitute_string(value: str) -> str:
    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        default = match.group(2)

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if default is not None:
            return default
        raise ValueError(
            f"Environment variable '{var_name}' is not set and no default provided"
        )

    return ENV_VAR_PATTERN.sub(replacer, value)


def load_yaml_files(patterns: Iterable[str]) -> list[dict[str, Any]]:
    """
    Load every YAML file matching the glob patterns, in sorted path order.

    Later documents take precedence when the caller merges them.
    """
    patterns = list(patterns)
    files: list[Path] = []

    for pattern in patterns:
        files.extend(Path(m).resolve() for m in glob(pattern))

    files = sorted(set(files))

    if not files:
        logger.warning("No config files found matching patterns: %s", patterns)
        return []

    logger.info("Loading config files: %s", [str(f) for f in files])

    out: list[dict[str, Any]] = []
    for f in files:
        with f.open("r", encoding="utf-8") as fh:
            out.append(yaml.safe_load(fh) or {})

    return out
