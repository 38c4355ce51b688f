"""Layered YAML configuration.

A run's config is built from ``configs/default.yaml``, then any number of
scenario files, then ``--set key.sub=value`` overrides from the command
line. Keys are addressed with dotted paths such as ``model.p_death``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import yaml

_MISSING = object()


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping from *path* (an empty file gives ``{}``)."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Return a new dict with *override* merged over *base*, section by section."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def get_path(config: dict, dotted: str, default: Any = _MISSING) -> Any:
    """Look up a dotted key; without a *default*, a missing key is a ``ValueError``."""
    node: Any = config
    for key in dotted.split("."):
        if not isinstance(node, dict) or key not in node:
            if default is _MISSING:
                raise ValueError(f"Missing config key {dotted!r}")
            return default
        node = node[key]
    return node


def set_path(config: dict, dotted: str, value: Any) -> None:
    """Assign *value* at a dotted key, creating intermediate sections."""
    *parents, leaf = dotted.split(".")
    node = config
    for key in parents:
        node = node.setdefault(key, {})
        if not isinstance(node, dict):
            raise ValueError(f"Cannot set {dotted!r}: {key!r} is not a mapping")
    node[leaf] = value


def apply_overrides(config: dict, overrides: Iterable[str]) -> dict:
    """Apply ``key.sub=value`` overrides in place and return *config*.

    Values are read as YAML scalars, so ``true`` is a bool and ``42`` an int.
    """
    for override in overrides:
        dotted, sep, raw_value = override.partition("=")
        if not sep:
            raise ValueError(f"Override must be key=value, got: {override!r}")
        if not dotted:
            raise ValueError(f"Override has an empty key: {override!r}")
        set_path(config, dotted, yaml.safe_load(raw_value))
    return config


def load_config(
    default_path: str | Path = "configs/default.yaml",
    scenario_paths: Iterable[str | Path] = (),
    overrides: Iterable[str] = (),
) -> dict[str, Any]:
    """Merge the default config, each scenario in order, then the overrides."""
    config = load_yaml(default_path)
    for path in scenario_paths:
        config = deep_merge(config, load_yaml(path))
    return apply_overrides(config, overrides)
