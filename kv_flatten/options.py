"""Flattening options and their configuration sources.

Options can be built directly, from a plain mapping (using either the
snake_case field names or their camelCase spellings such as ``sortKeys``), or
from a YAML config file.

Example ``options.yml``::

    options:
      delimiter: "."
      joiner: "|"
      include_null_undefined: false
      dedupe_array_values: true
      sort_keys: true
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

_ALIASES: Dict[str, str] = {
    "includeNullUndefined": "include_null_undefined",
    "dedupeArrayValues": "dedupe_array_values",
    "sortKeys": "sort_keys",
    "dedupe": "dedupe_array_values",
    "sep": "delimiter",
}


@dataclass(frozen=True)
class FlattenOptions:
    """Settings for a single flatten call.

    Attributes
    ----------
    delimiter : str
        Separator placed between path segments (default: ".").
    joiner : str
        String used to join the values collected under one path (default: ",").
    include_null_undefined : bool
        Emit ``None`` / ``UNDEFINED`` as ``"null"`` / ``"undefined"`` instead of
        skipping them (default: False).
    dedupe_array_values : bool
        Drop repeated values within one path (default: False).
    sort_keys : bool
        Sort output keys by plain string comparison (default: False).
    """
    delimiter: str = "."
    joiner: str = ","
    include_null_undefined: bool = False
    dedupe_array_values: bool = False
    sort_keys: bool = False

    def __post_init__(self) -> None:
        for name in ("delimiter", "joiner"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string, got {value!r}")
        for name in ("include_null_undefined", "dedupe_array_values", "sort_keys"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {value!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FlattenOptions":
        """Build options from a mapping; unknown keys raise ValueError."""
        return cls(**normalize_keys(data))

    def replace(self, **changes: Any) -> "FlattenOptions":
        """Return a copy with ``changes`` applied (aliases accepted)."""
        if not changes:
            return self
        return dataclasses.replace(self, **normalize_keys(changes))


def _field_names() -> List[str]:
    return [field.name for field in dataclasses.fields(FlattenOptions)]


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map alias names to field names and reject unknown keys."""
    known = _field_names()
    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            raise ValueError(f"unknown flatten option: {key!r}")
        out[name] = value
    return out


def resolve_options(
    options: FlattenOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> FlattenOptions:
    """Combine an options object or mapping with keyword overrides."""
    if options is None:
        resolved = FlattenOptions()
    elif isinstance(options, FlattenOptions):
        resolved = options
    elif isinstance(options, Mapping):
        resolved = FlattenOptions.from_mapping(options)
    else:
        raise TypeError(f"options must be FlattenOptions or a mapping, got {type(options).__name__}")
    return resolved.replace(**overrides)


def deep_get(d: Mapping[str, Any], keys: List[str], default: Any = None) -> Any:
    """Safely get nested dict value with default."""
    cur: Any = d
    for k in keys:
        if not isinstance(cur, Mapping) or k not in cur:
            return default
        cur = cur[k]
    return cur


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML config file."""
    if not path.exists():
        raise SystemExit(f"ERROR: config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_options(path: Path | str) -> FlattenOptions:
    """Read options from a YAML file.

    Keys are taken from a top-level ``options`` section when present,
    otherwise from the document root.
    """
    cfg = load_yaml(Path(path))
    if not isinstance(cfg, Mapping):
        raise SystemExit(f"ERROR: config must be a mapping: {path}")
    section = deep_get(cfg, ["options"], cfg) or {}
    return FlattenOptions.from_mapping(section)
