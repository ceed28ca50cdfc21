"""
ordered-collection — settings loader.

Purpose
- Resolve effective collection settings from defaults, a TOML or YAML file,
  ``ORDERED_COLLECTION_*`` environment variables, and explicit overrides.

Precedence
- overrides > env > file > defaults.

Files
- TOML (``tomllib``): ``[ordered_collection]`` or ``[tool.ordered_collection]``,
  so the settings may live in ``pyproject.toml``.
- YAML (PyYAML): an ``ordered_collection:`` mapping, or the root mapping.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final, Literal

import yaml

from ordered_collection.constants import (
    DEFAULT_GENERATED_ID_PREFIX,
    ENV_PREFIX,
    ID_SUFFIX_SEPARATOR,
    LOG_FORMATS,
    SETTINGS_TABLE,
)

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


class ConfigLoadError(ValueError):
    """Raised when settings cannot be loaded or values cannot be coerced."""


@dataclass(frozen=True, slots=True)
class CollectionSettings:
    """Effective settings for collections and their logging."""

    generated_id_prefix: str = DEFAULT_GENERATED_ID_PREFIX
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    warn_on_dangling: bool = False

    def __post_init__(self) -> None:
        prefix = self.generated_id_prefix
        if not isinstance(prefix, str) or not prefix:
            raise ConfigLoadError("generated_id_prefix must be a non-empty string")
        if ID_SUFFIX_SEPARATOR in prefix:
            raise ConfigLoadError(
                f"generated_id_prefix must not contain '{ID_SUFFIX_SEPARATOR}'"
            )
        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigLoadError(
                f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))} "
                f"(got {self.log_level!r})"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigLoadError(
                f"log_format must be one of {', '.join(LOG_FORMATS)} (got {self.log_format!r})"
            )
        if not isinstance(self.warn_on_dangling, bool):
            raise ConfigLoadError("warn_on_dangling must be a boolean")


_FIELD_KINDS: Final[dict[str, Literal["str", "bool"]]] = {
    "generated_id_prefix": "str",
    "log_level": "str",
    "log_format": "str",
    "warn_on_dangling": "bool",
}


def load_settings(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> CollectionSettings:
    """Load effective settings with precedence: overrides > env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)

    settings = CollectionSettings()
    if config_path is not None:
        settings = _apply(settings, load_settings_file(config_path), source=str(config_path))
    settings = _apply(settings, _collect_env_overrides(env_map), source="environment")
    if overrides:
        settings = _apply(settings, dict(overrides), source="overrides")
    return settings


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Return the raw settings mapping from a TOML or YAML file."""

    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise ConfigLoadError(f"settings file not found: {resolved}")

    if resolved.suffix.lower() in _YAML_SUFFIXES:
        return _load_yaml_file(resolved)
    return _load_toml_file(resolved)


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read settings file {path}: {exc}") from exc

    table = parsed.get(SETTINGS_TABLE)
    if table is None:
        tool = parsed.get("tool")
        table = tool.get(SETTINGS_TABLE) if isinstance(tool, Mapping) else None
    if table is None:
        return {}
    if not isinstance(table, Mapping):
        raise ConfigLoadError(f"[{SETTINGS_TABLE}] must be a table: {path}")
    return dict(table)


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read settings file {path}: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigLoadError(f"settings root must be a mapping: {path}")

    section = parsed.get(SETTINGS_TABLE, parsed)
    if not isinstance(section, Mapping):
        raise ConfigLoadError(f"'{SETTINGS_TABLE}' must be a mapping: {path}")
    return dict(section)


def _apply(
    settings: CollectionSettings, payload: Mapping[str, object], *, source: str
) -> CollectionSettings:
    unknown = sorted(key for key in payload if key not in _FIELD_KINDS)
    if unknown:
        raise ConfigLoadError(f"unknown settings key(s) in {source}: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for key in sorted(payload):
        value = payload[key]
        expected = _FIELD_KINDS[key]
        if expected == "bool" and not isinstance(value, bool):
            raise ConfigLoadError(f"{source}: '{key}' must be a boolean")
        if expected == "str" and not isinstance(value, str):
            raise ConfigLoadError(f"{source}: '{key}' must be a string")
        changes[key] = value

    if "log_level" in changes:
        changes["log_level"] = changes["log_level"].strip().upper()
    return replace(settings, **changes)


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in sorted(_FIELD_KINDS):
        env_name = _env_name_for_key(key)
        raw = environ.get(env_name)
        if raw is None:
            continue
        overrides[key] = _coerce_env(raw, _FIELD_KINDS[key], env_name)
    return overrides


def _coerce_env(raw: str, value_type: Literal["str", "bool"], env_name: str) -> object:
    value = raw.strip()
    if value_type == "str":
        return value

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(f"{env_name} must be a boolean (true/false/1/0/yes/no/on/off)")


def _env_name_for_key(key: str) -> str:
    return ENV_PREFIX + key.upper()


__all__ = [
    "CollectionSettings",
    "ConfigLoadError",
    "load_settings",
    "load_settings_file",
]
