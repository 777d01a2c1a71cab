"""Load PawprintConfig from pawprint.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from pawprint._errors import ConfigError
from pawprint.config import PawprintConfig

_KNOWN_KEYS = frozenset({"site", "verbose", "log_level", "color", "bug_tracker"})


def load_config(root: Path, **overrides: object) -> PawprintConfig:
    """Load PawprintConfig from root, optionally merging pawprint.yaml.

    Looks for pawprint.yaml, pawprint.yml, or pawprint.toml in root. If found,
    loads and merges with overrides. Overrides set to ``None`` are ignored so
    that unset CLI flags do not mask file values.

    Raises:
        ConfigError: If the config file cannot be parsed or holds a bad value.

    """
    file_config = _read_pawprint_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    _validate(merged)
    return PawprintConfig(root=root, **merged)  # type: ignore[arg-type]


def _validate(merged: dict[str, object]) -> None:
    """Reject values of the wrong type; YAML strings like ``"no"`` are not bools."""
    level = merged.get("log_level", "low")
    if level not in ("high", "low"):
        msg = f"log_level must be 'high' or 'low', got {level!r}"
        raise ConfigError(msg)
    verbose = merged.get("verbose", False)
    if not isinstance(verbose, bool):
        msg = f"verbose must be true or false, got {verbose!r}"
        raise ConfigError(msg)
    color = merged.get("color")
    if color is not None and not isinstance(color, bool):
        msg = f"color must be true, false or null, got {color!r}"
        raise ConfigError(msg)
    for key in ("site", "bug_tracker"):
        if key in merged and not isinstance(merged[key], str):
            msg = f"{key} must be a string, got {merged[key]!r}"
            raise ConfigError(msg)


def _read_pawprint_config(root: Path) -> dict[str, object]:
    """Read pawprint config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pawprint.yaml", "pawprint.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pawprint.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ConfigError(msg) from exc
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_pawprint_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ConfigError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pawprint_section(data)


def _flatten_pawprint_section(data: dict[str, object]) -> dict[str, object]:
    """Extract pawprint.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("pawprint")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
