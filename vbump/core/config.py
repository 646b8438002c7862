"""Typed release configuration loading.

The config file names the base branch and the two version-bearing files:

    {
        "develop_branch": "develop",
        "android": "android/app/build.gradle",
        "package": "package.json"
    }

JSON is the historical format (``slave.json``); TOML files with the same
keys are accepted as well. Relative paths are resolved against the
directory holding the config file.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from .result import Err, Ok, Result

StrDict = dict[str, object]

__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "load_config",
]

DEFAULT_CONFIG_NAME = "slave.json"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Release configuration.

    Attributes:
        develop_branch: Branch the release branch is cut from.
        android: Path to the native build descriptor (build.gradle).
        package: Path to the package manifest (package.json).
    """

    develop_branch: str
    android: Path
    package: Path

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path) -> Config:
        """Create Config from a parsed mapping.

        Raises:
            ValueError: if a key is missing or not a non-empty string.
        """
        develop_branch = _require_str(data, "develop_branch")
        android = _require_str(data, "android")
        package = _require_str(data, "package")

        return cls(
            develop_branch=develop_branch,
            android=_resolve(base_dir, android),
            package=_resolve(base_dir, package),
        )


def _require_str(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"missing or empty '{key}'")
    return value.strip()


def _as_table(obj: object) -> StrDict | None:
    if not isinstance(obj, dict):
        return None
    table = cast(dict[object, object], obj)
    if not all(isinstance(k, str) for k in table):
        return None
    return cast(StrDict, table)


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _parse_document(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a JSON or TOML config file, depending on its suffix."""
    import tomllib

    is_toml = path.suffix.lower() == ".toml"
    try:
        text = path.read_text(encoding="utf-8")
        data_obj: object = tomllib.loads(text) if is_toml else json.loads(text)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON syntax: {e}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = _as_table(data_obj)
    if data is None:
        kind = "TOML table" if is_toml else "JSON object"
        return Err(ConfigError(f"Config root must be a {kind}", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate the release configuration.

    Args:
        path: Path to the JSON or TOML config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_document(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value, base_dir=path.parent)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
