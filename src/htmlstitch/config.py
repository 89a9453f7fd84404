#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the htmlstitch CLI.

A configuration file holds two optional tables, ``compose`` and ``fetch``,
whose keys are the fields of ``ComposeOptions`` and ``FetchOptions``::

    [compose]
    max_depth = 4
    strict_head = false

    [fetch]
    timeout = 2.5
    base_url = "https://fragments.internal"

TOML, YAML and JSON files are supported, as is a ``[tool.htmlstitch]``
section in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from htmlstitch.exceptions import ValidationError
from htmlstitch.options import ComposeOptions, FetchOptions

CONFIG_FILENAMES = [".htmlstitch.toml", ".htmlstitch.yaml", ".htmlstitch.yml", ".htmlstitch.json"]
CONFIG_SECTIONS = ("compose", "fetch")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.htmlstitch]`` table of a pyproject.toml, or an empty dict."""
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get("htmlstitch", {})
    if not isinstance(config, dict):
        raise ValidationError(
            f"[tool.htmlstitch] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching ``start_dir`` and its parents.

    Dedicated config files win over ``pyproject.toml``; a ``pyproject.toml``
    only counts when it has a ``[tool.htmlstitch]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except (tomllib.TOMLDecodeError, ValidationError, OSError):
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the parent directories or the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary with optional ``compose`` and ``fetch`` tables

    Raises
    ------
    ValidationError
        If the file cannot be read or parsed, or has an unexpected shape

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ValidationError(f"Configuration file does not exist: {config_path}", parameter_name="config")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            config = _load_pyproject_section(config_path)
        elif ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ValidationError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except ValidationError:
        raise
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(f"Error reading config file {config_path}: {e}", original_error=e) from e

    if not isinstance(config, dict):
        raise ValidationError(f"Config file {config_path} must contain a table, got {type(config).__name__}")

    unknown = set(config) - set(CONFIG_SECTIONS)
    if unknown:
        raise ValidationError(f"Unknown section(s) in {config_path}: {', '.join(sorted(unknown))}")
    for section in CONFIG_SECTIONS:
        if not isinstance(config.get(section, {}), dict):
            raise ValidationError(f"[{section}] in {config_path} must be a table")

    return config


def options_from_config(
    config: Dict[str, Any],
    compose_overrides: Optional[Dict[str, Any]] = None,
    fetch_overrides: Optional[Dict[str, Any]] = None,
) -> tuple[ComposeOptions, FetchOptions]:
    """Build option objects from a config mapping, applying CLI overrides on top.

    Override values of ``None`` are ignored so unset CLI flags keep the file value.
    """
    compose_values = dict(config.get("compose", {}))
    fetch_values = dict(config.get("fetch", {}))
    compose_values.update({k: v for k, v in (compose_overrides or {}).items() if v is not None})
    fetch_values.update({k: v for k, v in (fetch_overrides or {}).items() if v is not None})
    return ComposeOptions.from_mapping(compose_values), FetchOptions.from_mapping(fetch_values)
