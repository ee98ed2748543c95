#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the hexdiff CLI.

Settings that would otherwise be repeated on every invocation, typically
the ignore ranges of a device's bootloader or calibration area, can live
in a configuration file:

.. code-block:: toml

    # .hexdiff.toml
    all = false
    ignore = ["0:1FFF", "7F000:"]
    log_level = "INFO"

The same keys are accepted in YAML, JSON, or a ``[tool.hexdiff]`` table
in ``pyproject.toml``.
"""

import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from hexdiff.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from hexdiff.exceptions import ValidationError

# Recognised keys and the types their values must have
CONFIG_SCHEMA: Dict[str, tuple[type, ...]] = {
    "all": (bool,),
    "json": (bool,),
    "rich": (bool,),
    "ignore": (list, str),
    "log_level": (str,),
    "log_file": (str,),
    "trace": (bool,),
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.hexdiff]`` table from pyproject.toml.

    Returns an empty dict when the table is missing.
    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Invalid TOML in {pyproject_path}: {e}", parameter_name="config", original_error=e) from e
    except OSError as e:
        raise ValidationError(f"Error reading {pyproject_path}: {e}", parameter_name="config", original_error=e) from e

    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(section).__name__}",
            parameter_name="config",
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    In each directory the dedicated files are checked first, in
    ``CONFIG_FILENAMES`` order, then ``pyproject.toml`` if it has a
    ``[tool.hexdiff]`` table.

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
            except ValidationError:
                # Someone else's broken pyproject.toml should not stop discovery
                pass

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The search walks from ``start_dir`` (or the cwd) up to the filesystem
    root, then falls back to the dedicated files in the home directory.
    """
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
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ValidationError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ValidationError(f"Configuration file does not exist: {config_path}", parameter_name="config")
    if not config_path.is_file():
        raise ValidationError(f"Configuration path is not a file: {config_path}", parameter_name="config")

    ext = config_path.suffix.lower()
    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ValidationError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", parameter_name="config"
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(
            f"Invalid syntax in config file {config_path}: {e}", parameter_name="config", original_error=e
        ) from e
    except OSError as e:
        raise ValidationError(
            f"Error reading config file {config_path}: {e}", parameter_name="config", original_error=e
        ) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValidationError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}",
            parameter_name="config",
        )
    return config


def validate_config(config: Dict[str, Any]) -> tuple[Dict[str, Any], list[str]]:
    """Check value types and separate out unknown keys.

    Parameters
    ----------
    config : dict
        Raw configuration mapping.

    Returns
    -------
    tuple of (dict, list of str)
        The recognised settings, with a string ``ignore`` value wrapped in
        a list, and the sorted names of keys that were not recognised.

    Raises
    ------
    ValidationError
        If a recognised key has a value of the wrong type.

    """
    settings: Dict[str, Any] = {}
    unknown: list[str] = []

    for key, value in config.items():
        expected = CONFIG_SCHEMA.get(key)
        if expected is None:
            unknown.append(key)
            continue
        if not isinstance(value, expected):
            names = " or ".join(t.__name__ for t in expected)
            raise ValidationError(
                f"Config key '{key}' must be {names}, got {type(value).__name__}",
                parameter_name=key,
                parameter_value=value,
            )
        settings[key] = value

    ignore = settings.get("ignore")
    if isinstance(ignore, str):
        settings["ignore"] = [ignore]
    elif ignore is not None:
        if not all(isinstance(item, str) for item in ignore):
            raise ValidationError("Config key 'ignore' must be a list of strings", parameter_name="ignore")

    return settings, sorted(unknown)


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> tuple[Dict[str, Any], Optional[Path]]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (HEXDIFF_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    tuple of (dict, Path or None)
        The loaded configuration (empty if none found) and its source.

    """
    if explicit_path:
        return load_config_file(explicit_path), Path(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path), Path(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path), discovered_path

    return {}, None
