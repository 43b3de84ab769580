#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the md2textile CLI.

A configuration file holds two optional tables, ``parser`` and ``renderer``,
whose keys are the fields of ``MarkdownParserOptions`` and
``TextileRendererOptions``::

    # .md2textile.toml
    [parser]
    max_nesting_depth = 50

    [renderer]
    code_span_style = "font-family: monospace;"

The same layout is read from ``.md2textile.yaml``/``.yml``/``.json`` or from
the ``[tool.md2textile]`` table of a ``pyproject.toml``.
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

from md2textile.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from md2textile.exceptions import ConfigError
from md2textile.options.markdown import MarkdownParserOptions
from md2textile.options.textile import TextileRendererOptions

CONFIG_SECTIONS = ("parser", "renderer")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.md2textile]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.
    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root. In
    each directory the dedicated files (``.md2textile.toml``, ``.yaml``,
    ``.yml``, ``.json``) are checked first, then a ``pyproject.toml`` that
    has a ``[tool.md2textile]`` table.

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
            except ConfigError:
                # An unrelated, broken pyproject.toml does not stop the search
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

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
    ConfigError
        If the file cannot be read, parsed, or has invalid format

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
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
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml, .yml or .json", str(config_path)
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a mapping at root level, got {type(config).__name__}", str(config_path)
        )
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> tuple[Dict[str, Any], Optional[Path]]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MD2TEXTILE_CONFIG)
    3. Auto-discovered config file in the working directory or its parents

    Returns
    -------
    tuple of (dict, Path or None)
        Loaded configuration (empty if none was found) and its source path

    """
    for candidate in (explicit_path, env_var_path):
        if candidate:
            return load_config_file(candidate), Path(candidate)

    discovered_path = find_config_in_parents()
    if discovered_path:
        return load_config_file(discovered_path), discovered_path

    return {}, None


def _build_section(section: str, values: Any, options_class: type, source: Optional[Path]) -> Any:
    source_name = str(source) if source else None
    if not isinstance(values, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(values).__name__}", source_name)

    known = set(options_class.field_names())
    unknown = sorted(k for k in values if k not in known)
    if unknown:
        raise ConfigError(
            f"Unknown {section} option(s): {', '.join(unknown)}. Valid options: {', '.join(sorted(known))}",
            source_name,
        )

    try:
        return options_class(**values)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {section} options: {e}", source_name, e) from e


def build_options(
    config: Dict[str, Any], source: Optional[Path] = None
) -> tuple[MarkdownParserOptions, TextileRendererOptions]:
    """Turn a loaded configuration dictionary into options objects.

    Parameters
    ----------
    config : dict
        Configuration with optional ``parser`` and ``renderer`` tables
    source : Path, optional
        Where the configuration came from (for error messages)

    Returns
    -------
    tuple of (MarkdownParserOptions, TextileRendererOptions)

    Raises
    ------
    ConfigError
        On unknown sections or keys, or invalid values

    """
    unknown_sections = sorted(k for k in config if k not in CONFIG_SECTIONS)
    if unknown_sections:
        raise ConfigError(
            f"Unknown configuration section(s): {', '.join(unknown_sections)}. "
            f"Expected: {', '.join(CONFIG_SECTIONS)}",
            str(source) if source else None,
        )

    parser_options = _build_section("parser", config.get("parser", {}), MarkdownParserOptions, source)
    renderer_options = _build_section("renderer", config.get("renderer", {}), TextileRendererOptions, source)
    return parser_options, renderer_options
