#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/config.py

"""Configuration file discovery and loading.

A configuration file holds up to three tables: ``conversion`` (fields of
ConversionOptions), ``pdf`` (fields of PdfBackendOptions) and ``styles``,
which overrides fonts and colors of the style registry by role::

    [conversion]
    highlight_style = "monokai"

    [pdf]
    page_size = "letter"

    [styles.fonts."H1-font"]
    family = "Times"
    size = 20
    bold = true
    color = "#000080"

    [styles.colors]
    "link-color" = "#0000ff"

Files are read from JSON, TOML, YAML or the ``[tool.mdlayout]`` table of a
``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from mdlayout.constants import CONFIG_FILENAMES
from mdlayout.elements import RGB
from mdlayout.exceptions import ConfigError
from mdlayout.options.conversion import ConversionOptions
from mdlayout.options.pdf import PdfBackendOptions
from mdlayout.styles import FontDescriptor, StyleRegistry

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MDLAYOUT_CONFIG"
CONFIG_SECTIONS = ("conversion", "pdf", "styles")
STYLE_SECTIONS = ("fonts", "colors")
FONT_KEYS = ("family", "size", "bold", "italic", "color")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mdlayout]`` table of a pyproject.toml, or an empty dict."""
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    config = data.get("tool", {}).get("mdlayout", {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.mdlayout] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def _read_config(config_path: Path) -> Any:
    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    elif ext in (".yaml", ".yml"):
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    elif ext == ".json":
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    raise ConfigError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path))


def load_config(config_path: Path | str) -> Dict[str, Any]:
    """Load and validate a configuration file.

    Parameters
    ----------
    config_path : Path or str
        JSON, TOML, YAML or pyproject.toml file

    Returns
    -------
    dict
        Configuration with (a subset of) the ``conversion``, ``pdf`` and
        ``styles`` tables

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed, or holds unknown keys

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    try:
        config = _read_config(config_path)
    except ConfigError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are ValueErrors
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a mapping at root level, got {type(config).__name__}", str(config_path)
        )

    validate_config(config, str(config_path))
    logger.debug(f"Loaded configuration from {config_path}")
    return config


def validate_config(config: Dict[str, Any], config_path: Optional[str] = None) -> None:
    """Reject unknown sections and style keys.

    Raises
    ------
    ConfigError
        On the first unknown key found

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown configuration section(s): {', '.join(unknown)}", config_path)

    for section in CONFIG_SECTIONS:
        if not isinstance(config.get(section, {}), dict):
            raise ConfigError(f"Configuration section '{section}' must be a table", config_path)

    styles = config.get("styles", {})
    unknown = sorted(set(styles) - set(STYLE_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown styles section(s): {', '.join(unknown)}", config_path)

    for role, font in styles.get("fonts", {}).items():
        if not isinstance(font, dict):
            raise ConfigError(f"Font for role '{role}' must be a table", config_path)
        unknown = sorted(set(font) - set(FONT_KEYS))
        if unknown:
            raise ConfigError(f"Unknown key(s) for font role '{role}': {', '.join(unknown)}", config_path)


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start_dir`` (default: cwd) looking for a configuration file.

    Dedicated ``.mdlayout.*`` files win over a pyproject.toml in the same
    directory; a pyproject.toml only counts when it has a ``[tool.mdlayout]``
    table.
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
            except (OSError, ValueError, ConfigError) as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            return None
        current = parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or its parents, then in the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two configurations; ``override`` wins on conflicts.

    Examples
    --------
    >>> merge_configs({"pdf": {"page_size": "a4"}}, {"pdf": {"title": "T"}})
    {'pdf': {'page_size': 'a4', 'title': 'T'}}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the configuration that applies to this run.

    Priority: ``explicit_path`` (``--config``), then the ``MDLAYOUT_CONFIG``
    environment variable, then discovery. Returns an empty dict when no file
    is found.
    """
    if explicit_path:
        return load_config(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config(env_path)

    discovered = discover_config_file()
    if discovered:
        logger.info(f"Using configuration file {discovered}")
        return load_config(discovered)
    return {}


def conversion_options_from_config(
    config: Dict[str, Any], base: Optional[ConversionOptions] = None
) -> ConversionOptions:
    """Apply the ``conversion`` table on top of ``base``."""
    section = config.get("conversion", {})
    base = base or ConversionOptions()
    try:
        ConversionOptions.from_dict(section)
        return base.create_updated(**section)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid conversion settings: {e}", original_error=e) from e


def pdf_options_from_config(config: Dict[str, Any], base: Optional[PdfBackendOptions] = None) -> PdfBackendOptions:
    """Apply the ``pdf`` table on top of ``base``."""
    section = config.get("pdf", {})
    base = base or PdfBackendOptions()
    try:
        PdfBackendOptions.from_dict(section)
        return base.create_updated(**section)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid pdf settings: {e}", original_error=e) from e


def apply_style_config(styles: StyleRegistry, config: Dict[str, Any]) -> StyleRegistry:
    """Register the fonts and colors of the ``styles`` table.

    A font entry only needs the keys it changes; the others are taken from
    the role's current descriptor, or from the registry's base font for new
    roles.

    Raises
    ------
    ConfigError
        If a color or font value is invalid

    """
    section = config.get("styles", {})
    try:
        for role, value in section.get("colors", {}).items():
            styles.register_color(role, RGB.from_hex(str(value)))

        for role, values in section.get("fonts", {}).items():
            current = styles.descriptor(role) or FontDescriptor(styles.base_family, styles.base_size)
            color = RGB.from_hex(str(values["color"])) if "color" in values else current.color
            styles.register(
                role,
                FontDescriptor(
                    family=str(values.get("family", current.family)),
                    size=float(values.get("size", current.size)),
                    bold=bool(values.get("bold", current.bold)),
                    italic=bool(values.get("italic", current.italic)),
                    color=color,
                ),
            )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid style settings: {e}", original_error=e) from e
    return styles
