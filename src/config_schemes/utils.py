"""Utility functions for config-schemes."""

import logging
import re
from dataclasses import asdict
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigFileError
from .models import ENTITY_SUFFIX
from .models import SchemeSettings

logger = logging.getLogger(__name__)

# Everything up to the last module/namespace separator
_QUALIFIER = re.compile(r"^.*(?:\.|::|\\)")


def identifier(class_name: str, suffix: str = ENTITY_SUFFIX) -> str:
    """Convert an entity configuration or object class name to an identifier.

    Strips any qualifier prefix, lowercases the rest and removes exactly one
    trailing occurrence of the suffix token.

    Args:
        class_name: Simple or qualified class name
        suffix: Token removed from the end of the name

    Returns:
        Identifier binding a configuration to the object it configures

    Examples:
        >>> identifier("TestModuleConfig")
        'testmodule'

        >>> identifier("app.modules.TestModule")
        'testmodule'

        >>> identifier("testmoduleconfig")
        'testmodule'
    """
    name = _QUALIFIER.sub("", class_name).lower()
    suffix = suffix.lower()
    if suffix and name.endswith(suffix):
        name = name[: -len(suffix)]
    return name


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    completely replace corresponding values in base.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> deep_merge({"schemes": {"entity_suffix": "config"}}, {"schemes": {"base_environment": "prod"}})
        {'schemes': {'entity_suffix': 'config', 'base_environment': 'prod'}}
    """
    result = base.copy()

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_settings(path: Path) -> SchemeSettings:
    """Read registry settings from a YAML file.

    The file holds a ``schemes`` section whose keys override the defaults
    of SchemeSettings:

        schemes:
          base_environment: global
          entity_suffix: config
          entity_pattern: "*config.py"

    Args:
        path: Path to YAML settings file

    Returns:
        SchemeSettings, or the defaults if the file doesn't exist

    Raises:
        ConfigFileError: If the file can't be read or has unknown keys
    """
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return SchemeSettings()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Failed to read settings from {path}: {e}") from e

    if data is None:
        data = {}
    if isinstance(data, dict) and data.get("schemes") is None:
        data = {**data, "schemes": {}}
    if not isinstance(data, dict) or not isinstance(data["schemes"], dict):
        raise ConfigFileError(f"Settings file {path} must contain a 'schemes' mapping")

    merged = deep_merge({"schemes": asdict(SchemeSettings())}, data)["schemes"]

    known = {f.name for f in fields(SchemeSettings)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigFileError(f"Unknown settings in {path}: {', '.join(unknown)}")

    return SchemeSettings(**merged)
