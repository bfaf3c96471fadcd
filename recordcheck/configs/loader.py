#!/usr/bin/env python3
"""
loader.py
---------
Loading of schema and default settings catalogs from YAML or JSON files.

The settings loader checks each entry and raises ConfigurationError naming the
offending key. Schema files are read as-is and checked when they are handed
to SchemaValidator, which is the single place schemas are parsed.

Usage:
    from recordcheck.configs.loader import load_schema, load_default_settings
    from recordcheck.core.paths import SCHEMA_PATH, DEFAULT_SETTINGS_PATH

    schema = load_schema(SCHEMA_PATH)
    defaults = load_default_settings(DEFAULT_SETTINGS_PATH)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Union

# --- Third-party imports ---
import yaml

# --- Local imports ---
from recordcheck.core.exceptions import ConfigurationError


SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def read_mapping(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON file whose top level is a mapping.

    An empty file reads as an empty mapping.

    Raises:
        ConfigurationError: If the file is missing, unparsable or not a mapping
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported config format '{path.suffix}' for {path} "
            f"(expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() == ".json":
                data = json.load(handle)
            else:
                data = yaml.safe_load(handle)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Top level of {path} must be a mapping, got {type(data).__name__}"
        )
    return data


def check_default_settings(defaults: Any) -> Dict[str, Dict[str, Any]]:
    """
    Check a raw default settings catalog.

    Every entry must be a mapping; ``validations``, when present, must be a
    mapping of rule names.

    Raises:
        ConfigurationError: On the first malformed entry
    """
    if not isinstance(defaults, Mapping):
        raise ConfigurationError("Default settings must map keys to definitions")

    checked: Dict[str, Dict[str, Any]] = {}
    for key, definition in defaults.items():
        if not isinstance(definition, Mapping):
            raise ConfigurationError(
                f"Default setting '{key}' must be a mapping with a 'value' entry"
            )
        validations = definition.get("validations")
        if validations is not None and not isinstance(validations, Mapping):
            raise ConfigurationError(
                f"Default setting '{key}': validations must be a mapping of rule names"
            )
        checked[key] = dict(definition)
    return checked


def load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a schema file; SchemaValidator checks its structure."""
    return read_mapping(path)


def load_default_settings(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """Load and check a default settings catalog file."""
    return check_default_settings(read_mapping(path))
