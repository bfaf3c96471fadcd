#!/usr/bin/env python3
"""
settings.py
-----------
Validation of a single setting against its default definition.

The default settings catalog maps each key to its default value and an
optional rule set:

    title:
      value: "My Site"
      validations:
        isLength: [0, 150]
    postsPerPage:
      value: "6"
      validations:
        isNull: false
        isInt: true

A setting whose key has no default, or whose default has no rule set, is
accepted as-is.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple

# --- Local imports ---
from recordcheck.core.logging_manager import RecordcheckLogger, safe_logger
from recordcheck.validators.registry import PredicateRegistry
from recordcheck.validators.result import SUCCESS, Outcome
from recordcheck.validators.rules import RuleSetValidator


def canonical_form(setting: Any) -> Tuple[str, Any]:
    """
    Extract (key, value) from a setting record.

    Accepts objects exposing ``to_dict()`` or ``to_json()`` and plain
    mappings with ``key`` and ``value`` entries.

    Raises:
        TypeError: If the record exposes no canonical form
        KeyError: If the canonical form has no ``key``
    """
    data: Optional[Mapping] = None
    if isinstance(setting, Mapping):
        data = setting
    else:
        for accessor in ("to_dict", "to_json"):
            method = getattr(setting, accessor, None)
            if callable(method):
                data = method()
                break

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Setting must be a mapping or expose to_dict()/to_json(), "
            f"got {type(setting).__name__}"
        )
    return data["key"], data.get("value")


class SettingsValidator:
    """
    Validates setting records against a default settings catalog.

    Attributes:
        defaults: Catalog mapping setting key -> {value, validations?}
        rule_sets: RuleSetValidator used for the rule sets
        logger: Optional RecordcheckLogger
    """

    def __init__(
        self,
        defaults: Mapping[str, Mapping[str, Any]],
        registry: Optional[PredicateRegistry] = None,
        logger: Optional[RecordcheckLogger] = None,
    ) -> None:
        self.defaults = defaults
        self.rule_sets = RuleSetValidator(registry, logger)
        self.logger = logger

    def rule_set_for(self, key: str) -> Optional[Dict[str, Any]]:
        """Get the rule set attached to a key's default, if any."""
        matching_default = self.defaults.get(key)
        if not isinstance(matching_default, Mapping):
            return None
        return matching_default.get("validations") or None

    def rule_names(self) -> Iterator[str]:
        for key in self.defaults:
            yield from self.rule_set_for(key) or {}

    def verify_rules(self) -> None:
        """Raise RuleNotFoundError if the catalog uses an unregistered rule."""
        self.rule_sets.registry.verify(self.rule_names())

    def validate_value(self, key: str, value: Any) -> Outcome:
        """Validate a raw value for a setting key."""
        rule_set = self.rule_set_for(key)
        if rule_set is None:
            safe_logger(self.logger).log_debug(
                "No rules for setting", {"key": key}
            )
            return SUCCESS
        return self.rule_sets.validate(value, key, rule_set)

    def validate(self, setting: Any) -> Outcome:
        """
        Validate a setting record.

        Args:
            setting: Record exposing its canonical form (see canonical_form)

        Returns:
            SUCCESS, or Failure with one ValidationError per failed rule
        """
        key, value = canonical_form(setting)
        return self.validate_value(key, value)


def validate_settings(
    defaults: Mapping[str, Mapping[str, Any]],
    setting: Any,
    registry: Optional[PredicateRegistry] = None,
    logger: Optional[RecordcheckLogger] = None,
) -> Outcome:
    """Functional shortcut for SettingsValidator(defaults, ...).validate()."""
    return SettingsValidator(defaults, registry, logger).validate(setting)
