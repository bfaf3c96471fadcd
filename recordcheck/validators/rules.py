#!/usr/bin/env python3
"""
rules.py
--------
Evaluation of named rules and rule sets against a single value.

A rule set maps rule names to their options:

    validations:
      isLength: [20, 40]   # options are positional arguments
      notContains: "admin" # a scalar is a single argument
      isNull: false        # a boolean is the expected result

Each rule passes when the predicate result equals the expected result
(true unless the options are a boolean). The rule set validator runs every
rule and reports all failures together; it never stops at the first one.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import inspect
import re
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

# --- Local imports ---
from recordcheck.core.exceptions import ConfigurationError, RuleArgumentError
from recordcheck.core.logging_manager import RecordcheckLogger, safe_logger
from recordcheck.validators.registry import PredicateRegistry, builtin_registry
from recordcheck.validators.result import Outcome, ValidationError, outcome_from


RULE_FAILED_MESSAGE = "Settings validation ({rule}) failed for {key}"


def normalize_options(raw_options: Any) -> Tuple[Tuple[Any, ...], bool]:
    """
    Split raw rule options into positional arguments and expected result.

    Args:
        raw_options: Boolean, scalar, or list/tuple of scalars

    Returns:
        Tuple of (arguments, expected_result)

    Examples:
        >>> normalize_options(False)
        ((), False)
        >>> normalize_options([20, 40])
        ((20, 40), True)
        >>> normalize_options("admin")
        (('admin',), True)
    """
    if isinstance(raw_options, bool):
        return (), raw_options
    if isinstance(raw_options, (list, tuple)):
        return tuple(raw_options), True
    return (raw_options,), True


class RuleExecutor:
    """
    Runs one named predicate and compares it with the expected result.

    Attributes:
        registry: PredicateRegistry the rule names are resolved against
    """

    def __init__(self, registry: Optional[PredicateRegistry] = None) -> None:
        self.registry = registry if registry is not None else builtin_registry()

    def passes(
        self,
        value: Any,
        rule_name: str,
        options: Sequence[Any] = (),
        expected: bool = True,
    ) -> bool:
        """
        Check a value against one rule.

        Args:
            value: Value under test, passed as the first argument
            rule_name: Registered predicate name
            options: Further positional arguments for the predicate
            expected: Result the predicate must return for the rule to pass

        Returns:
            True if the predicate result matches the expected result

        Raises:
            RuleNotFoundError: If the rule name is not registered
            RuleArgumentError: If the predicate does not accept or rejects the options
        """
        predicate = self.registry.lookup(rule_name)
        arguments = (value, *options)
        self._check_arguments(rule_name, predicate, arguments)
        try:
            result = predicate(*arguments)
        except (TypeError, ValueError, re.error) as e:
            raise RuleArgumentError(
                f"Rule '{rule_name}' rejected options {tuple(options)!r}: {e}"
            ) from e
        return bool(result) == expected

    def evaluate(self, value: Any, rule_name: str, raw_options: Any) -> bool:
        """Check a value against one rule using raw rule-set options."""
        options, expected = normalize_options(raw_options)
        return self.passes(value, rule_name, options, expected)

    @staticmethod
    def _check_arguments(rule_name: str, predicate: Any, arguments: Tuple[Any, ...]) -> None:
        try:
            signature = inspect.signature(predicate)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures are called as-is
            return
        try:
            signature.bind(*arguments)
        except TypeError as e:
            raise RuleArgumentError(
                f"Rule '{rule_name}' cannot take {len(arguments) - 1} option(s): {e}"
            ) from e


class RuleSetValidator:
    """
    Validates one value against every rule in a rule set.

    Attributes:
        executor: RuleExecutor used for each rule
        logger: Optional RecordcheckLogger
    """

    def __init__(
        self,
        registry: Optional[PredicateRegistry] = None,
        logger: Optional[RecordcheckLogger] = None,
    ) -> None:
        self.executor = RuleExecutor(registry)
        self.logger = logger

    @property
    def registry(self) -> PredicateRegistry:
        return self.executor.registry

    def collect_errors(
        self, value: Any, key: str, rule_set: Optional[Mapping]
    ) -> List[ValidationError]:
        """
        Run every rule and return the failures in rule-set order.

        Raises:
            ConfigurationError: If the rule set is not a mapping
            RuleNotFoundError: If a rule name is not registered
        """
        if not rule_set:
            return []
        if not isinstance(rule_set, Mapping):
            raise ConfigurationError(
                f"Rule set for '{key}' must be a mapping, got {type(rule_set).__name__}"
            )

        errors: List[ValidationError] = []
        for rule_name, raw_options in rule_set.items():
            if not self.executor.evaluate(value, rule_name, raw_options):
                errors.append(
                    ValidationError(
                        RULE_FAILED_MESSAGE.format(rule=rule_name, key=key), key
                    )
                )
        return errors

    def validate(self, value: Any, key: str, rule_set: Optional[Mapping]) -> Outcome:
        """
        Validate a value against a rule set.

        Args:
            value: Value under test
            key: Identifier reported as the error attribute
            rule_set: Mapping of rule name to options; None or empty passes

        Returns:
            SUCCESS, or Failure with one ValidationError per failed rule
        """
        errors = self.collect_errors(value, key, rule_set)
        safe_logger(self.logger).log_outcome("validate_rule_set", key, errors)
        return outcome_from(errors)


def validate_rule_set(
    value: Any,
    key: str,
    rule_set: Optional[Mapping],
    registry: Optional[PredicateRegistry] = None,
    logger: Optional[RecordcheckLogger] = None,
) -> Outcome:
    """Functional shortcut for RuleSetValidator(registry, logger).validate()."""
    return RuleSetValidator(registry, logger).validate(value, key, rule_set)
