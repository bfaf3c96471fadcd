#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the recordcheck project.

Validation failures are normally reported as data (see
recordcheck.validators.result), not raised. The exceptions here cover the
other two cases: rule configuration that cannot be evaluated at all, and
callers that opt into exception-style signalling of a failed outcome.

Exception Hierarchy:
    Exception (built-in)
    └── RecordcheckError - Base for all recordcheck errors
        ├── ConfigurationError - Bad schema, catalog or rule configuration
        │   ├── RuleNotFoundError - Rule name not in the predicate registry
        │   ├── RuleArgumentError - Predicate rejected the rule options
        │   └── RegistryFrozenError - Registration after the setup phase
        └── ValidationFailed - Raised on request from a failed outcome

Usage:
    from recordcheck.core.exceptions import RuleNotFoundError, ValidationFailed

    try:
        validator.validate("posts", record).raise_error()
    except ValidationFailed as e:
        show_errors(e.errors)
    except RuleNotFoundError as e:
        logger.error(f"Bad rule configuration: {e}")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Iterable, Sequence


class RecordcheckError(Exception):
    """
    Base exception for recordcheck.

    Catch this to handle any error raised by the package, or catch one of
    the subclasses for more granular handling.
    """

    pass


class ConfigurationError(RecordcheckError):
    """
    Exception for unusable validation configuration.

    Raised when a schema or default-settings catalog is malformed, or when
    a rule set refers to something that cannot be evaluated. This is a
    programmer/deployment error and is never turned into a validation error.

    Examples:
        >>> raise ConfigurationError("Column 'posts.title': maxlength must be an int")
        >>> raise ConfigurationError("Schema file not found: schema.yaml")
    """

    pass


class RuleNotFoundError(ConfigurationError):
    """
    Exception for rule names that are not registered.

    Attributes:
        names: The unknown rule names, in the order they were found

    Examples:
        >>> raise RuleNotFoundError(["isColour"])
    """

    def __init__(self, names: Iterable[str]) -> None:
        self.names = list(names)
        joined = ", ".join(self.names)
        super().__init__(f"No predicate registered for rule(s): {joined}")


class RuleArgumentError(ConfigurationError):
    """
    Exception for rule options that the predicate cannot accept.

    Raised when a predicate is called with the wrong number of positional
    arguments, e.g. ``isLength: [1, 2, 3, 4]``, or rejects their values,
    e.g. ``isLength: ["a", 5]`` or ``matches: "("``.
    """

    pass


class RegistryFrozenError(ConfigurationError):
    """Exception for predicate registration after the registry was frozen."""

    pass


class ValidationFailed(RecordcheckError):
    """
    Exception carrying the errors of a failed validation outcome.

    Only raised when a caller asks for it with ``Failure.raise_error()``.

    Attributes:
        errors: Ordered ValidationError items of the failed call
    """

    def __init__(self, errors: Sequence) -> None:
        self.errors = tuple(errors)
        count = len(self.errors)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"Validation failed with {count} {noun}")
