#!/usr/bin/env python3
"""
result.py
---------
Outcome types returned by every recordcheck validator.

A validation call either succeeds with no payload or fails with the full,
ordered list of errors it found:

    outcome = validator.validate("posts", record)
    if not outcome.ok:
        for error in outcome.errors:
            print(error.format())

Success carries nothing to inspect. Callers that want exceptions instead
call ``outcome.raise_error()``, which raises ValidationFailed on failure and
does nothing on success.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple, Union

# --- Local imports ---
from recordcheck.core.exceptions import ValidationFailed


@dataclass(frozen=True)
class ValidationError:
    """
    A single failed check.

    Attributes:
        message: Human-readable description of the failure
        attribute: ``<entityType>.<column>`` for records, bare key for settings
    """

    message: str
    attribute: str

    def format(self) -> str:
        """Format error for display."""
        return f"{self.attribute}: {self.message}"

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "attribute": self.attribute}


class Success:
    """Payload-free successful outcome. Use the SUCCESS singleton."""

    __slots__ = ()

    ok = True
    errors: Tuple[ValidationError, ...] = ()

    def raise_error(self) -> None:
        """No-op; present so callers can treat both outcomes alike."""
        return None

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Success()"


@dataclass(frozen=True)
class Failure:
    """
    Failed outcome carrying every error found by one validation call.

    Attributes:
        errors: Non-empty tuple of ValidationError, in discovery order
    """

    errors: Tuple[ValidationError, ...]

    ok = False

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Failure requires at least one ValidationError")

    def raise_error(self) -> None:
        raise ValidationFailed(self.errors)

    def __bool__(self) -> bool:
        return False

    @property
    def attributes(self) -> Tuple[str, ...]:
        """Attributes of the failed checks, in order."""
        return tuple(error.attribute for error in self.errors)


SUCCESS = Success()

Outcome = Union[Success, Failure]


def outcome_from(errors: Iterable[ValidationError]) -> Outcome:
    """Build SUCCESS for no errors, otherwise a Failure holding them."""
    collected = tuple(errors)
    if not collected:
        return SUCCESS
    return Failure(collected)
