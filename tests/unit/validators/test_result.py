"""
test_result.py
--------------
Unit tests for the validation outcome types.
"""
import pytest

from recordcheck.core.exceptions import ValidationFailed
from recordcheck.validators.result import (
    SUCCESS,
    Failure,
    Success,
    ValidationError,
    outcome_from,
)


class TestValidationError:
    def test_format_and_to_dict(self):
        error = ValidationError("Value in [posts.title] cannot be blank.", "posts.title")
        assert error.format() == "posts.title: Value in [posts.title] cannot be blank."
        assert error.to_dict() == {
            "message": "Value in [posts.title] cannot be blank.",
            "attribute": "posts.title",
        }

    def test_is_immutable(self):
        error = ValidationError("msg", "attr")
        with pytest.raises(AttributeError):
            error.message = "other"


class TestOutcomes:
    """Test Success/Failure semantics."""

    def test_outcome_from_empty_is_success_singleton(self):
        assert outcome_from([]) is SUCCESS
        assert isinstance(SUCCESS, Success)
        assert SUCCESS.ok and bool(SUCCESS)
        assert SUCCESS.errors == ()

    def test_outcome_from_errors_keeps_order(self):
        errors = [ValidationError("a", "x.a"), ValidationError("b", "x.b")]
        outcome = outcome_from(errors)
        assert isinstance(outcome, Failure)
        assert not outcome.ok and not bool(outcome)
        assert outcome.errors == tuple(errors)
        assert outcome.attributes == ("x.a", "x.b")

    def test_failure_requires_errors(self):
        with pytest.raises(ValueError):
            Failure(())

    def test_raise_error(self):
        SUCCESS.raise_error()
        errors = [ValidationError("a", "x.a")]
        with pytest.raises(ValidationFailed) as exc_info:
            outcome_from(errors).raise_error()
        assert exc_info.value.errors == tuple(errors)
        assert "1 error" in str(exc_info.value)
