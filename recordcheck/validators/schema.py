#!/usr/bin/env python3
"""
schema.py
---------
Record validation against per-entity-type column specs.

A schema maps entity types to their columns:

    posts:
      title:
        nullable: false
        maxlength: 150
      author_id:
        type: integer
      slug:
        maxlength: 150
        validations:
          notContains: "/"

For each declared column the validator runs two independent groups of
checks. The nullability group only looks at keys present in the record, so
an absent non-nullable column is not reported. The content group (max
length, custom rule set, integer type) only runs for truthy values. Columns
in the record that the schema does not declare are ignored.

Usage:
    from recordcheck.validators.schema import SchemaValidator

    validator = SchemaValidator(load_schema(SCHEMA_PATH))
    outcome = validator.validate("posts", {"title": ""})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

# --- Local imports ---
from recordcheck.core.exceptions import ConfigurationError
from recordcheck.core.logging_manager import RecordcheckLogger, safe_logger
from recordcheck.validators.registry import PredicateRegistry
from recordcheck.validators.result import Outcome, ValidationError, outcome_from
from recordcheck.validators.rules import RuleSetValidator


COLUMN_SPEC_KEYS = frozenset({"nullable", "maxlength", "type", "validations"})
BUILTIN_RULES = ("isNull", "empty", "isLength", "isInt")


@dataclass(frozen=True)
class ColumnSpec:
    """
    Constraints for one column.

    ``nullable`` is None when the spec does not declare it; only an explicit
    non-true value enables the blank check.
    """

    nullable: Optional[bool] = None
    maxlength: Optional[int] = None
    type: Optional[str] = None
    validations: Dict[str, Any] = field(default_factory=dict)

    @property
    def requires_value(self) -> bool:
        return self.nullable is not None and self.nullable is not True

    @classmethod
    def from_mapping(cls, attribute: str, spec: Any, strict: bool = False) -> "ColumnSpec":
        """
        Build a ColumnSpec from raw schema data.

        Keys other than nullable, maxlength, type and validations belong to
        the storage layer (references, index, defaultTo...) and are ignored
        unless ``strict`` is set.

        Args:
            attribute: ``<entityType>.<column>`` for error messages
            spec: Raw column mapping
            strict: Reject keys this validator does not read

        Raises:
            ConfigurationError: If the spec has bad values, or unknown keys in strict mode
        """
        if spec is None:
            return cls()
        if not isinstance(spec, Mapping):
            raise ConfigurationError(
                f"Column '{attribute}' spec must be a mapping, got {type(spec).__name__}"
            )

        unknown = sorted(map(str, set(spec) - COLUMN_SPEC_KEYS))
        if strict and unknown:
            raise ConfigurationError(
                f"Column '{attribute}' has unknown key(s): {', '.join(unknown)}"
            )

        nullable = spec.get("nullable")
        if nullable is not None and not isinstance(nullable, bool):
            raise ConfigurationError(f"Column '{attribute}': nullable must be a boolean")

        maxlength = spec.get("maxlength")
        if maxlength is not None and (
            isinstance(maxlength, bool) or not isinstance(maxlength, int) or maxlength < 0
        ):
            raise ConfigurationError(
                f"Column '{attribute}': maxlength must be a non-negative integer"
            )

        column_type = spec.get("type")
        if column_type is not None and not isinstance(column_type, str):
            raise ConfigurationError(f"Column '{attribute}': type must be a string")

        validations = spec.get("validations") or {}
        if not isinstance(validations, Mapping):
            raise ConfigurationError(
                f"Column '{attribute}': validations must be a mapping of rule names"
            )

        return cls(
            nullable=nullable,
            maxlength=maxlength,
            type=column_type,
            validations=dict(validations),
        )


def parse_schema(
    schema: Any, strict: bool = False
) -> Dict[str, Dict[str, ColumnSpec]]:
    """
    Parse a raw schema into ColumnSpecs, in declaration order.

    Raises:
        ConfigurationError: On the first malformed entity or column
    """
    if not isinstance(schema, Mapping):
        raise ConfigurationError("Schema must map entity types to column specs")

    parsed: Dict[str, Dict[str, ColumnSpec]] = {}
    for entity_type, columns in schema.items():
        if not isinstance(columns, Mapping):
            raise ConfigurationError(
                f"Entity '{entity_type}' must map column names to specs"
            )
        parsed[entity_type] = {
            column: ColumnSpec.from_mapping(f"{entity_type}.{column}", spec, strict)
            for column, spec in columns.items()
        }
    return parsed


class SchemaValidator:
    """
    Validates records against the column specs of their entity type.

    Column specs are parsed when the validator is built, so a malformed
    schema fails at start-up rather than on the first record.

    Attributes:
        schema: Parsed schema, entity type -> column name -> ColumnSpec
        rule_sets: RuleSetValidator used for builtin and custom rules
        logger: Optional RecordcheckLogger
    """

    def __init__(
        self,
        schema: Mapping[str, Mapping[str, Any]],
        registry: Optional[PredicateRegistry] = None,
        logger: Optional[RecordcheckLogger] = None,
        strict: bool = False,
    ) -> None:
        self.schema = parse_schema(schema, strict)
        self.rule_sets = RuleSetValidator(registry, logger)
        self.logger = logger

    @property
    def registry(self) -> PredicateRegistry:
        return self.rule_sets.registry

    @property
    def entity_types(self) -> List[str]:
        return list(self.schema)

    def columns(self, entity_type: str) -> Dict[str, ColumnSpec]:
        """
        Get the column specs for an entity type, in declaration order.

        Raises:
            ConfigurationError: If the entity type is not in the schema
        """
        try:
            return self.schema[entity_type]
        except KeyError:
            raise ConfigurationError(f"Unknown entity type: '{entity_type}'") from None

    def rule_names(self) -> Iterator[str]:
        """Yield every rule name the schema can evaluate, builtins first."""
        yield from BUILTIN_RULES
        for columns in self.schema.values():
            for spec in columns.values():
                yield from spec.validations

    def verify_rules(self) -> None:
        """
        Check that every rule the schema uses is registered.

        Raises:
            RuleNotFoundError: Listing the unknown rule names
        """
        self.registry.verify(self.rule_names())

    # ========== Checks ==========

    def _passes(self, value: Any, rule_name: str, *options: Any) -> bool:
        return self.rule_sets.executor.passes(value, rule_name, options)

    def _is_blank(self, value: Any) -> bool:
        return self._passes(value, "isNull") or self._passes(value, "empty")

    def check_column(
        self, entity_type: str, column: str, spec: ColumnSpec, record: Mapping
    ) -> List[ValidationError]:
        """
        Run the nullability and content checks for one column.

        Args:
            entity_type: Entity type of the record
            column: Column name
            spec: Column constraints
            record: Record under test

        Returns:
            Errors in check order: blank, max length, rule set, type
        """
        attribute = f"{entity_type}.{column}"
        errors: List[ValidationError] = []

        if column in record and spec.requires_value and self._is_blank(record[column]):
            errors.append(
                ValidationError(f"Value in [{attribute}] cannot be blank.", attribute)
            )

        value = record.get(column)
        if not value:
            return errors

        if spec.maxlength is not None and not self._passes(
            value, "isLength", 0, spec.maxlength
        ):
            errors.append(
                ValidationError(
                    f"Value in [{attribute}] exceeds maximum length of "
                    f"{spec.maxlength} characters.",
                    attribute,
                )
            )

        if spec.validations:
            errors.extend(
                self.rule_sets.collect_errors(value, attribute, spec.validations)
            )

        if spec.type == "integer" and not self._passes(value, "isInt"):
            errors.append(
                ValidationError(f"Value in [{attribute}] is no valid integer.", attribute)
            )

        return errors

    def validate(self, entity_type: str, record: Any) -> Outcome:
        """
        Validate a record against every column declared for its entity type.

        Args:
            entity_type: Schema entity type (e.g. 'posts')
            record: Mapping of column name to value, or an object with to_dict()

        Returns:
            SUCCESS, or Failure with all errors in column-declaration order

        Raises:
            ConfigurationError: If the entity type is unknown
            RuleNotFoundError: If a column uses an unregistered rule
        """
        columns = self.columns(entity_type)
        values = record_mapping(record)

        errors: List[ValidationError] = []
        for column, spec in columns.items():
            errors.extend(self.check_column(entity_type, column, spec, values))

        safe_logger(self.logger).log_outcome("validate_schema", entity_type, errors)
        return outcome_from(errors)


def record_mapping(record: Any) -> Mapping:
    """Return a record's column mapping, calling to_dict() on model objects."""
    if isinstance(record, Mapping):
        return record
    to_dict = getattr(record, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(
        f"Record must be a mapping or expose to_dict(), got {type(record).__name__}"
    )


def validate_schema(
    schema: Mapping[str, Mapping[str, Any]],
    entity_type: str,
    record: Any,
    registry: Optional[PredicateRegistry] = None,
    logger: Optional[RecordcheckLogger] = None,
) -> Outcome:
    """Functional shortcut for SchemaValidator(schema, ...).validate()."""
    return SchemaValidator(schema, registry, logger).validate(entity_type, record)
