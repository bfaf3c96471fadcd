"""
Recordcheck
===========

Declarative validation of records and settings before they are stored.

Records are checked against per-entity-type column specs (nullability,
maximum length, integer type and named rule sets); settings are checked
against the rule set attached to their default definition. Named rules are
resolved through a PredicateRegistry that can be extended at start-up.

Main Components:
    - validators.registry: PredicateRegistry and the builtin rule set
    - validators.rules: Rule executor and rule-set validator
    - validators.schema: SchemaValidator for entity records
    - validators.settings: SettingsValidator for configuration entries
    - configs: YAML/JSON loaders and the SQLAlchemy schema bridge
    - core: Exceptions, logging and paths

Example Usage:
    >>> from recordcheck import SchemaValidator, load_schema
    >>> from recordcheck.core.paths import SCHEMA_PATH
    >>> validator = SchemaValidator(load_schema(SCHEMA_PATH))
    >>> outcome = validator.validate("posts", {"title": ""})
    >>> [error.message for error in outcome.errors]
    ['Value in [posts.title] cannot be blank.']

Version: 0.4.0
License: MIT
"""

__version__ = "0.4.0"

from recordcheck.configs.loader import load_default_settings, load_schema
from recordcheck.core.exceptions import (
    ConfigurationError,
    RuleNotFoundError,
    ValidationFailed,
)
from recordcheck.validators.registry import (
    PredicateRegistry,
    build_registry,
    builtin_registry,
)
from recordcheck.validators.result import (
    SUCCESS,
    Failure,
    Outcome,
    Success,
    ValidationError,
)
from recordcheck.validators.rules import validate_rule_set
from recordcheck.validators.schema import SchemaValidator, validate_schema
from recordcheck.validators.settings import SettingsValidator, validate_settings

__all__ = [
    "ConfigurationError",
    "Failure",
    "Outcome",
    "PredicateRegistry",
    "RuleNotFoundError",
    "SUCCESS",
    "SchemaValidator",
    "SettingsValidator",
    "Success",
    "ValidationError",
    "ValidationFailed",
    "build_registry",
    "builtin_registry",
    "load_default_settings",
    "load_schema",
    "validate_rule_set",
    "validate_schema",
    "validate_settings",
]
