#!/usr/bin/env python3
"""
validators
----------
Rule evaluation and record/settings validation.

Layers, leaves first:
    - predicates.py: Builtin predicate functions
    - registry.py: PredicateRegistry (name -> predicate)
    - rules.py: RuleExecutor and RuleSetValidator
    - schema.py: SchemaValidator (entity records)
    - settings.py: SettingsValidator (configuration entries)
    - result.py: ValidationError and the Success/Failure outcome types

Every validator returns an outcome instead of raising on invalid data.
Unknown rule names raise RuleNotFoundError, which is never converted into
a validation error.
"""
