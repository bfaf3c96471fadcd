#!/usr/bin/env python3
"""
sqlalchemy_schema.py
--------------------
Derive a validation schema from SQLAlchemy table metadata.

Tables declared with SQLAlchemy already carry most column constraints. This
module reads them so records can be checked before they reach the database:

    - nullable:    Column.nullable (primary keys are skipped)
    - maxlength:   String(length) / VARCHAR(length)
    - type:        "integer" for Integer columns
    - validations: Column.info["validations"], merged with an explicit mapping

Usage:
    from recordcheck.configs.sqlalchemy_schema import schema_from_metadata

    schema = schema_from_metadata(Base.metadata, {"posts": {"slug": {"notContains": "/"}}})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, Mapping, Optional

# --- Third party ---
from sqlalchemy import Column, Integer, MetaData, String, Table


ExtraValidations = Mapping[str, Mapping[str, Mapping[str, Any]]]


def column_spec(column: Column, validations: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Build a raw column spec mapping for one SQLAlchemy column."""
    spec: Dict[str, Any] = {"nullable": bool(column.nullable)}

    if isinstance(column.type, String) and column.type.length:
        spec["maxlength"] = column.type.length
    if isinstance(column.type, Integer):
        spec["type"] = "integer"

    rules: Dict[str, Any] = dict(column.info.get("validations", {}))
    rules.update(validations or {})
    if rules:
        spec["validations"] = rules
    return spec


def table_schema(table: Table, validations: Optional[Mapping[str, Mapping[str, Any]]] = None) -> Dict[str, Dict[str, Any]]:
    """Column specs for one table, in column order, primary keys excluded."""
    validations = validations or {}
    return {
        column.name: column_spec(column, validations.get(column.name))
        for column in table.columns
        if not column.primary_key
    }


def schema_from_metadata(
    metadata: MetaData, validations: Optional[ExtraValidations] = None
) -> Dict[str, Dict[str, Dict[str, Any]]]:
    """
    Build a schema for every table in a MetaData collection.

    Args:
        metadata: SQLAlchemy MetaData (e.g. ``Base.metadata``)
        validations: Optional extra rule sets, table -> column -> rule set

    Returns:
        Schema mapping usable by SchemaValidator
    """
    validations = validations or {}
    return {
        name: table_schema(table, validations.get(name))
        for name, table in metadata.tables.items()
    }
