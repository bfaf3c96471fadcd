#!/usr/bin/env python3
"""
cli.py
------
Command line entry point for recordcheck.

Validates records and settings against the configured schema and default
settings catalog, lists the available rules and checks that the
configuration only uses registered rules.

Exit codes:
    0 - Valid input
    1 - Validation failed (errors are printed)
    2 - Configuration or usage error (unknown rule, bad file, unknown entity)

Usage:
    recordcheck record posts post.yaml
    recordcheck setting postsPerPage 6
    recordcheck rules
    recordcheck check
    recordcheck --schema my_schema.yaml --settings my_defaults.json check
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import click

from recordcheck.core.cli_utils import setup_logger
from recordcheck.core.exceptions import ConfigurationError
from recordcheck.core.logging_manager import handle_cli_error
from recordcheck.core.paths import DEFAULT_SETTINGS_PATH, LOG_DIR, SCHEMA_PATH


INTEGER_RE = re.compile(r"[-+]?(?:0|[1-9][0-9]*)")
NULL_WORDS = frozenset({"null", "~"})


@click.group()
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(dir_okay=False),
    default=str(SCHEMA_PATH),
    show_default=True,
    help="Schema file (YAML or JSON)",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False),
    default=str(DEFAULT_SETTINGS_PATH),
    show_default=True,
    help="Default settings catalog (YAML or JSON)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option("-v", "--verbose", is_flag=True, help="Show tracebacks on errors")
@click.pass_context
def cli(
    ctx: click.Context,
    schema_path: str,
    settings_path: str,
    log_dir: str,
    verbose: bool,
) -> None:
    """
    Recordcheck - validate records and settings before they are stored.
    """
    ctx.ensure_object(dict)
    ctx.obj["schema_path"] = Path(schema_path)
    ctx.obj["settings_path"] = Path(settings_path)
    ctx.obj["verbose"] = verbose
    logger = setup_logger(Path(log_dir), "recordcheck")
    ctx.obj["logger"] = logger
    ctx.call_on_close(logger.close)


def parse_value(text: str) -> Any:
    """
    Read a command line setting value.

    Only `null` and `~` (None) and plain decimal integers are converted;
    anything else, including `yes`, `010` and `0x1A`, stays a string.
    """
    if text in NULL_WORDS:
        return None
    if INTEGER_RE.fullmatch(text):
        return int(text)
    return text


def _schema_validator(ctx: click.Context):
    from recordcheck.configs.loader import load_schema
    from recordcheck.validators.schema import SchemaValidator

    return SchemaValidator(
        load_schema(ctx.obj["schema_path"]), logger=ctx.obj["logger"]
    )


def _settings_validator(ctx: click.Context):
    from recordcheck.configs.loader import load_default_settings
    from recordcheck.validators.settings import SettingsValidator

    return SettingsValidator(
        load_default_settings(ctx.obj["settings_path"]), logger=ctx.obj["logger"]
    )


def _report(outcome: Any, subject: str) -> None:
    """Print an outcome; raise ClickException (exit 1) on failure."""
    if outcome.ok:
        click.echo(f"✅ {subject} is valid")
        return

    count = len(outcome.errors)
    click.echo(f"❌ {subject}: {count} validation error(s)")
    for error in outcome.errors:
        click.echo(f"  • {error.format()}")
    raise click.ClickException(f"{subject} failed validation")


@cli.command()
@click.argument("entity_type")
@click.argument("record_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def record(ctx: click.Context, entity_type: str, record_file: str) -> None:
    """
    Validate a record file against the schema of ENTITY_TYPE.

    RECORD_FILE is a YAML or JSON mapping of column names to values.
    """
    from recordcheck.configs.loader import read_mapping

    try:
        validator = _schema_validator(ctx)
        outcome = validator.validate(entity_type, read_mapping(record_file))
    except ConfigurationError as e:
        handle_cli_error(
            ctx, e, "record", {"entity_type": entity_type, "file": record_file}
        )
        return

    _report(outcome, f"{entity_type} record")


@cli.command()
@click.argument("key")
@click.argument("value")
@click.option("--raw", is_flag=True, help="Treat VALUE as a plain string")
@click.pass_context
def setting(ctx: click.Context, key: str, value: str, raw: bool) -> None:
    """
    Validate VALUE for the setting KEY.

    Unless --raw is given, `6` is read as an integer and `null` as None;
    every other VALUE is validated as the string it was typed as.
    """
    parsed = value if raw else parse_value(value)

    try:
        outcome = _settings_validator(ctx).validate_value(key, parsed)
    except ConfigurationError as e:
        handle_cli_error(ctx, e, "setting", {"key": key})
        return

    _report(outcome, f"setting '{key}'")


@cli.command()
def rules() -> None:
    """List the registered rule names."""
    from recordcheck.validators.registry import builtin_registry

    for name in builtin_registry().names():
        click.echo(name)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """
    Check that the schema and settings catalog only use registered rules.
    """
    try:
        schema_validator = _schema_validator(ctx)
        settings_validator = _settings_validator(ctx)
        schema_validator.verify_rules()
        settings_validator.verify_rules()
    except ConfigurationError as e:
        handle_cli_error(ctx, e, "check")
        return

    click.echo(
        f"✅ Configuration OK: {len(schema_validator.entity_types)} entity types, "
        f"{len(settings_validator.defaults)} settings"
    )


if __name__ == "__main__":
    cli()
