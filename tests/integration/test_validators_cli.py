#!/usr/bin/env python3
"""
Integration tests for the recordcheck CLI.
"""
import json

import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock

from recordcheck.core.logging_manager import RecordcheckLogger
from recordcheck.validators.cli import cli, parse_value


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def base_args(tmp_path, config_files):
    schema_path, settings_path = config_files
    return [
        "--schema", str(schema_path),
        "--settings", str(settings_path),
        "--log-dir", str(tmp_path / "logs"),
    ]


class TestCLIBasics:
    def test_cli_help(self, runner, tmp_path):
        result = runner.invoke(cli, ["--log-dir", str(tmp_path / "logs"), "--help"])
        assert result.exit_code == 0
        assert "validate" in result.output.lower()

    @pytest.mark.parametrize("command", ["record", "setting", "rules", "check"])
    def test_command_help(self, runner, tmp_path, command):
        log_dir = str(tmp_path / "logs")
        result = runner.invoke(cli, ["--log-dir", log_dir, command, "--help"])
        assert result.exit_code == 0

    def test_rules_lists_builtins(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["rules"])
        assert result.exit_code == 0
        names = result.output.split()
        assert "isLength" in names
        assert "notContains" in names

    def test_logger_closed_after_command(self, runner, base_args, monkeypatch):
        logger = MagicMock(spec=RecordcheckLogger)
        monkeypatch.setattr(
            "recordcheck.validators.cli.setup_logger", lambda log_dir, name: logger
        )
        result = runner.invoke(cli, base_args + ["rules"])
        assert result.exit_code == 0
        logger.close.assert_called_once()


class TestRecordCommand:
    def test_valid_record(self, runner, base_args, tmp_path):
        record = tmp_path / "post.yaml"
        record.write_text("title: Hello\nslug: hello\n", encoding="utf-8")
        result = runner.invoke(cli, base_args + ["record", "posts", str(record)])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_invalid_record(self, runner, base_args, tmp_path):
        record = tmp_path / "post.json"
        record.write_text(json.dumps({"title": "", "author_id": "abc"}), encoding="utf-8")
        result = runner.invoke(cli, base_args + ["record", "posts", str(record)])
        assert result.exit_code == 1
        assert "posts.title: Value in [posts.title] cannot be blank." in result.output
        assert "is no valid integer" in result.output

    def test_unknown_entity_is_configuration_error(self, runner, base_args, tmp_path):
        record = tmp_path / "comment.yaml"
        record.write_text("body: hi\n", encoding="utf-8")
        result = runner.invoke(cli, base_args + ["record", "comments", str(record)])
        assert result.exit_code == 2
        assert "Unknown entity type" in result.output

    def test_bad_rule_options_are_configuration_error(self, runner, tmp_path):
        schema = tmp_path / "schema.yaml"
        schema.write_text(
            "posts:\n  slug:\n    validations:\n      matches: \"(\"\n", encoding="utf-8"
        )
        record = tmp_path / "post.yaml"
        record.write_text("slug: abc\n", encoding="utf-8")
        result = runner.invoke(
            cli,
            [
                "--schema", str(schema),
                "--log-dir", str(tmp_path / "logs"),
                "record", "posts", str(record),
            ],
        )
        assert result.exit_code == 2
        assert "RuleArgumentError" in result.output

    def test_extra_column_keys_are_ignored(self, runner, tmp_path):
        schema = tmp_path / "schema.yaml"
        schema.write_text(
            "posts:\n  author_id:\n    type: integer\n    references: users.id\n",
            encoding="utf-8",
        )
        record = tmp_path / "post.yaml"
        record.write_text("author_id: abc\n", encoding="utf-8")
        result = runner.invoke(
            cli,
            [
                "--schema", str(schema),
                "--log-dir", str(tmp_path / "logs"),
                "record", "posts", str(record),
            ],
        )
        assert result.exit_code == 1
        assert "is no valid integer" in result.output


class TestSettingCommand:
    def test_valid_setting(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "postsPerPage", "6"])
        assert result.exit_code == 0

    def test_invalid_setting(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "postsPerPage", "six"])
        assert result.exit_code == 1
        assert "Settings validation (isInt) failed for postsPerPage" in result.output

    def test_null_value(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "email", "null"])
        assert result.exit_code == 1
        assert "(isNull)" in result.output

    def test_raw_value(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "--raw", "email", "null"])
        assert result.exit_code == 1
        assert "(isNull)" not in result.output
        assert "(isEmail)" in result.output

    def test_leading_zero_is_not_an_integer(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "postsPerPage", "010"])
        assert result.exit_code == 1
        assert "(isInt)" in result.output

    def test_hex_is_not_an_integer(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["setting", "postsPerPage", "0x1A"])
        assert result.exit_code == 1
        assert "(isInt)" in result.output


class TestParseValue:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("null", None),
            ("~", None),
            ("6", 6),
            ("-12", -12),
            ("0", 0),
            ("010", "010"),
            ("0x1A", "0x1A"),
            ("yes", "yes"),
            ("true", "true"),
            ("1.5", "1.5"),
            ("", ""),
        ],
    )
    def test_only_null_and_decimal_integers_convert(self, text, expected):
        assert parse_value(text) == expected
        assert type(parse_value(text)) is type(expected)


class TestCheckCommand:
    def test_check_passes(self, runner, base_args):
        result = runner.invoke(cli, base_args + ["check"])
        assert result.exit_code == 0
        assert "Configuration OK" in result.output

    def test_check_reports_unknown_rule(self, runner, tmp_path):
        schema = tmp_path / "schema.yaml"
        schema.write_text(
            "posts:\n  slug:\n    validations:\n      isSlug: true\n", encoding="utf-8"
        )
        settings = tmp_path / "settings.yaml"
        settings.write_text("title:\n  value: Blog\n", encoding="utf-8")
        result = runner.invoke(
            cli,
            [
                "--schema", str(schema),
                "--settings", str(settings),
                "--log-dir", str(tmp_path / "logs"),
                "check",
            ],
        )
        assert result.exit_code == 2
        assert "RuleNotFoundError" in result.output
        assert "isSlug" in result.output
