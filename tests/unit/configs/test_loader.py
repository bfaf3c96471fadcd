"""
test_loader.py
--------------
Unit tests for schema and default settings loaders.
"""
import json

import pytest

from recordcheck.configs.loader import (
    check_default_settings,
    load_default_settings,
    load_schema,
    read_mapping,
)
from recordcheck.core.exceptions import ConfigurationError
from recordcheck.core.paths import DEFAULT_SETTINGS_PATH, SCHEMA_PATH
from recordcheck.validators.registry import builtin_registry
from recordcheck.validators.result import SUCCESS
from recordcheck.validators.schema import SchemaValidator
from recordcheck.validators.settings import SettingsValidator


class TestReadMapping:
    def test_yaml_and_json(self, tmp_path):
        yaml_file = tmp_path / "a.yml"
        yaml_file.write_text("title: Blog\n", encoding="utf-8")
        json_file = tmp_path / "a.json"
        json_file.write_text(json.dumps({"title": "Blog"}), encoding="utf-8")
        assert read_mapping(yaml_file) == {"title": "Blog"}
        assert read_mapping(json_file) == {"title": "Blog"}

    def test_empty_file_is_empty_mapping(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert read_mapping(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            read_mapping(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "schema.toml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            read_mapping(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("posts: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            read_mapping(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            read_mapping(path)


class TestLoaders:
    def test_load_sample_files(self, config_files, sample_schema, sample_defaults):
        schema_path, settings_path = config_files
        assert load_schema(schema_path) == sample_schema
        assert load_default_settings(settings_path) == sample_defaults

    def test_schema_column_error_names_column(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("posts:\n  title:\n    maxlength: lots\n", encoding="utf-8")
        schema = load_schema(path)
        with pytest.raises(ConfigurationError, match="posts.title"):
            SchemaValidator(schema)

    def test_schema_entity_must_be_mapping(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("posts:\n  - title\n", encoding="utf-8")
        schema = load_schema(path)
        with pytest.raises(ConfigurationError, match="posts"):
            SchemaValidator(schema)

    def test_empty_column_spec_allowed(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("posts:\n  title:\n", encoding="utf-8")
        schema = load_schema(path)
        assert schema == {"posts": {"title": None}}
        assert SchemaValidator(schema).validate("posts", {"title": ""}) is SUCCESS

    def test_storage_keys_pass_through(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text(
            "posts:\n  author_id:\n    type: integer\n    references: users.id\n",
            encoding="utf-8",
        )
        schema = load_schema(path)
        assert schema["posts"]["author_id"]["references"] == "users.id"
        assert SchemaValidator(schema).validate("posts", {"author_id": "1"}) is SUCCESS

    def test_default_settings_errors(self):
        with pytest.raises(ConfigurationError, match="logo"):
            check_default_settings({"logo": "plain value"})
        with pytest.raises(ConfigurationError, match="title"):
            check_default_settings({"title": {"value": "", "validations": "isNull"}})


class TestPackagedConfigs:
    """The shipped catalogs must load and only use registered rules."""

    def test_packaged_schema(self):
        validator = SchemaValidator(load_schema(SCHEMA_PATH))
        validator.verify_rules()
        assert "posts" in validator.entity_types

    def test_packaged_defaults_pass_their_own_rules(self):
        defaults = load_default_settings(DEFAULT_SETTINGS_PATH)
        validator = SettingsValidator(defaults, builtin_registry())
        validator.verify_rules()
        for key, definition in defaults.items():
            outcome = validator.validate({"key": key, "value": definition["value"]})
            assert outcome is SUCCESS, f"{key}: {outcome.errors}"
