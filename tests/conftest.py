"""
conftest.py
-----------
Shared pytest fixtures for recordcheck tests.

Provides fixtures for:
- Sample schema and default settings catalogs
- Predicate registries
- Temporary config files
"""
import pytest
import yaml

from recordcheck.validators.registry import build_registry


# ----- Catalog Fixtures -----

@pytest.fixture
def sample_schema():
    """Small schema covering every kind of column check."""
    return {
        "posts": {
            "title": {"nullable": False, "maxlength": 10},
            "slug": {
                "nullable": False,
                "maxlength": 20,
                "validations": {"notContains": "/"},
            },
            "subtitle": {"nullable": True, "maxlength": 5},
            "author_id": {"type": "integer"},
            "summary": {"validations": {"isLength": [20, 40]}},
        },
        "tags": {
            "name": {"nullable": False},
        },
    }


@pytest.fixture
def sample_defaults():
    """Default settings catalog with and without rule sets."""
    return {
        "title": {"value": "Blog", "validations": {"isLength": [0, 10]}},
        "email": {
            "value": "admin@example.com",
            "validations": {"isNull": False, "isEmail": True},
        },
        "postsPerPage": {
            "value": "6",
            "validations": {"isNull": False, "isInt": True},
        },
        "logo": {"value": ""},
    }


# ----- Registry Fixtures -----

@pytest.fixture
def registry():
    """Fresh, unfrozen registry with the builtin predicates."""
    return build_registry()


# ----- File Fixtures -----

@pytest.fixture
def config_files(tmp_path, sample_schema, sample_defaults):
    """Write the sample schema and catalog to YAML files."""
    schema_path = tmp_path / "schema.yaml"
    settings_path = tmp_path / "defaults.yaml"
    schema_path.write_text(yaml.safe_dump(sample_schema, sort_keys=False), encoding="utf-8")
    settings_path.write_text(yaml.safe_dump(sample_defaults, sort_keys=False), encoding="utf-8")
    return schema_path, settings_path
