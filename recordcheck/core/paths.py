#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for recordcheck.

The packaged default configuration lives next to the code:

    recordcheck/
    ├── configs/
    │   ├── schema.yaml            # Column specs per entity type
    │   └── default_settings.yaml  # Default settings catalog
    └── ...

Logs go to ``./logs`` under the current working directory unless the
RECORDCHECK_LOG_DIR environment variable points elsewhere.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


# ----- Package directory -----
ROOT: Path = Path(__file__).resolve().parent.parent

# ---- Configuration ----
CONFIGS_DIR = ROOT / "configs"
SCHEMA_PATH = CONFIGS_DIR / "schema.yaml"
DEFAULT_SETTINGS_PATH = CONFIGS_DIR / "default_settings.yaml"

# ---- Logs ----
LOG_DIR = Path(os.environ.get("RECORDCHECK_LOG_DIR", Path.cwd() / "logs"))
