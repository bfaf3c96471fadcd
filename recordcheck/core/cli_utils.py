#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for recordcheck commands.

Functions:
    setup_logger: Initialize RecordcheckLogger for CLI operations
"""
from pathlib import Path
from recordcheck.core.logging_manager import RecordcheckLogger


def setup_logger(log_dir: Path, component_name: str) -> RecordcheckLogger:
    """
    Setup logging for CLI operations.

    Logs are written below ``<log_dir>/operations``.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier for logging (e.g. 'validate')

    Returns:
        Configured RecordcheckLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return RecordcheckLogger(operations_log_dir, component_name=component_name)
