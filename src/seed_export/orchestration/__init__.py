"""
Seed export orchestration.

Drives the per-table fetch/compile loop and applies the run-level failure
policy.
"""

from .export_job import (
    AllTablesFailedError,
    ExportReport,
    TableOutcome,
    TableStatus,
    run_export,
)

__all__ = [
    "AllTablesFailedError",
    "ExportReport",
    "TableOutcome",
    "TableStatus",
    "run_export",
]
