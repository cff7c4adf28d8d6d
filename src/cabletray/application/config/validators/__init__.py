"""Validators subpackage - checks run after schema validation.

- ValidationResult, SnapshotIssue, Severity: what the checks found
- SnapshotValidator: cross-reference checks between snapshot records
"""

from .snapshot import (
    Severity,
    SnapshotIssue,
    SnapshotValidator,
    ValidationResult,
    validate_snapshot,
)

__all__ = [
    "Severity",
    "SnapshotIssue",
    "SnapshotValidator",
    "ValidationResult",
    "validate_snapshot",
]
