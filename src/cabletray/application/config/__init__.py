"""Snapshot configuration loading and the settings validation boundary.

This package turns untrusted JSON into trusted domain objects. It
includes Pydantic models for schema validation, a loader with
comprehensive error handling, the cable layout normalizers and
cross-reference checks.

Public API:
    - SnapshotSchema: Root snapshot model
    - CableLayoutSchema: Cable layout settings model
    - load_snapshot: Load a snapshot from a JSON file
    - load_snapshot_from_dict: Load a snapshot from a dictionary
    - load_free_space_overrides: Load operator free space overrides
    - ConfigError: Exception for configuration errors
    - LayoutConfigError: Exception for rejected layout settings
    - validate_bundle_ranges: Check custom bundle ranges
    - normalize_category_settings: Normalize per-category settings
    - normalize_cable_layout: Normalize project-wide layout settings
    - snapshot_to_domain: Convert a snapshot into domain objects
    - ValidationResult: Container for validation results
    - validate_snapshot: Run cross-reference checks

Example:
    >>> from pathlib import Path
    >>> from cabletray.application.config import load_snapshot, ConfigError
    >>>
    >>> try:
    ...     snapshot = load_snapshot(Path("project.json"))
    ...     print(f"{len(snapshot.trays)} trays")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabletray.application.config.adapter import (
    ProjectSnapshot,
    config_to_layout,
    config_to_project,
    snapshot_to_domain,
)
from cabletray.application.config.loader import (
    ConfigError,
    load_free_space_overrides,
    load_snapshot,
    load_snapshot_from_dict,
)
from cabletray.application.config.normalize import (
    LayoutConfigError,
    normalize_cable_layout,
    normalize_category_settings,
    validate_bundle_ranges,
)
from cabletray.application.config.schemas import (
    BundleRangeSchema,
    CableLayoutSchema,
    CableSchema,
    CableTypeSchema,
    CategorySettingsSchema,
    LoadCurvePointSchema,
    LoadCurveSchema,
    MaterialSupportSchema,
    MaterialTraySchema,
    ProjectSchema,
    SnapshotSchema,
    SupportOverrideSchema,
    TraySchema,
)
from cabletray.application.config.validators import (
    Severity,
    SnapshotIssue,
    ValidationResult,
    validate_snapshot,
)

__all__ = [
    # Schemas
    "BundleRangeSchema",
    "CableLayoutSchema",
    "CableSchema",
    "CableTypeSchema",
    "CategorySettingsSchema",
    "LoadCurvePointSchema",
    "LoadCurveSchema",
    "MaterialSupportSchema",
    "MaterialTraySchema",
    "ProjectSchema",
    "SnapshotSchema",
    "SupportOverrideSchema",
    "TraySchema",
    # Loading
    "ConfigError",
    "load_free_space_overrides",
    "load_snapshot",
    "load_snapshot_from_dict",
    # Normalization
    "LayoutConfigError",
    "normalize_cable_layout",
    "normalize_category_settings",
    "validate_bundle_ranges",
    # Adapter
    "ProjectSnapshot",
    "config_to_layout",
    "config_to_project",
    "snapshot_to_domain",
    # Validation
    "Severity",
    "SnapshotIssue",
    "ValidationResult",
    "validate_snapshot",
]
