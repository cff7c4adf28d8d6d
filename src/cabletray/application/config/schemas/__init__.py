"""Snapshot configuration schemas.

Pydantic models that validate untrusted snapshot JSON before it is
converted into domain objects:
- base: shared model configuration and enum aliases
- layout_schema: cable layout settings
- project_schema: project, trays, cables, cable types
- material_schema: material catalogue and load curves
- root: SnapshotSchema
"""

from cabletray.application.config.schemas.base import (
    SUPPORTED_VERSIONS,
    BundleSpacingConfig,
    CableCategoryConfig,
    FreeSpaceBasisConfig,
    SnapshotModel,
)
from cabletray.application.config.schemas.layout_schema import (
    BundleRangeSchema,
    CableLayoutSchema,
    CategorySettingsSchema,
)
from cabletray.application.config.schemas.material_schema import (
    LoadCurvePointSchema,
    LoadCurveSchema,
    MaterialSupportSchema,
    MaterialTraySchema,
)
from cabletray.application.config.schemas.project_schema import (
    CableSchema,
    CableTypeSchema,
    ProjectSchema,
    SupportOverrideSchema,
    TraySchema,
)
from cabletray.application.config.schemas.root import SnapshotSchema

__all__ = [
    # Base
    "SUPPORTED_VERSIONS",
    "BundleSpacingConfig",
    "CableCategoryConfig",
    "FreeSpaceBasisConfig",
    "SnapshotModel",
    # Layout
    "BundleRangeSchema",
    "CableLayoutSchema",
    "CategorySettingsSchema",
    # Project
    "CableSchema",
    "CableTypeSchema",
    "ProjectSchema",
    "SupportOverrideSchema",
    "TraySchema",
    # Materials
    "LoadCurvePointSchema",
    "LoadCurveSchema",
    "MaterialSupportSchema",
    "MaterialTraySchema",
    # Root
    "SnapshotSchema",
]
