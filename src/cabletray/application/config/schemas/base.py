"""Base model and shared enums for snapshot configuration schemas.

Snapshots come from the REST layer with camelCase keys; hand-written
files often use snake_case. Every schema accepts both.

Enums are imported from the domain layer and aliased here so schema
modules only import from this package.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from cabletray.domain.value_objects import (
    BundleSpacing,
    CableCategory,
    FreeSpaceBasis,
)

# Supported schema versions for snapshot files
# Version 1.0: Projects, trays, cables, cable types and material catalogue
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

BundleSpacingConfig = BundleSpacing
CableCategoryConfig = CableCategory
FreeSpaceBasisConfig = FreeSpaceBasis


class SnapshotModel(BaseModel):
    """Base model: unknown keys rejected, camelCase or snake_case accepted."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )
