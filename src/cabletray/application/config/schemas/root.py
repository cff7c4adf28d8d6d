"""Root snapshot schema.

A snapshot is one consistent set of project data: the project with its
settings, its trays, cables and cable types, and the material catalogue.
"""

from pydantic import Field, field_validator, model_validator

from cabletray.application.config.schemas.base import SUPPORTED_VERSIONS, SnapshotModel
from cabletray.application.config.schemas.material_schema import (
    LoadCurveSchema,
    MaterialSupportSchema,
    MaterialTraySchema,
)
from cabletray.application.config.schemas.project_schema import (
    CableSchema,
    CableTypeSchema,
    ProjectSchema,
    TraySchema,
)


def _duplicates(values: list[str]) -> list[str]:
    seen: set[str] = set()
    repeated: list[str] = []
    for value in values:
        if value in seen and value not in repeated:
            repeated.append(value)
        seen.add(value)
    return repeated


class SnapshotSchema(SnapshotModel):
    """Root model for a project snapshot file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        project: Project settings
        trays: Trays of the project
        cables: Cables of the project
        cable_types: Cable types of the project
        material_trays: Tray catalogue
        material_supports: Support catalogue
        load_curves: Load curves referenced by the tray catalogue

    Example:
        >>> snapshot = SnapshotSchema.model_validate(
        ...     {"schemaVersion": "1.0", "project": {"id": "p1"}}
        ... )
    """

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    project: ProjectSchema
    trays: list[TraySchema] = Field(default_factory=list)
    cables: list[CableSchema] = Field(default_factory=list)
    cable_types: list[CableTypeSchema] = Field(default_factory=list)
    material_trays: list[MaterialTraySchema] = Field(default_factory=list)
    material_supports: list[MaterialSupportSchema] = Field(default_factory=list)
    load_curves: list[LoadCurveSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v
        major = v.split(".")[0]
        supported_majors = {version.split(".")[0] for version in SUPPORTED_VERSIONS}
        if major in supported_majors:
            return v
        raise ValueError(
            f"Unsupported schema version: {v}. "
            f"Supported versions: {', '.join(sorted(SUPPORTED_VERSIONS))}"
        )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "SnapshotSchema":
        """Reject repeated ids within each collection."""
        collections = {
            "trays": [tray.id for tray in self.trays],
            "cables": [cable.id for cable in self.cables],
            "cableTypes": [cable_type.id for cable_type in self.cable_types],
            "materialTrays": [material.id for material in self.material_trays],
            "materialSupports": [support.id for support in self.material_supports],
            "loadCurves": [curve.id for curve in self.load_curves],
        }
        for name, ids in collections.items():
            repeated = _duplicates(ids)
            if repeated:
                raise ValueError(f"Duplicate ids in {name}: {', '.join(repeated)}")
        return self
