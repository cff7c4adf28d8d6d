"""Snapshot file loader with comprehensive error handling.

This module loads and parses JSON snapshot files and free space override
files. It handles file system errors, JSON parsing errors and Pydantic
validation errors with clear, actionable error messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabletray.application.config.schemas import SnapshotSchema

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message for display."""
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Args:
        loc: Tuple of path segments (strings for keys, ints for array indices)

    Returns:
        Formatted JSON path like "trays[0].widthMm"

    Examples:
        >>> _format_json_path(("project", "cableLayout", "power", "maxRows"))
        'project.cableLayout.power.maxRows'
        >>> _format_json_path(("cables", 2, "diameterMm"))
        'cables[2].diameterMm'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Extract and format validation errors from a Pydantic ValidationError.

    Returns:
        List of error dictionaries with path, message, value, and error_type
    """
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    """Format validation error details into a human-readable message."""
    lines = ["Snapshot validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        message = detail["message"]
        value = detail.get("value")
        # Whole-object inputs make the line unreadable
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path, kind: str) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"{kind} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {kind.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {kind.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {kind.lower()} file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def load_snapshot(path: Path) -> SnapshotSchema:
    """Load and validate a project snapshot from a JSON file.

    Args:
        path: Path to the JSON snapshot file

    Returns:
        A validated SnapshotSchema instance

    Raises:
        ConfigError: If the file cannot be loaded or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed

    Example:
        >>> try:
        ...     snapshot = load_snapshot(Path("project.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    data = _read_json(path, "Snapshot")
    logger.debug(f"Loaded snapshot JSON from {path}")

    try:
        return SnapshotSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_snapshot_from_dict(data: dict[str, Any]) -> SnapshotSchema:
    """Load and validate a project snapshot from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    try:
        return SnapshotSchema.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        )


def load_free_space_overrides(path: Path) -> dict[str, Any]:
    """Load operator free space overrides keyed by tray id.

    Values are passed through untouched; apply_free_space_overrides decides
    which of them are usable.

    Raises:
        ConfigError: If the file is missing, not JSON or not an object.
    """
    data = _read_json(path, "Overrides")
    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Overrides file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
        )
    return {str(key): value for key, value in data.items()}
