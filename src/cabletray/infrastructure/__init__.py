"""Infrastructure layer - output formatters."""

from .formatters import (
    FreeSpaceFormatter,
    JsonExporter,
    SupportPlanFormatter,
    TrayReportFormatter,
)

__all__ = [
    "FreeSpaceFormatter",
    "JsonExporter",
    "SupportPlanFormatter",
    "TrayReportFormatter",
]
