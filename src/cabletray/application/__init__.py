"""Application layer - snapshot loading and report orchestration."""

from .services import TrayLoadResult, TrayReportService

__all__ = [
    "TrayLoadResult",
    "TrayReportService",
]
