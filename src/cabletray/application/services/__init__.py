"""Application services for tray reports.

- TrayReportService: Resolves per-tray inputs and runs the calculators
- TrayLoadResult: Per-tray results
"""

from .tray_report import TrayLoadResult, TrayReportService

__all__ = [
    "TrayLoadResult",
    "TrayReportService",
]
