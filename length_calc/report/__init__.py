"""
Presentation of calculation results: plain-text report and spreadsheet.
"""

from length_calc.report.clipboard import format_clipboard_text
from length_calc.report.xlsx_export import (
    NothingToExportError,
    build_workbook,
    export_to_xlsx,
)

__all__ = [
    "format_clipboard_text",
    "NothingToExportError",
    "build_workbook",
    "export_to_xlsx",
]
