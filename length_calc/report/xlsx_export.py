"""
Spreadsheet export of calculation results (openpyxl).

Layout:
    row 1   Element Name | Size | Length (<unit>) | Parameter Name | Source   (bold, gray)
    row 2   TOTALS       |      |                 | <mm> mm        | <m> m    (bold)
    row 4+  one row per element
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from length_calc.calculator import CalculationResult
from length_calc.project_config import ExportConfig, ProjectConfig
from length_calc.units import feet_to_meters, format_in_project_units

logger = logging.getLogger(__name__)

HEADER_ROW = 1
TOTALS_ROW = 2
FIRST_DATA_ROW = 4
NOT_AVAILABLE = "N/A"


class NothingToExportError(ValueError):
    """Raised when there are no calculated records to export."""


def _export_settings(config: Optional[ProjectConfig]) -> ExportConfig:
    return config.export if config is not None else ExportConfig()


def build_workbook(
    result: Optional[CalculationResult],
    unit_config: Any = None,
    config: Optional[ProjectConfig] = None,
) -> Workbook:
    """Fill a new workbook with the result table.

    Args:
        result: Calculation result to export
        unit_config: Project length unit, used for the Length column header
        config: Project configuration (export section)

    Raises:
        NothingToExportError: If there is no result or it has no records
    """
    if result is None or not result.records:
        raise NothingToExportError("No data to export. Please calculate first.")

    settings = _export_settings(config)
    _, unit_symbol = format_in_project_units(1.0, unit_config)

    wb = Workbook()
    ws = wb.active
    ws.title = settings.sheet_title

    headers = ["Element Name", "Size", f"Length ({unit_symbol})", "Parameter Name", "Source"]
    header_fill = PatternFill(fill_type="solid", start_color=settings.header_fill,
                              end_color=settings.header_fill)
    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = Font(bold=True)
        cell.fill = header_fill

    total_feet = sum(r.length_value for r in result.records if r.length_value is not None)
    total_m = feet_to_meters(total_feet)
    total_mm = total_m * 1000

    ws.cell(row=TOTALS_ROW, column=1, value="TOTALS")
    ws.cell(row=TOTALS_ROW, column=4, value=f"{total_mm:.2f} mm")
    ws.cell(row=TOTALS_ROW, column=5, value=f"{total_m:.4f} m")
    for col in range(1, len(headers) + 1):
        ws.cell(row=TOTALS_ROW, column=col).font = Font(bold=True)

    for row, record in enumerate(result.records, start=FIRST_DATA_ROW):
        ws.cell(row=row, column=1, value=record.element_name)
        ws.cell(row=row, column=2, value=record.size)
        ws.cell(row=row, column=3, value=record.length_display)
        ws.cell(row=row, column=4, value=record.parameter_name or NOT_AVAILABLE)
        ws.cell(row=row, column=5, value=record.source.value if record.source else NOT_AVAILABLE)

    if settings.autofit_columns:
        _fit_columns(ws)

    return wb


def _fit_columns(ws) -> None:
    for col_idx, column in enumerate(ws.iter_cols(), start=1):
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_idx)].width = width + 2


def export_to_xlsx(
    result: Optional[CalculationResult],
    path: Union[str, Path],
    unit_config: Any = None,
    config: Optional[ProjectConfig] = None,
) -> Path:
    """Write the result table to an .xlsx file.

    Returns:
        Path of the saved workbook

    Raises:
        NothingToExportError: If there is nothing to export
        OSError: If the file cannot be written
    """
    wb = build_workbook(result, unit_config=unit_config, config=config)
    path = Path(path)
    wb.save(path)
    logger.info("Exported %d rows to %s", len(result.records), path)
    return path
