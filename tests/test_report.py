"""
Unit tests for length_calc.report (plain-text report and xlsx export).
"""

import pytest
from openpyxl import load_workbook

from length_calc.calculator import CalculationResult, calculate
from length_calc.project_config import ProjectConfig
from length_calc.report import (
    NothingToExportError,
    build_workbook,
    export_to_xlsx,
    format_clipboard_text,
)
from length_calc.units import DisplayUnit


@pytest.fixture
def mm_result(abc_selection) -> CalculationResult:
    return calculate(abc_selection, DisplayUnit.MILLIMETERS)


class TestClipboardText:
    """Tests for format_clipboard_text."""

    def test_layout(self, mm_result):
        """Test summary lines, blank separators and per-element lines."""
        lines = format_clipboard_text(mm_result).splitlines()

        assert lines[0] == "Total elements selected: 3"
        assert lines[1] == "Elements with length param found: 2"
        assert lines[2] == "Total length: 5334.0000 | 5.33 m / 17.50 ft"
        assert lines[3] == ""
        assert lines[4] == "Per-element:"
        assert lines[5] == ""
        assert lines[6:] == [
            "Pipe : A (Size: 50 mm) : 3657.6000 mm",
            "B (Size: ) : NO LENGTH PARAM",
            "C (Size: ) : 1676.4000 mm",
        ]

    def test_trailing_newline(self, mm_result):
        assert format_clipboard_text(mm_result).endswith("\n")


class TestXlsxExport:
    """Tests for the spreadsheet exporter."""

    def test_header_row(self, mm_result):
        """Test five bold, filled header cells with the unit in the Length header."""
        ws = build_workbook(mm_result, unit_config=DisplayUnit.MILLIMETERS).active

        assert [c.value for c in ws[1]] == [
            "Element Name", "Size", "Length (mm)", "Parameter Name", "Source",
        ]
        assert all(c.font.bold for c in ws[1])
        assert ws["A1"].fill.start_color.rgb.endswith("D3D3D3")

    def test_totals_row(self, mm_result):
        """Test totals in mm and m from the fixed 0.3048 constant."""
        ws = build_workbook(mm_result, unit_config=DisplayUnit.MILLIMETERS).active

        assert ws["A2"].value == "TOTALS"
        assert ws["D2"].value == "5334.00 mm"
        assert ws["E2"].value == "5.3340 m"
        assert ws["A2"].font.bold

    def test_data_rows_start_two_below_header(self, mm_result):
        """Test row 3 is empty and data starts on row 4."""
        ws = build_workbook(mm_result, unit_config=DisplayUnit.MILLIMETERS).active

        assert all(c.value is None for c in ws[3])
        assert [c.value for c in ws[4]] == [
            "Pipe : A", "50 mm", "3657.6000 mm", "Length", "Instance",
        ]
        assert [c.value for c in ws[5]] == [
            "B", "", "NO LENGTH PARAM", "N/A", "N/A",
        ]
        assert [c.value for c in ws[6]][3:] == ["Length", "Type"]
        assert ws.max_row == 6

    def test_totals_independent_of_project_unit(self, abc_selection):
        """Test the totals row is always mm / m even in a feet project."""
        result = calculate(abc_selection, DisplayUnit.FEET)
        ws = build_workbook(result, unit_config=DisplayUnit.FEET).active

        assert ws["C1"].value == "Length (ft)"
        assert ws["D2"].value == "5334.00 mm"

    def test_sheet_title_from_config(self, mm_result):
        config = ProjectConfig()
        config.export.sheet_title = "Pipes"
        wb = build_workbook(mm_result, config=config)
        assert wb.active.title == "Pipes"

    def test_save_and_reload(self, mm_result, tmp_path):
        """Test the workbook is written and readable."""
        path = export_to_xlsx(mm_result, tmp_path / "lengths.xlsx",
                              unit_config=DisplayUnit.MILLIMETERS)

        assert path.exists()
        ws = load_workbook(path).active
        assert ws["A1"].value == "Element Name"
        assert ws["A4"].value == "Pipe : A"

    def test_column_widths_fitted(self, mm_result):
        ws = build_workbook(mm_result).active
        assert ws.column_dimensions["C"].width >= len("NO LENGTH PARAM")

    @pytest.mark.parametrize("result", [None, CalculationResult()])
    def test_nothing_to_export(self, result, tmp_path):
        """Test exporting without records raises."""
        with pytest.raises(NothingToExportError):
            export_to_xlsx(result, tmp_path / "empty.xlsx")
        assert not (tmp_path / "empty.xlsx").exists()
