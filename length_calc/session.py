"""
Calculator session: the state behind the length calculator dialog.

A session is opened with the current selection. If elements are already
selected the lengths are calculated straight away; otherwise the caller
triggers `recalculate()` when the user asks. Each successful run replaces
the previous result entirely. A failed run leaves the previous result in
place.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from length_calc.calculator import CalculationResult, NoSelection, calculate
from length_calc.elements import Element
from length_calc.project_config import ProjectConfig
from length_calc.report.clipboard import format_clipboard_text
from length_calc.report.xlsx_export import NothingToExportError, export_to_xlsx

logger = logging.getLogger(__name__)


class LengthCalculatorSession:
    """Holds the selection, the unit configuration and the latest result.

    Args:
        elements: Selected elements (may be empty)
        unit_config: Project length unit. Defaults to `config.units`.
        config: Project configuration
    """

    def __init__(
        self,
        elements: Optional[Sequence[Element]],
        unit_config: Any = None,
        config: Optional[ProjectConfig] = None,
    ):
        self.elements = list(elements) if elements else []
        self.config = config or ProjectConfig()
        self.unit_config = unit_config if unit_config is not None else self.config.units
        self.result: Optional[CalculationResult] = None

        if self.elements:
            self.recalculate()

    @property
    def can_export(self) -> bool:
        return self.result is not None

    def recalculate(self) -> Union[CalculationResult, NoSelection]:
        """Run the calculation and, on success, replace the current result."""
        outcome = calculate(self.elements, self.unit_config)
        if isinstance(outcome, NoSelection):
            return outcome
        self.result = outcome
        return outcome

    def copy_text(self) -> str:
        """Plain-text report of the current result."""
        if self.result is None:
            raise NothingToExportError("No data to copy. Please calculate first.")
        return format_clipboard_text(self.result)

    def export(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the current result to a spreadsheet.

        Args:
            path: Target file; the configured default file name if omitted
        """
        target = Path(path) if path is not None else Path(self.config.export.default_filename)
        return export_to_xlsx(self.result, target, unit_config=self.unit_config, config=self.config)
