"""
Plain-text report, as placed on the clipboard.
"""

from typing import List

from length_calc.calculator import CalculationResult


def format_clipboard_text(result: CalculationResult) -> str:
    """Summary lines followed by one line per element.

    Example:
        Total elements selected: 3
        Elements with length param found: 2
        Total length: 5334.0000 | 5.33 m / 17.50 ft

        Per-element:

        Pipe : 50mm (Size: 50 mm) : 3657.6000 mm
    """
    summary = result.summary
    lines: List[str] = [
        f"Total elements selected: {summary.total_elements}",
        f"Elements with length param found: {summary.count_with_length}",
        f"Total length: {summary.total_text} | {summary.alternative_units_text}",
        "",
        "Per-element:",
        "",
    ]
    for record in result.records:
        lines.append(f"{record.element_name} (Size: {record.size}) : {record.length_display}")

    return "\n".join(lines) + "\n"
