"""
Per-selection length calculation.

For every selected element: display name, "Size" text, resolved length and
its display string. The records keep the input order; the summary is
rebuilt from them on every run.

Usage:
    from length_calc.calculator import calculate, NoSelection

    outcome = calculate(selected_elements, DisplayUnit.MILLIMETERS)
    if isinstance(outcome, NoSelection):
        prompt_user(outcome.message)
    else:
        print(outcome.summary.total_text, outcome.summary.unit_symbol)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Union

from length_calc.elements import Element, HostLookupError
from length_calc.logging_config import log_timing
from length_calc.resolver import LengthSource, resolve_length
from length_calc.units import (
    feet_to_meters,
    format_alternative_units,
    format_in_project_units,
    format_length,
    format_total,
)

logger = logging.getLogger(__name__)

NO_LENGTH_DISPLAY = "NO LENGTH PARAM"
UNKNOWN_NAME = "Unknown"
SIZE_PARAMETER = "Size"


@dataclass
class ElementLengthRecord:
    """One row of the result table."""
    element_name: str
    size: str = ""
    length_value: Optional[float] = None
    length_display: str = NO_LENGTH_DISPLAY
    parameter_name: Optional[str] = None
    source: Optional[LengthSource] = None

    @property
    def has_length(self) -> bool:
        return self.length_value is not None


@dataclass
class Summary:
    """Totals over one calculation run."""
    total_elements: int
    count_with_length: int
    total_internal: float
    total_display: float
    unit_symbol: str

    @property
    def total_feet(self) -> float:
        return self.total_internal

    @property
    def total_meters(self) -> float:
        return feet_to_meters(self.total_internal)

    @property
    def total_label(self) -> str:
        return f"TOTAL LENGTH ({self.unit_symbol.upper()})"

    @property
    def total_text(self) -> str:
        return format_total(self.total_display)

    @property
    def alternative_units_text(self) -> str:
        return format_alternative_units(self.total_internal)


@dataclass
class CalculationResult:
    records: List[ElementLengthRecord] = field(default_factory=list)
    summary: Optional[Summary] = None


@dataclass(frozen=True)
class NoSelection:
    """Returned instead of a result when there is nothing to calculate."""
    message: str = "No elements selected. Please select elements with a Length parameter first."


def get_element_name(element: Element) -> str:
    """Display name: "<Family> : <Name>" for family instances, else the name.

    Host adapters signal an unreadable name by raising `HostLookupError`,
    which gives "Unknown". Other exceptions propagate.
    """
    try:
        name = element.name
        family_name = element.family_name
    except HostLookupError as exc:
        logger.debug("Could not read element name: %s", exc)
        return UNKNOWN_NAME

    if name is None:
        return UNKNOWN_NAME
    if family_name:
        return f"{family_name} : {name}"
    return name


def get_size(element: Element) -> str:
    """Text of the "Size" parameter, or "" when it is missing or unreadable.

    Only `HostLookupError` counts as unreadable. A text parameter holding
    something other than a string gives "".
    """
    try:
        param = element.lookup_parameter(SIZE_PARAMETER)
        if param is None:
            return ""
        size = param.as_string()
        return size if isinstance(size, str) else ""
    except HostLookupError as exc:
        logger.debug("Could not read %r: %s", SIZE_PARAMETER, exc)
        return ""


def build_record(element: Element, unit_config: Any) -> ElementLengthRecord:
    """Resolve and format one element."""
    record = ElementLengthRecord(
        element_name=get_element_name(element),
        size=get_size(element),
    )

    resolved = resolve_length(element)
    if resolved.found:
        record.length_value = resolved.value
        record.parameter_name = resolved.parameter_name
        record.source = resolved.source
        converted, symbol = format_in_project_units(resolved.value, unit_config)
        record.length_display = format_length(converted, symbol)
        logger.debug("Resolved length", extra={
            "element": record.element_name,
            "parameter": record.parameter_name,
            "source": record.source,
            "length_feet": record.length_value,
        })
    else:
        logger.debug("No length parameter", extra={"element": record.element_name})

    return record


def calculate(
    elements: Optional[Iterable[Element]],
    unit_config: Any,
) -> Union[CalculationResult, NoSelection]:
    """Calculate lengths for a selection.

    Args:
        elements: Selected elements, in display order
        unit_config: Project length unit (see `units.read_length_unit`)

    Returns:
        CalculationResult with one record per element, or NoSelection if
        `elements` is None or empty.

    Raises:
        Whatever iterating `elements` raises. Per-element lookup problems
        never abort the run.
    """
    if elements is None:
        return NoSelection()
    elements = list(elements)
    if not elements:
        logger.info("No elements selected")
        return NoSelection()

    with log_timing(logger, "Calculating lengths", elements=len(elements)) as info:
        records = [build_record(element, unit_config) for element in elements]

        found = [r.length_value for r in records if r.length_value is not None]
        total_internal = sum(found, 0.0)
        total_display, symbol = format_in_project_units(total_internal, unit_config)

        summary = Summary(
            total_elements=len(records),
            count_with_length=len(found),
            total_internal=total_internal,
            total_display=total_display,
            unit_symbol=symbol,
        )
        info["with_length"] = summary.count_with_length

    logger.info(
        "Lengths calculated: %d/%d elements, total %s %s",
        summary.count_with_length, summary.total_elements,
        summary.total_text, summary.unit_symbol,
    )
    return CalculationResult(records=records, summary=summary)
