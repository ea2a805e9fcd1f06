"""
Conversion of internal lengths (feet) to the project's display unit.

The unit table is closed: only the five units below are converted. Any other
configured unit leaves the value in feet with the "ft" symbol.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Fixed cross-reference constant, independent of the project unit
FEET_TO_METERS = 0.3048

FALLBACK_SYMBOL = "ft"


class DisplayUnit(Enum):
    """Length display units a project can be configured with."""
    MILLIMETERS = "millimeters"
    CENTIMETERS = "centimeters"
    DECIMETERS = "decimeters"
    METERS = "meters"
    METERS_CENTIMETERS = "meters_centimeters"
    FEET = "feet"
    INCHES = "inches"
    FEET_FRACTIONAL_INCHES = "feet_fractional_inches"
    FRACTIONAL_INCHES = "fractional_inches"


# unit -> (symbol, feet-to-unit factor)
UNIT_TABLE: Dict[DisplayUnit, Tuple[str, float]] = {
    DisplayUnit.MILLIMETERS: ("mm", 304.8),
    DisplayUnit.CENTIMETERS: ("cm", 30.48),
    DisplayUnit.METERS: ("m", FEET_TO_METERS),
    DisplayUnit.FEET: ("ft", 1.0),
    DisplayUnit.INCHES: ("in", 12.0),
}


def read_length_unit(unit_config: Any) -> Optional[DisplayUnit]:
    """Read the configured length unit.

    Accepts a DisplayUnit, a unit identifier ("millimeters"), or any object
    with a ``get_length_unit()`` method. Returns None when the unit cannot
    be read or is not a known identifier. Any error raised while reading
    the unit counts as unreadable, so callers always get a display unit.
    """
    if unit_config is None:
        return None
    try:
        unit = unit_config
        if hasattr(unit, "get_length_unit"):
            unit = unit.get_length_unit()
        if isinstance(unit, DisplayUnit):
            return unit
        return DisplayUnit(str(unit).strip().lower())
    except Exception as exc:
        logger.debug("Could not read project length unit: %s", exc)
        return None


def format_in_project_units(value_feet: float, unit_config: Any) -> Tuple[float, str]:
    """Convert a length in feet to the project's display unit.

    Args:
        value_feet: Length in internal units
        unit_config: Project unit configuration (see `read_length_unit`)

    Returns:
        (converted value, unit symbol). Falls back to (value_feet, "ft") when
        the unit is unreadable or outside the supported table.
    """
    unit = read_length_unit(unit_config)
    if unit not in UNIT_TABLE:
        if unit is not None:
            logger.debug("No conversion for %s, showing feet", unit.value)
        return value_feet, FALLBACK_SYMBOL

    symbol, factor = UNIT_TABLE[unit]
    return value_feet * factor, symbol


def format_length(value: float, symbol: str) -> str:
    """Per-element display: four decimals and the unit symbol."""
    return f"{value:.4f} {symbol}"


def format_total(value: float) -> str:
    return f"{value:.4f}"


def feet_to_meters(value_feet: float) -> float:
    return value_feet * FEET_TO_METERS


def format_alternative_units(total_feet: float) -> str:
    """Total in meters and feet, e.g. "5.33 m / 17.50 ft"."""
    return f"{feet_to_meters(total_feet):.2f} m / {total_feet:.2f} ft"
