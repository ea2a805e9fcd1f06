"""
length_calc: length take-off for selected CAD model elements.

Resolves a length parameter per element, converts it to the project's
display unit and totals it. See `length_calc.calculator.calculate`.
"""

from length_calc.logging_config import (
    setup_logging,
    get_logger,
    configure_default_logging,
    log_timing,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_default_logging",
    "log_timing",
]
