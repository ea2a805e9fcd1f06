"""
Length parameter resolution.

Projects name their length fields inconsistently, so the resolver tries
progressively looser criteria and stops at the first parameter that yields
a value:

  1. instance parameter named exactly "Length"
  2. any other instance parameter whose name contains "length"
  3. type parameter named exactly "Length"
  4. any other type parameter whose name contains "length"

Values are returned in internal units (feet), untouched.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from length_calc.elements import Element, HostLookupError, Parameter, StorageKind

logger = logging.getLogger(__name__)

LENGTH_PARAMETER = "Length"
LENGTH_KEYWORD = "length"

# Leading number in free text: "Size: 4.25 ft" -> "4.25", "3,5 m" -> "3,5"
_NUMBER_RE = re.compile(r"[-+]?\d+[,.\d]*")


class LengthSource(Enum):
    """Where a length value was found."""
    INSTANCE = "Instance"
    TYPE = "Type"


@dataclass(frozen=True)
class ResolvedLength:
    """Outcome of a lookup. All fields are set, or none are."""
    value: Optional[float] = None
    parameter_name: Optional[str] = None
    source: Optional[LengthSource] = None

    @property
    def found(self) -> bool:
        return self.value is not None


def parse_length_text(text: Optional[str]) -> Optional[float]:
    """Pull the first signed number out of free text.

    Both '.' and ',' are accepted as decimal separator. Returns None for
    blank text, text without digits, or a match that does not parse
    (e.g. "1,234.5").
    """
    if text is None or not text.strip():
        return None
    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    try:
        return float(match.group().replace(",", "."))
    except ValueError:
        return None


def extract_value(param: Optional[Parameter]) -> Optional[float]:
    """Read a parameter as a float, or None if it cannot supply one."""
    if param is None:
        return None
    try:
        if not param.has_value:
            return None
        storage = param.storage
        if storage is StorageKind.NUMERIC:
            return float(param.as_double())
        if storage is StorageKind.INTEGER:
            return float(param.as_integer())
        if storage is StorageKind.TEXT:
            return parse_length_text(param.as_string())
    except (HostLookupError, TypeError, ValueError) as exc:
        logger.debug("Could not read parameter %r: %s", getattr(param, "name", None), exc)
    return None


def _parameter_name(param: Parameter) -> Optional[str]:
    try:
        return param.name
    except (HostLookupError, AttributeError):
        return None


def _search(owner, source: LengthSource) -> ResolvedLength:
    """Steps 1-2 (or 3-4) against one parameter set."""
    try:
        exact = owner.lookup_parameter(LENGTH_PARAMETER)
    except HostLookupError as exc:
        logger.debug("Lookup of %r failed: %s", LENGTH_PARAMETER, exc)
        exact = None

    value = extract_value(exact)
    if value is not None:
        return ResolvedLength(value, _parameter_name(exact) or LENGTH_PARAMETER, source)

    try:
        params: Iterable[Parameter] = list(owner.iter_parameters())
    except HostLookupError as exc:
        logger.debug("Could not enumerate %s parameters: %s", source.value.lower(), exc)
        return ResolvedLength()

    for param in params:
        if param is exact:
            continue
        name = _parameter_name(param)
        if not name or LENGTH_KEYWORD not in name.lower():
            continue
        value = extract_value(param)
        if value is not None:
            return ResolvedLength(value, name, source)

    return ResolvedLength()


def resolve_length(element: Element) -> ResolvedLength:
    """Find the best length value for an element.

    The element type is only fetched when no instance parameter resolves.
    Lookup failures never escape; an element with nothing usable gets an
    all-empty `ResolvedLength`.
    """
    resolved = _search(element, LengthSource.INSTANCE)
    if resolved.found:
        return resolved

    try:
        element_type = element.get_type()
    except HostLookupError as exc:
        logger.debug("Could not read element type: %s", exc)
        element_type = None

    if element_type is None:
        return ResolvedLength()
    return _search(element_type, LengthSource.TYPE)
