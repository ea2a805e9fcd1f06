"""
Pytest configuration and fixtures for the length calculator.

Provides:
- Parameter / element builders
- Host adapter doubles that fail on read
- The reference A/B/C selection used by the end-to-end tests
"""

from typing import List, Optional

import pytest

from length_calc.elements import (
    Element,
    ElementType,
    HostLookupError,
    Parameter,
    StorageKind,
)


# ============================================================================
# Builders
# ============================================================================

def numeric(name: str, value: Optional[float]) -> Parameter:
    return Parameter(name=name, storage=StorageKind.NUMERIC, value=value)


def integer(name: str, value: Optional[int]) -> Parameter:
    return Parameter(name=name, storage=StorageKind.INTEGER, value=value)


def text(name: str, value: Optional[str]) -> Parameter:
    return Parameter(name=name, storage=StorageKind.TEXT, value=value)


def make_element(
    name: str = "Element",
    parameters: Optional[List[Parameter]] = None,
    type_parameters: Optional[List[Parameter]] = None,
    family_name: Optional[str] = None,
) -> Element:
    element_type = None
    if type_parameters is not None:
        element_type = ElementType(name=f"{name} Type", parameters=type_parameters)
    return Element(
        name=name,
        parameters=parameters or [],
        family_name=family_name,
        element_type=element_type,
    )


# ============================================================================
# Host adapter doubles
# ============================================================================

class BrokenParameter(Parameter):
    """Parameter whose value cannot be read from the host."""

    @property
    def has_value(self) -> bool:
        raise HostLookupError(f"cannot read {self.name}")


class TypeCountingElement(Element):
    """Element that records how often its type was fetched."""

    type_fetches = 0

    def get_type(self):
        self.type_fetches += 1
        return super().get_type()


class BrokenTypeElement(Element):
    """Element whose type lookup fails."""

    def get_type(self):
        raise HostLookupError("type not available")


class BrokenNameElement(Element):
    """Element whose name cannot be read."""

    @property
    def family_name(self):
        raise HostLookupError("name not available")

    @family_name.setter
    def family_name(self, value):
        pass


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def element_a() -> Element:
    """Instance Length = 12.0 ft."""
    return make_element(
        "A",
        parameters=[text("Size", "50 mm"), numeric("Length", 12.0)],
        family_name="Pipe",
    )


@pytest.fixture
def element_b() -> Element:
    """No length anywhere."""
    return make_element("B", parameters=[numeric("Width", 2.0)], type_parameters=[])


@pytest.fixture
def element_c() -> Element:
    """Only the type carries Length = 5.5 ft."""
    return make_element(
        "C",
        parameters=[numeric("Area", 3.0)],
        type_parameters=[numeric("Length", 5.5)],
    )


@pytest.fixture
def abc_selection(element_a, element_b, element_c) -> List[Element]:
    return [element_a, element_b, element_c]
