"""
Unit tests for length_calc.elements module.
"""

import pytest

from length_calc.elements import (
    Element,
    ElementType,
    HostLookupError,
    Parameter,
    StorageKind,
    element_from_dict,
    parameter_from_dict,
)


class TestParameter:
    """Tests for Parameter accessors."""

    def test_has_value(self):
        assert Parameter("Length", StorageKind.NUMERIC, 1.0).has_value
        assert not Parameter("Length", StorageKind.NUMERIC).has_value

    def test_wrong_accessor_raises(self):
        """Test typed accessors refuse other storage kinds."""
        param = Parameter("Length", StorageKind.TEXT, "3 ft")
        with pytest.raises(HostLookupError):
            param.as_double()
        with pytest.raises(HostLookupError):
            param.as_integer()

    def test_as_string_non_text(self):
        """Test as_string answers None for non-text storage."""
        assert Parameter("Length", StorageKind.NUMERIC, 1.0).as_string() is None


class TestLookup:
    """Tests for parameter lookup on elements and types."""

    def test_lookup_exact_name(self):
        element = Element(name="x", parameters=[
            Parameter("Overall Length", value=2.0),
            Parameter("Length", value=1.0),
        ])
        assert element.lookup_parameter("Length").value == 1.0

    def test_lookup_is_case_sensitive(self):
        element = Element(name="x", parameters=[Parameter("length", value=1.0)])
        assert element.lookup_parameter("Length") is None

    def test_enumeration_order(self):
        element_type = ElementType(parameters=[Parameter("b"), Parameter("a")])
        assert [p.name for p in element_type.iter_parameters()] == ["b", "a"]

    def test_get_type(self):
        element_type = ElementType(name="T")
        assert Element(element_type=element_type).get_type() is element_type
        assert Element().get_type() is None


class TestFromDict:
    """Tests for snapshot deserialization."""

    @pytest.mark.parametrize("value, storage", [
        (1.5, StorageKind.NUMERIC),
        (3, StorageKind.INTEGER),
        ("3 ft", StorageKind.TEXT),
        (None, StorageKind.NUMERIC),
        (True, StorageKind.UNSUPPORTED),
    ])
    def test_storage_inferred(self, value, storage):
        assert parameter_from_dict({"name": "p", "value": value}).storage is storage

    def test_explicit_storage(self):
        param = parameter_from_dict({"name": "p", "storage": "text", "value": None})
        assert param.storage is StorageKind.TEXT
        assert not param.has_value

    def test_element_with_type(self):
        element = element_from_dict({
            "id": 1001,
            "name": "50mm",
            "family_name": "Pipe",
            "parameters": [{"name": "Size", "value": "50 mm"}],
            "type": {"name": "Standard", "parameters": [{"name": "Length", "value": 5.5}]},
        })

        assert element.element_id == 1001
        assert element.family_name == "Pipe"
        assert element.lookup_parameter("Size").value == "50 mm"
        assert element.get_type().lookup_parameter("Length").value == 5.5

    def test_element_without_type(self):
        assert element_from_dict({"name": "x"}).get_type() is None
