"""
Read-only view of the host model: elements, their types and parameters.

The calculator never talks to the host application directly. A host adapter
exposes each selected element as an `Element` (or a subclass that reads
lazily from the host API) and raises `HostLookupError` whenever a value
cannot be read. Everything the core reads goes through these accessors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class HostLookupError(Exception):
    """A value could not be read from the host model."""


class StorageKind(Enum):
    """How a parameter stores its value."""
    NUMERIC = "numeric"
    INTEGER = "integer"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


@dataclass
class Parameter:
    """A named parameter of an element or element type.

    `value` is None when the parameter exists but has no value set.
    Numeric values are stored in internal units (feet).
    """
    name: str
    storage: StorageKind = StorageKind.NUMERIC
    value: Any = None

    @property
    def has_value(self) -> bool:
        return self.value is not None

    def as_double(self) -> float:
        if self.storage is not StorageKind.NUMERIC:
            raise HostLookupError(f"Parameter {self.name!r} is not numeric")
        return self.value

    def as_integer(self) -> int:
        if self.storage is not StorageKind.INTEGER:
            raise HostLookupError(f"Parameter {self.name!r} is not an integer")
        return self.value

    def as_string(self) -> Optional[str]:
        # Host APIs answer None rather than failing for non-text storage
        if self.storage is not StorageKind.TEXT:
            return None
        return self.value


class _ParameterSet:
    parameters: List[Parameter]

    def iter_parameters(self) -> Iterator[Parameter]:
        """Parameters in the host's natural enumeration order."""
        return iter(self.parameters)

    def lookup_parameter(self, name: str) -> Optional[Parameter]:
        """First parameter named exactly `name`, or None."""
        for param in self.iter_parameters():
            if param.name == name:
                return param
        return None


@dataclass
class ElementType(_ParameterSet):
    """Shared type (family symbol) of an element."""
    name: Optional[str] = None
    family_name: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)


@dataclass
class Element(_ParameterSet):
    """A selected model element.

    `family_name` is set for family instances and drives the
    "<Family> : <Name>" display name. Adapters that fetch the type lazily
    override `get_type()`.
    """
    name: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    family_name: Optional[str] = None
    element_type: Optional[ElementType] = None
    element_id: Optional[int] = None

    def get_type(self) -> Optional[ElementType]:
        return self.element_type


def parameter_from_dict(data: Dict[str, Any]) -> Parameter:
    """Build a Parameter from ``{"name": ..., "storage": ..., "value": ...}``.

    When `storage` is omitted it is inferred from the value: int → integer,
    float → numeric, str → text.
    """
    value = data.get("value")
    storage = data.get("storage")
    if storage is None:
        if isinstance(value, bool):
            storage = StorageKind.UNSUPPORTED
        elif isinstance(value, int):
            storage = StorageKind.INTEGER
        elif isinstance(value, str):
            storage = StorageKind.TEXT
        else:
            storage = StorageKind.NUMERIC
    elif not isinstance(storage, StorageKind):
        storage = StorageKind(storage)
    return Parameter(name=data["name"], storage=storage, value=value)


def element_from_dict(data: Dict[str, Any]) -> Element:
    """Build an Element (and its type) from a plain dictionary snapshot.

    Example:
        element_from_dict({
            "name": "50mm",
            "family_name": "Pipe",
            "parameters": [{"name": "Length", "value": 12.0}],
            "type": {"name": "Standard", "parameters": [{"name": "Length", "value": 5.5}]},
        })
    """
    element_type = None
    type_data = data.get("type")
    if type_data is not None:
        element_type = ElementType(
            name=type_data.get("name"),
            family_name=type_data.get("family_name"),
            parameters=[parameter_from_dict(p) for p in type_data.get("parameters", [])],
        )

    return Element(
        name=data.get("name"),
        parameters=[parameter_from_dict(p) for p in data.get("parameters", [])],
        family_name=data.get("family_name"),
        element_type=element_type,
        element_id=data.get("id"),
    )
