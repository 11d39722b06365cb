"""Attributes, attribute definitions, bit timing and environment variables."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Union

from canlayout.values import ValueEncodingDescription


class ObjectType(Enum):
    """Kind of object an attribute applies to."""

    NETWORK = 0
    NODE = 1
    MESSAGE = 2
    SIGNAL = 3
    ENVIRONMENT_VARIABLE = 4


@dataclass(frozen=True)
class IntValueType:
    """Integer attribute with an inclusive range."""

    minimum: int
    maximum: int


@dataclass(frozen=True)
class HexValueType:
    """Integer attribute written in hexadecimal, with an inclusive range."""

    minimum: int
    maximum: int


@dataclass(frozen=True)
class FloatValueType:
    """Floating point attribute with an inclusive range."""

    minimum: float
    maximum: float


@dataclass(frozen=True)
class StringValueType:
    """Free-form string attribute."""


@dataclass(frozen=True)
class EnumValueType:
    """Attribute restricted to a list of named values."""

    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


AttributeValueType = Union[
    IntValueType, HexValueType, FloatValueType, StringValueType, EnumValueType
]
AttributeValue = Union[int, float, str]


@dataclass(frozen=True)
class AttributeDefinition:
    """Declares an attribute's name, owner kind and value type."""

    name: str
    object_type: ObjectType
    value_type: AttributeValueType

    def clone(self) -> AttributeDefinition:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class Attribute:
    """A named attribute value attached to an object."""

    name: str
    object_type: ObjectType
    value: AttributeValue

    def clone(self) -> Attribute:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class BitTiming:
    """Baud rate and bit timing registers of a bus."""

    baudrate: int = 0
    btr1: int = 0
    btr2: int = 0

    def clone(self) -> BitTiming:
        """Return an independent copy."""
        return dataclasses.replace(self)


class VarType(Enum):
    """Data type of an environment variable."""

    INTEGER = 0
    FLOAT = 1
    STRING = 2
    DATA = 3


class AccessType(IntEnum):
    """Access rights of an environment variable."""

    UNRESTRICTED = 0x0000
    READ = 0x0001
    WRITE = 0x0002
    READ_WRITE = 0x0003
    UNRESTRICTED_ = 0x8000
    READ_ = 0x8001
    WRITE_ = 0x8002
    READ_WRITE_ = 0x8003


@dataclass(frozen=True)
class EnvironmentVariable:
    """A variable shared between the nodes of a network."""

    name: str
    var_type: VarType = VarType.INTEGER
    minimum: float = 0.0
    maximum: float = 0.0
    unit: str = ""
    initial_value: float = 0.0
    ev_id: int = 0
    access_type: AccessType = AccessType.UNRESTRICTED
    access_nodes: tuple[str, ...] = ()
    value_encoding_descriptions: tuple[ValueEncodingDescription, ...] = ()
    data_size: int = 0
    attribute_values: tuple[Attribute, ...] = field(default=())
    comment: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "access_nodes", tuple(self.access_nodes))
        object.__setattr__(
            self,
            "value_encoding_descriptions",
            tuple(self.value_encoding_descriptions),
        )
        object.__setattr__(self, "attribute_values", tuple(self.attribute_values))

    def clone(self) -> EnvironmentVariable:
        """Return an independent copy."""
        return dataclasses.replace(self)