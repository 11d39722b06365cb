"""Value encodings, signal types and value tables."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from canlayout.enums import ByteOrder, ValueType


@dataclass(frozen=True)
class ValueEncodingDescription:
    """Maps a raw value to a human readable description."""

    value: int
    description: str

    def clone(self) -> ValueEncodingDescription:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class SignalType:
    """A reusable signal template.

    The byte order does not take part in equality comparisons.
    """

    name: str
    signal_size: int
    byte_order: ByteOrder = field(compare=False)
    value_type: ValueType
    factor: float
    offset: float
    minimum: float
    maximum: float
    unit: str
    default_value: float
    value_table: str

    def clone(self) -> SignalType:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True, eq=False)
class ValueTable:
    """A named table of value encodings, optionally tied to a signal type.

    Two tables compare equal when name and signal type match and every
    description of the right-hand table is also present in the left-hand one.
    """

    name: str
    signal_type: Optional[SignalType] = None
    value_encoding_descriptions: tuple[ValueEncodingDescription, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "value_encoding_descriptions",
            tuple(self.value_encoding_descriptions),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueTable):
            return NotImplemented
        return (
            self.name == other.name
            and self.signal_type == other.signal_type
            and all(
                ved in self.value_encoding_descriptions
                for ved in other.value_encoding_descriptions
            )
        )

    def __hash__(self) -> int:
        return hash((self.name, self.signal_type))

    def clone(self) -> ValueTable:
        """Return an independent copy."""
        return dataclasses.replace(self)