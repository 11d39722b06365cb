"""Extended multiplexing values and signal groups."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueRange:
    """An inclusive range of multiplexer switch values."""

    low: int
    high: int

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, int):
            return False
        return self.low <= value <= self.high


@dataclass(frozen=True, eq=False)
class SignalMultiplexerValue:
    """Ties a multiplexed signal to ranges of a named switch signal.

    Two values compare equal when the switch names match and every range of
    the right-hand value is also present in the left-hand one.
    """

    switch_name: str
    value_ranges: tuple[ValueRange, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "value_ranges", tuple(self.value_ranges))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignalMultiplexerValue):
            return NotImplemented
        return self.switch_name == other.switch_name and all(
            value_range in self.value_ranges for value_range in other.value_ranges
        )

    def __hash__(self) -> int:
        return hash(self.switch_name)

    def clone(self) -> SignalMultiplexerValue:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass(frozen=True, eq=False)
class SignalGroup:
    """A named group of signals within one message.

    Two groups compare equal when message id, name and repetitions match and
    every signal name of the right-hand group is also in the left-hand one.
    """

    message_id: int
    name: str
    repetitions: int = 1
    signal_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "signal_names", tuple(self.signal_names))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignalGroup):
            return NotImplemented
        return (
            self.message_id == other.message_id
            and self.name == other.name
            and self.repetitions == other.repetitions
            and all(name in self.signal_names for name in other.signal_names)
        )

    def __hash__(self) -> int:
        return hash((self.message_id, self.name, self.repetitions))

    def clone(self) -> SignalGroup:
        """Return an independent copy."""
        return dataclasses.replace(self)