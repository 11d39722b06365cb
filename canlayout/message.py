"""CAN messages and the signals they carry."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from canlayout.attributes import Attribute
from canlayout.enums import Multiplexer
from canlayout.multiplex import SignalGroup
from canlayout.signal import Signal


@dataclass(frozen=True, eq=False)
class Message:
    """A CAN message: identifier, payload size, sender and signals.

    Two messages compare equal when identifier, name, size, transmitter and
    comment match and every transmitter, signal, attribute and signal group
    of the right-hand message is also present in the left-hand one.
    """

    id: int
    name: str
    message_size: int = 8
    transmitter: str = ""
    message_transmitters: tuple[str, ...] = ()
    signals: tuple[Signal, ...] = ()
    attribute_values: tuple[Attribute, ...] = ()
    comment: str = ""
    signal_groups: tuple[SignalGroup, ...] = ()

    def __post_init__(self) -> None:
        for name in (
            "message_transmitters",
            "signals",
            "attribute_values",
            "signal_groups",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def mux_signal(self) -> Optional[Signal]:
        """Return the first multiplexer switch signal, or None."""
        return next(
            (
                sig
                for sig in self.signals
                if sig.multiplexer_indicator is Multiplexer.MUX_SWITCH
            ),
            None,
        )

    def mux_values(self) -> tuple[int, ...]:
        """Return the distinct switch values of multiplexed signals, ascending."""
        return tuple(
            sorted(
                {
                    sig.multiplexer_switch_value
                    for sig in self.signals
                    if sig.multiplexer_indicator is Multiplexer.MUX_VALUE
                }
            )
        )

    def clone(self) -> Message:
        """Return an independent copy."""
        return dataclasses.replace(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.message_size == other.message_size
            and self.transmitter == other.transmitter
            and all(t in self.message_transmitters for t in other.message_transmitters)
            and all(s in self.signals for s in other.signals)
            and all(a in self.attribute_values for a in other.attribute_values)
            and self.comment == other.comment
            and all(g in self.signal_groups for g in other.signal_groups)
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.message_size, self.transmitter))