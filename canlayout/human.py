"""Human readable rendering of messages and networks.

Each message is shown with its header, a byte-by-byte bit layout of its
signals, a tree of the multiplexing structure and the value choices of
its signals.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

from canlayout.enums import ByteOrder, Multiplexer
from canlayout.message import Message
from canlayout.network import Network
from canlayout.signal import Signal

_INDENT = " " * 9
_BAR = "  +---+---+---+---+---+---+---+---+\n"
_BANNER = (
    "================================= Messages "
    "=================================\n"
)
_SEPARATOR = (
    "  ------------------------------------------------------------------------\n"
)


def _big_endian_bits(start: int, count: int) -> Iterator[int]:
    """Yield the bit positions the layout attributes to a big endian signal."""
    bit = start
    for _ in range(count):
        yield bit
        bit = bit - 15 if bit > 15 and (bit + 1) % 8 == 0 else bit + 1


def _covers(signal: Signal, bit: int, mux_value: Optional[int]) -> bool:
    if (
        mux_value is not None
        and signal.multiplexer_indicator is Multiplexer.MUX_VALUE
        and signal.multiplexer_switch_value != mux_value
    ):
        return False
    if signal.byte_order is ByteOrder.LITTLE_ENDIAN:
        return signal.start_bit <= bit < signal.start_bit + signal.bit_size
    return bit in _big_endian_bits(signal.start_bit, signal.bit_size)


def _is_start_bit(signal: Signal, bit: int) -> bool:
    return signal.start_bit == bit


def _is_end_bit(signal: Signal, bit: int) -> bool:
    if signal.byte_order is ByteOrder.LITTLE_ENDIAN:
        return signal.start_bit + signal.bit_size - 1 == bit
    *_, last = _big_endian_bits(signal.start_bit, signal.bit_size)
    return last == bit


class _LayoutWriter:
    """Draws the bit layout of one message, row by row."""

    def __init__(self, message: Message, out: list[str]) -> None:
        self._message = message
        self._out = out
        self._bit = 7
        self._close_pending = False

    def _find(self, mux_value: Optional[int]) -> Optional[Signal]:
        return next(
            (
                sig
                for sig in self._message.signals
                if _covers(sig, self._bit, mux_value)
            ),
            None,
        )

    def block(self, mux_value: Optional[int]) -> None:
        out = self._out
        out.append(_INDENT + "                 Bit\n")
        out.append(_INDENT + "    7   6   5   4   3   2   1   0\n")
        self._bit = 7
        while self._bit < self._message.message_size * 8:
            self._row(mux_value)
        if self._close_pending:
            out.append(_INDENT + _BAR)

    def _row(self, mux_value: Optional[int]) -> None:
        out = self._out
        out.append(_INDENT + _BAR)
        out.append(f"{_INDENT}{self._bit // 8} |")
        depth = 0
        for _ in range(8):
            sig = self._find(mux_value)
            if sig is None:
                out.append("   |")
            else:
                starts = _is_start_bit(sig, self._bit)
                ends = _is_end_bit(sig, self._bit)
                if starts and ends:
                    out.append("<-x|")
                    depth += 1
                elif starts:
                    out.append("--x|")
                    depth += 1
                else:
                    edge = "|" if self._bit % 8 == 0 else "-"
                    out.append(("<--" if ends else "---") + edge)
            self._bit -= 1
        out.append("\n")
        if depth:
            self._close_pending = False
            out.append(_INDENT + _BAR)
        else:
            self._close_pending = True
        self._bit += 8
        if depth:
            out.append(_INDENT + "   ")
            while depth > 0:
                self._labels(depth, mux_value)
                self._bit += 8
                out.append("\n")
                if depth != 1:
                    out.append(_INDENT + "   ")
                depth -= 1
        self._bit += 8

    def _labels(self, depth: int, mux_value: Optional[int]) -> None:
        out = self._out
        placed = 0
        column = 0
        while column < 8:
            sig = self._find(mux_value)
            if sig is not None:
                while self._bit > sig.start_bit and column < 8:
                    out.append("    ")
                    self._bit -= 1
                    column += 1
                if column == 8:
                    break
                if depth - 1 == placed:
                    out.append(f" +-- {sig.name}")
                elif placed < depth - 1:
                    out.append(" |  ")
                placed += 1
            else:
                out.append("    ")
            self._bit -= 1
            column += 1


def _signal_tree(
    message: Message, mux_signal: Optional[Signal], mux_values: tuple[int, ...]
) -> list[str]:
    out = ["  Signal tree:\n\n", "    -- {root}\n"]
    if mux_signal is not None:
        out.append(f"       +-- {mux_signal.name}\n")
        remaining = len(mux_values)
        for mux_value in mux_values:
            out.append(f"       |   +--{mux_value}\n")
            for sig in message.signals:
                if (
                    sig.multiplexer_indicator is Multiplexer.MUX_VALUE
                    and sig.multiplexer_switch_value == mux_value
                ):
                    if remaining > 1:
                        out.append(f"       |   |  +-- {sig.name}\n")
                    else:
                        out.append(f"       |      +-- {sig.name}\n")
            remaining -= 1
    out.extend(
        f"       +-- {sig.name}\n"
        for sig in message.signals
        if sig.multiplexer_indicator is Multiplexer.NO_MUX
    )
    return out


def _value_choices(message: Message) -> list[str]:
    out = ["  Signal choices:\n\n"]
    for sig in message.signals:
        if sig.value_encoding_descriptions:
            out.append(f"    {sig.name}\n")
            out.extend(
                f"        {ved.value} {ved.description}\n"
                for ved in sig.value_encoding_descriptions
            )
            out.append("\n")
    return out


def format_message(message: Message) -> str:
    """Render one message as human readable text.

    Raises ValueError if the message has multiplexed signals but no
    multiplexer switch signal.
    """
    mux_values = message.mux_values()
    mux_signal = message.mux_signal()
    if mux_values and mux_signal is None:
        raise ValueError(
            f"message {message.name!r} has multiplexed signals "
            "but no multiplexer switch signal"
        )
    out = [
        f"  {'Name:':<12}{message.name}\n",
        f"  {'ID:':<12}0x{message.id:X}\n",
        f"  {'Length:':<12}0x{message.message_size:X}\n",
        f"  {'Sender:':<12}{message.transmitter}\n",
        "  Layout:\n",
    ]
    writer = _LayoutWriter(message, out)
    if not mux_values:
        writer.block(None)
    else:
        for mux_value in mux_values:
            out.append(f"{_INDENT}               {mux_signal.name}: {mux_value}\n")
            writer.block(mux_value)
    out.append("\n")
    out.extend(_signal_tree(message, mux_signal, mux_values))
    out.append("\n")
    out.extend(_value_choices(message))
    return "".join(out)


def format_network(network: Network) -> str:
    """Render every message of a network as human readable text."""
    parts = [_BANNER]
    for message in network.messages:
        parts.append(format_message(message))
        parts.append(_SEPARATOR)
    return "".join(parts)