"""Decoding of candump log lines against known bus descriptions.

A candump line looks like ``vcan0  123   [3]  11 22 33``: the interface
name, a three digit hexadecimal identifier, the payload length in brackets
and up to eight payload bytes in upper case hexadecimal.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from canlayout.enums import Multiplexer
from canlayout.message import Message
from canlayout.network import Network
from canlayout.signal import Signal

_MAX_PAYLOAD = 8

_CANDUMP_LINE = re.compile(
    r"\s*(\S+)"
    r"\s*([0-9A-F]{3})"
    r"\s*\[(\d+)\]" + r"\s*([0-9A-F]{2})?" * _MAX_PAYLOAD
)


@dataclass(frozen=True)
class CanFrame:
    """One frame read from a candump line.

    ``data`` is always eight bytes long; bytes beyond ``size`` are zero.
    """

    bus: str
    can_id: int
    size: int
    data: bytes


def parse_candump_line(line: str) -> Optional[CanFrame]:
    """Parse a candump line, or return None if it is not one.

    Lines announcing more than eight payload bytes are not classic CAN
    frames and are rejected as well.  Announced bytes missing from the line
    read as zero.
    """
    match = _CANDUMP_LINE.fullmatch(line)
    if match is None:
        return None
    size = int(match.group(3))
    if size > _MAX_PAYLOAD:
        return None
    byte_fields = match.groups()[3:]
    payload = bytearray(_MAX_PAYLOAD)
    for index, text in enumerate(byte_fields[:size]):
        payload[index] = int(text, 16) if text else 0
    return CanFrame(
        bus=match.group(1),
        can_id=int(match.group(2), 16),
        size=size,
        data=bytes(payload),
    )


def _multiplexer_values_match(message: Message, signal: Signal, data: bytes) -> bool:
    """Check the extended multiplexing chain of ``signal`` against ``data``."""
    for mux_value in signal.signal_multiplexer_values:
        switch = next(
            (sig for sig in message.signals if sig.name == mux_value.switch_name),
            None,
        )
        if switch is None:
            continue
        raw = switch.decode(data)
        for value_range in mux_value.value_ranges:
            # The bounds are tested in reverse order, so in practice only
            # single-value ranges select a signal.
            if value_range.high <= raw <= value_range.low:
                if switch.signal_multiplexer_values:
                    return _multiplexer_values_match(message, switch, data)
                return True
    return False


def active_signals(message: Message, data: bytes) -> list[Signal]:
    """Return the signals of ``message`` that are present in ``data``.

    Signals that are not multiplexed are always present.  A multiplexed
    signal is present when the message's switch signal carries its switch
    value, or, with extended multiplexing, when its chain of switch signals
    matches.
    """
    mux_signal = message.mux_signal()
    selected = []
    for signal in message.signals:
        if signal.multiplexer_indicator is not Multiplexer.MUX_VALUE:
            selected.append(signal)
        elif (
            mux_signal is not None
            and not signal.signal_multiplexer_values
            and signal.multiplexer_switch_value == mux_signal.decode(data)
        ):
            selected.append(signal)
        elif _multiplexer_values_match(message, signal, data):
            selected.append(signal)
    return selected


def describe_signal(signal: Signal, data: bytes) -> str:
    """Render the value of ``signal`` in ``data`` as ``name: value unit``.

    A raw value with a value description is shown as the quoted description
    followed by a space and the unit; otherwise the physical value is shown,
    followed by the unit if there is one.
    """
    raw = signal.decode(data)
    description = next(
        (ved for ved in signal.value_encoding_descriptions if ved.value == raw),
        None,
    )
    if description is not None:
        return f"{signal.name}: '{description.description}' {signal.unit}"
    text = f"{signal.name}: {signal.raw_to_phys(raw):g}"
    if signal.unit:
        text += f" {signal.unit}"
    return text


def describe_frame(buses: Mapping[str, Network], line: str) -> Optional[str]:
    """Decode one candump line against the networks of ``buses``.

    Returns the line followed by `` :: `` and the message with its present
    signals, or None if the line is not a frame, its bus is unknown or its
    identifier belongs to no message.
    """
    frame = parse_candump_line(line)
    if frame is None:
        return None
    network = buses.get(frame.bus)
    if network is None:
        return None
    message = next(
        (msg for msg in network.messages if msg.id == frame.can_id), None
    )
    if message is None:
        return None
    signals = ", ".join(
        describe_signal(signal, frame.data)
        for signal in active_signals(message, frame.data)
    )
    return f"{line} :: {message.name}({signals})"


def decode_stream(
    buses: Mapping[str, Network], lines: Iterable[str]
) -> Iterator[str]:
    """Yield the decoded form of every line that describes a known frame."""
    for line in lines:
        described = describe_frame(buses, line.rstrip("\r\n"))
        if described is not None:
            yield described