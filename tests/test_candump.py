import pytest
from hypothesis import given
from hypothesis import strategies as st

from canlayout.candump import (
    CanFrame,
    active_signals,
    decode_stream,
    describe_frame,
    describe_signal,
    parse_candump_line,
)
from canlayout.enums import Multiplexer
from canlayout.message import Message
from canlayout.multiplex import SignalMultiplexerValue, ValueRange
from canlayout.network import Network
from canlayout.signal import Signal
from canlayout.values import ValueEncodingDescription

LINE = "vcan0  123   [3]  11 22 33"


def _speed():
    return Signal(name="speed", start_bit=0, bit_size=8, unit="km/h")


def _state():
    return Signal(
        name="state",
        start_bit=8,
        bit_size=8,
        value_encoding_descriptions=(
            ValueEncodingDescription(0, "Off"),
            ValueEncodingDescription(1, "On"),
        ),
    )


@pytest.fixture
def buses():
    message = Message(id=0x123, name="Engine", signals=(_speed(), _state()))
    return {"vcan0": Network(messages=[message])}


def test_parse_example_line():
    frame = parse_candump_line(LINE)
    assert frame == CanFrame(
        bus="vcan0",
        can_id=0x123,
        size=3,
        data=bytes([0x11, 0x22, 0x33, 0, 0, 0, 0, 0]),
    )


def test_parse_rejects_garbage():
    assert parse_candump_line("not a frame") is None


def test_parse_requires_upper_case_hex():
    assert parse_candump_line("vcan0  1ab   [1]  11") is None


def test_parse_rejects_oversized_payload():
    assert parse_candump_line("vcan0  123   [9]  11") is None


def test_parse_missing_bytes_read_as_zero():
    frame = parse_candump_line("vcan0  123   [4]  AA")
    assert frame.size == 4
    assert frame.data == bytes([0xAA]) + bytes(7)


@given(
    bus=st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", min_size=1, max_size=8),
    can_id=st.integers(min_value=0, max_value=0xFFF),
    payload=st.binary(min_size=0, max_size=8),
)
def test_parse_round_trip(bus, can_id, payload):
    line = f"{bus}  {can_id:03X}   [{len(payload)}]  " + " ".join(
        f"{b:02X}" for b in payload
    )
    frame = parse_candump_line(line)
    assert frame.bus == bus
    assert frame.can_id == can_id
    assert frame.size == len(payload)
    assert frame.data[: len(payload)] == payload
    assert len(frame.data) == 8


def test_describe_signal_with_description():
    signal = Signal(
        name="gear",
        start_bit=0,
        bit_size=8,
        unit="V",
        value_encoding_descriptions=(ValueEncodingDescription(1, "On"),),
    )
    assert describe_signal(signal, bytes([1]) + bytes(7)) == "gear: 'On' V"


def test_describe_signal_description_without_unit_keeps_space():
    assert describe_signal(_state(), bytes([0, 0]) + bytes(6)) == "state: 'Off' "


def test_describe_signal_physical_value_with_unit():
    assert describe_signal(_speed(), bytes([0x2A]) + bytes(7)) == "speed: 42 km/h"


def test_describe_signal_physical_value_without_unit():
    signal = Signal(name="x", start_bit=0, bit_size=8)
    assert describe_signal(signal, bytes([7]) + bytes(7)) == "x: 7"


def _mux_message():
    switch = Signal(
        name="sw",
        start_bit=0,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_SWITCH,
    )
    plain = Signal(name="plain", start_bit=8, bit_size=8)
    one = Signal(
        name="one",
        start_bit=16,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_VALUE,
        multiplexer_switch_value=1,
    )
    two = Signal(
        name="two",
        start_bit=16,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_VALUE,
        multiplexer_switch_value=2,
    )
    return Message(id=0x200, name="Mux", signals=(switch, plain, one, two))


def test_active_signals_simple_multiplexing():
    message = _mux_message()
    names = [s.name for s in active_signals(message, bytes([1]) + bytes(7))]
    assert names == ["sw", "plain", "one"]
    names = [s.name for s in active_signals(message, bytes([2]) + bytes(7))]
    assert names == ["sw", "plain", "two"]


def test_active_signals_no_matching_switch_value():
    message = _mux_message()
    names = [s.name for s in active_signals(message, bytes([5]) + bytes(7))]
    assert names == ["sw", "plain"]


def _extended_message():
    switch = Signal(
        name="sw",
        start_bit=0,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_SWITCH,
    )
    inner = Signal(
        name="inner",
        start_bit=8,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_VALUE,
        signal_multiplexer_values=(
            SignalMultiplexerValue("sw", (ValueRange(1, 1),)),
        ),
    )
    leaf = Signal(
        name="leaf",
        start_bit=16,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_VALUE,
        signal_multiplexer_values=(
            SignalMultiplexerValue("inner", (ValueRange(5, 5),)),
        ),
    )
    return Message(id=0x300, name="Ext", signals=(switch, inner, leaf))


def test_active_signals_extended_chain_matches():
    message = _extended_message()
    names = [s.name for s in active_signals(message, bytes([1, 5]) + bytes(6))]
    assert names == ["sw", "inner", "leaf"]


def test_active_signals_extended_chain_broken_at_root():
    message = _extended_message()
    names = [s.name for s in active_signals(message, bytes([0, 5]) + bytes(6))]
    assert names == ["sw"]


def test_active_signals_unknown_switch_name_excludes():
    lost = Signal(
        name="lost",
        start_bit=0,
        bit_size=8,
        multiplexer_indicator=Multiplexer.MUX_VALUE,
        signal_multiplexer_values=(
            SignalMultiplexerValue("missing", (ValueRange(0, 0),)),
        ),
    )
    message = Message(id=1, name="M", signals=(lost,))
    assert active_signals(message, bytes(8)) == []


def test_describe_frame_known_message(buses):
    line = "vcan0  123   [2]  07 01"
    assert describe_frame(buses, line) == (
        line + " :: Engine(speed: 7 km/h, state: 'On' )"
    )


def test_describe_frame_unknown_bus(buses):
    assert describe_frame(buses, "can9  123   [2]  07 01") is None


def test_describe_frame_unknown_id(buses):
    assert describe_frame(buses, "vcan0  456   [2]  07 01") is None


def test_describe_frame_not_a_frame(buses):
    assert describe_frame(buses, "") is None


def test_decode_stream_filters_and_strips(buses):
    lines = [
        "vcan0  123   [2]  07 01\n",
        "garbage\n",
        "vcan0  456   [1]  00\n",
        "vcan0  123   [2]  07 00",
    ]
    result = list(decode_stream(buses, lines))
    assert len(result) == 2
    assert result[0].startswith("vcan0  123   [2]  07 01 :: Engine(")
    assert result[1].endswith("state: 'Off' )")
    assert all("\n" not in item for item in result)