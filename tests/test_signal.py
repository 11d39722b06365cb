import struct

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from canlayout.enums import ByteOrder, ExtendedValueType, SignalError, ValueType
from canlayout.signal import Signal
from canlayout.values import ValueEncodingDescription


def test_little_endian_byte_decode():
    sig = Signal(name="S", start_bit=8, bit_size=8)
    assert sig.decode(bytes([0x00, 0x12, 0, 0, 0, 0, 0, 0])) == 0x12


def test_big_endian_two_bytes_decode():
    sig = Signal(name="S", start_bit=7, bit_size=16, byte_order=ByteOrder.BIG_ENDIAN)
    assert sig.decode(bytes([0x12, 0x34, 0, 0, 0, 0, 0, 0])) == 0x1234


def test_signed_decode_is_sign_extended():
    sig = Signal(name="S", start_bit=0, bit_size=8, value_type=ValueType.SIGNED)
    assert sig.decode(bytes([0xFF] + [0] * 7)) == -1
    assert sig.raw_to_phys(sig.decode(bytes([0xFF] + [0] * 7))) == -1.0


def test_short_payload_is_padded():
    sig = Signal(name="S", start_bit=0, bit_size=8)
    assert sig.decode(b"\x2a") == 0x2A


def test_decode_outside_payload_raises():
    sig = Signal(name="S", start_bit=60, bit_size=8, message_size=16)
    with pytest.raises(ValueError):
        sig.decode(bytes(8))


def test_encode_leaves_other_bits():
    sig = Signal(name="S", start_bit=4, bit_size=4)
    buffer = bytearray(b"\xff" * 8)
    sig.encode(0, buffer)
    assert buffer[0] == 0x0F
    assert buffer[1:] == b"\xff" * 7


def test_float_round_trip():
    sig = Signal(
        name="F", start_bit=0, bit_size=32, extended_value_type=ExtendedValueType.FLOAT
    )
    raw = sig.phys_to_raw(1.5)
    assert raw == struct.unpack("<I", struct.pack("<f", 1.5))[0]
    buffer = bytearray(8)
    sig.encode(raw, buffer)
    assert sig.raw_to_phys(sig.decode(buffer)) == 1.5


def test_double_round_trip():
    sig = Signal(
        name="D", start_bit=0, bit_size=64, extended_value_type=ExtendedValueType.DOUBLE
    )
    buffer = bytearray(8)
    sig.encode(sig.phys_to_raw(-3.25), buffer)
    assert sig.raw_to_phys(sig.decode(buffer)) == -3.25


def test_scaling_round_trip():
    sig = Signal(name="S", start_bit=0, bit_size=16, factor=0.5, offset=10.0)
    phys = sig.raw_to_phys(20)
    assert sig.phys_to_raw(phys) == 20


def test_phys_to_raw_truncates_towards_zero():
    sig = Signal(name="S", start_bit=0, bit_size=8, value_type=ValueType.SIGNED)
    assert sig.phys_to_raw(2.9) == 2
    assert sig.phys_to_raw(-2.9) == -2


def test_wrong_bit_size_for_float():
    sig = Signal(
        name="F", start_bit=0, bit_size=16, extended_value_type=ExtendedValueType.FLOAT
    )
    assert sig.has_error(SignalError.WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE)
    assert not sig.has_error(SignalError.NO_ERROR)


def test_wrong_bit_size_for_double():
    sig = Signal(
        name="D", start_bit=0, bit_size=32, extended_value_type=ExtendedValueType.DOUBLE
    )
    assert sig.has_error(SignalError.WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE)


def test_signal_exceeding_message_is_flagged():
    sig = Signal(name="S", start_bit=60, bit_size=8, message_size=8)
    assert sig.has_error(SignalError.SIGNAL_EXCEEDS_MESSAGE_SIZE)
    assert not sig.has_error(SignalError.WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE)


def test_clean_signal_has_no_error():
    sig = Signal(name="S", start_bit=0, bit_size=8)
    assert sig.has_error(SignalError.NO_ERROR)
    assert sig.error == SignalError.NO_ERROR


def test_zero_bit_size_rejected():
    with pytest.raises(ValueError):
        Signal(name="S", start_bit=0, bit_size=0)


def test_equality_is_subset_of_receivers():
    full = Signal(name="S", start_bit=0, bit_size=8, receivers=("A", "B"))
    part = Signal(name="S", start_bit=0, bit_size=8, receivers=["A"])
    assert full == part
    assert not (part == full)


def test_clone_is_equal_and_keeps_descriptions():
    ved = ValueEncodingDescription(1, "On")
    sig = Signal(name="S", start_bit=0, bit_size=1, value_encoding_descriptions=[ved])
    copy = sig.clone()
    assert copy == sig
    assert copy.value_encoding_descriptions == (ved,)
    assert copy.error == sig.error


@given(
    start=st.integers(0, 63),
    size=st.integers(1, 64),
    order=st.sampled_from(list(ByteOrder)),
    raw=st.integers(0, (1 << 64) - 1),
)
def test_encode_decode_round_trip(start, size, order, raw):
    sig = Signal(name="S", start_bit=start, bit_size=size, byte_order=order)
    assume(not sig.has_error(SignalError.SIGNAL_EXCEEDS_MESSAGE_SIZE))
    buffer = bytearray(8)
    sig.encode(raw, buffer)
    assert sig.decode(buffer) == raw & ((1 << size) - 1)


@given(size=st.integers(1, 32), value=st.integers(-(1 << 31), (1 << 31) - 1))
def test_signed_round_trip(size, value):
    assume(-(1 << (size - 1)) <= value < (1 << (size - 1)))
    sig = Signal(name="S", start_bit=0, bit_size=size, value_type=ValueType.SIGNED)
    buffer = bytearray(8)
    sig.encode(value, buffer)
    assert sig.decode(buffer) == value