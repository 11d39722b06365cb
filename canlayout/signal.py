"""Signals: placement in a frame, decoding, encoding and scaling."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass, field

from canlayout.attributes import Attribute
from canlayout.bits import extract_bits, frame_fits, insert_bits, sign_extend
from canlayout.enums import (
    ByteOrder,
    ExtendedValueType,
    Multiplexer,
    SignalError,
    ValueType,
)
from canlayout.multiplex import SignalMultiplexerValue
from canlayout.values import ValueEncodingDescription

_MIN_FRAME_BYTES = 8
_MASK_64 = (1 << 64) - 1
_MASK_32 = (1 << 32) - 1


@dataclass(frozen=True, eq=False, kw_only=True)
class Signal:
    """A signal inside a CAN message.

    Problems found while building the signal are collected in ``error``
    rather than raised, so that a faulty description can still be inspected.
    Two signals compare equal when all scalar properties match and every
    receiver, attribute, value description and multiplexer value of the
    right-hand signal is present in the left-hand one.
    """

    name: str
    start_bit: int
    bit_size: int
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN
    value_type: ValueType = ValueType.UNSIGNED
    factor: float = 1.0
    offset: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    unit: str = ""
    message_size: int = 8
    multiplexer_indicator: Multiplexer = Multiplexer.NO_MUX
    multiplexer_switch_value: int = 0
    receivers: tuple[str, ...] = ()
    attribute_values: tuple[Attribute, ...] = ()
    value_encoding_descriptions: tuple[ValueEncodingDescription, ...] = ()
    comment: str = ""
    extended_value_type: ExtendedValueType = ExtendedValueType.INTEGER
    signal_multiplexer_values: tuple[SignalMultiplexerValue, ...] = ()
    error: SignalError = field(init=False, default=SignalError.NO_ERROR)

    def __post_init__(self) -> None:
        if self.bit_size < 1:
            raise ValueError(f"bit size must be at least 1, got {self.bit_size}")
        if self.start_bit < 0:
            raise ValueError(f"start bit must not be negative, got {self.start_bit}")
        for name in (
            "receivers",
            "attribute_values",
            "value_encoding_descriptions",
            "signal_multiplexer_values",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        error = SignalError.NO_ERROR
        if not frame_fits(
            self.start_bit, self.bit_size, self.byte_order, self.message_size
        ):
            error |= SignalError.SIGNAL_EXCEEDS_MESSAGE_SIZE
        expected_size = {
            ExtendedValueType.FLOAT: 32,
            ExtendedValueType.DOUBLE: 64,
        }.get(self.extended_value_type)
        if expected_size is not None and self.bit_size != expected_size:
            error |= SignalError.WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE
        object.__setattr__(self, "error", error)

    def has_error(self, code: SignalError) -> bool:
        """Tell whether ``code`` is set; NO_ERROR matches only a clean signal."""
        return code == self.error or bool(self.error & code)

    def decode(self, data: bytes | bytearray | memoryview) -> int:
        """Extract the raw value from a frame payload.

        Payloads shorter than 8 bytes are padded with zeros.  Signed integer
        signals come back sign-extended as negative Python integers; float
        and double signals come back as their IEEE bit pattern.
        """
        payload = bytes(data)
        if len(payload) < _MIN_FRAME_BYTES:
            payload += bytes(_MIN_FRAME_BYTES - len(payload))
        raw = extract_bits(payload, self.start_bit, self.bit_size, self.byte_order)
        if (
            self.extended_value_type is ExtendedValueType.INTEGER
            and self.value_type is ValueType.SIGNED
        ):
            raw = sign_extend(raw, self.bit_size)
        return raw

    def encode(self, raw: int, buffer: bytearray) -> None:
        """Write ``raw`` into ``buffer`` in place, leaving other bits alone."""
        insert_bits(buffer, self.start_bit, self.bit_size, self.byte_order, raw)

    def raw_to_phys(self, raw: int) -> float:
        """Convert a raw value into its physical value."""
        if self.extended_value_type is ExtendedValueType.FLOAT:
            value = struct.unpack("<f", struct.pack("<I", raw & _MASK_32))[0]
        elif self.extended_value_type is ExtendedValueType.DOUBLE:
            value = struct.unpack("<d", struct.pack("<Q", raw & _MASK_64))[0]
        elif self.value_type is ValueType.SIGNED:
            value = float(sign_extend(raw, 64))
        else:
            value = float(raw & _MASK_64)
        return value * self.factor + self.offset

    def phys_to_raw(self, phys: float) -> int:
        """Convert a physical value into a raw value.

        Integer signals truncate towards zero; float and double signals
        return their IEEE bit pattern.
        """
        scaled = (phys - self.offset) / self.factor
        if self.extended_value_type is ExtendedValueType.FLOAT:
            return struct.unpack("<I", struct.pack("<f", scaled))[0]
        if self.extended_value_type is ExtendedValueType.DOUBLE:
            return struct.unpack("<Q", struct.pack("<d", scaled))[0]
        return int(scaled)

    def clone(self) -> Signal:
        """Return an independent copy."""
        return dataclasses.replace(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signal):
            return NotImplemented
        return (
            self.name == other.name
            and self.multiplexer_indicator == other.multiplexer_indicator
            and self.multiplexer_switch_value == other.multiplexer_switch_value
            and self.start_bit == other.start_bit
            and self.bit_size == other.bit_size
            and self.byte_order == other.byte_order
            and self.value_type == other.value_type
            and self.factor == other.factor
            and self.offset == other.offset
            and self.minimum == other.minimum
            and self.maximum == other.maximum
            and self.unit == other.unit
            and all(r in self.receivers for r in other.receivers)
            and all(a in self.attribute_values for a in other.attribute_values)
            and all(
                v in self.value_encoding_descriptions
                for v in other.value_encoding_descriptions
            )
            and self.comment == other.comment
            and self.extended_value_type == other.extended_value_type
            and all(
                m in self.signal_multiplexer_values
                for m in other.signal_multiplexer_values
            )
        )

    def __hash__(self) -> int:
        return hash((self.name, self.start_bit, self.bit_size, self.byte_order))