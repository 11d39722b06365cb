"""Bit level access to signals packed into a CAN frame payload.

Bits are numbered the way a CAN frame stores them: bit 0 is the least
significant bit of byte 0, bit 8 the least significant bit of byte 1, and
so on.  Little endian signals start at their least significant bit and grow
upwards.  Big endian signals start at their most significant bit and run
down through the byte, continuing at bit 7 of the next byte.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Union

from canlayout.enums import ByteOrder

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def _validate(start_bit: int, bit_size: int) -> None:
    if bit_size < 1:
        raise ValueError(f"bit size must be at least 1, got {bit_size}")
    if start_bit < 0:
        raise ValueError(f"start bit must not be negative, got {start_bit}")


def _endianness(byte_order: ByteOrder) -> str:
    return "little" if byte_order is ByteOrder.LITTLE_ENDIAN else "big"


def _shift(start_bit: int, bit_size: int, byte_order: ByteOrder, nbytes: int) -> int:
    """Position of the signal's least significant bit in the payload integer.

    The payload integer is read in the signal's own byte order.
    """
    _validate(start_bit, bit_size)
    total = nbytes * 8
    if byte_order is ByteOrder.LITTLE_ENDIAN:
        if start_bit + bit_size > total:
            raise ValueError(
                f"signal at bit {start_bit} with {bit_size} bits "
                f"does not fit into {nbytes} bytes"
            )
        return start_bit
    msb_index = (start_bit // 8) * 8 + 7 - start_bit % 8
    lsb_index = msb_index + bit_size - 1
    if lsb_index >= total:
        raise ValueError(
            f"signal at bit {start_bit} with {bit_size} bits "
            f"does not fit into {nbytes} bytes"
        )
    return total - 1 - lsb_index


def extract_bits(
    data: BytesLike, start_bit: int, bit_size: int, byte_order: ByteOrder
) -> int:
    """Return the unsigned raw value of a signal read from ``data``.

    Raises ValueError if the signal lies outside of ``data``.
    """
    payload = bytes(data)
    shift = _shift(start_bit, bit_size, byte_order, len(payload))
    value = int.from_bytes(payload, _endianness(byte_order))
    return (value >> shift) & ((1 << bit_size) - 1)


def insert_bits(
    buffer: bytearray,
    start_bit: int,
    bit_size: int,
    byte_order: ByteOrder,
    raw: int,
) -> None:
    """Write the low ``bit_size`` bits of ``raw`` into ``buffer`` in place.

    Bits of ``buffer`` outside of the signal are left untouched.  Raises
    ValueError if the signal lies outside of ``buffer``.
    """
    shift = _shift(start_bit, bit_size, byte_order, len(buffer))
    endianness = _endianness(byte_order)
    mask = (1 << bit_size) - 1
    value = int.from_bytes(buffer, endianness)
    value = (value & ~(mask << shift)) | ((raw & mask) << shift)
    buffer[:] = value.to_bytes(len(buffer), endianness)


def sign_extend(raw: int, bit_size: int) -> int:
    """Interpret the low ``bit_size`` bits of ``raw`` as two's complement."""
    if bit_size < 1:
        raise ValueError(f"bit size must be at least 1, got {bit_size}")
    raw &= (1 << bit_size) - 1
    if raw & (1 << (bit_size - 1)):
        raw -= 1 << bit_size
    return raw


def frame_fits(
    start_bit: int, bit_size: int, byte_order: ByteOrder, message_size: int
) -> bool:
    """Tell whether a signal fits into a message of ``message_size`` bytes.

    Messages shorter than 8 bytes are treated as 8 bytes long.
    """
    _validate(start_bit, bit_size)
    total = max(message_size, 8) * 8
    if byte_order is ByteOrder.LITTLE_ENDIAN:
        return start_bit + bit_size <= total
    frame_size = bit_size + (7 - start_bit % 8)
    frame_start = start_bit - start_bit % 8
    return frame_start + ((frame_size - 1) // 8) * 8 < total