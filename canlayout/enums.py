"""Enumerations describing how a signal is laid out in a CAN frame."""

from enum import Enum, IntFlag


class ByteOrder(Enum):
    """Bit numbering of a signal inside the frame payload."""

    BIG_ENDIAN = 0
    LITTLE_ENDIAN = 1


class ValueType(Enum):
    """Whether an integer signal is interpreted as signed or unsigned."""

    SIGNED = 0
    UNSIGNED = 1


class ExtendedValueType(Enum):
    """Underlying representation of a signal's raw value."""

    INTEGER = 0
    FLOAT = 1
    DOUBLE = 2


class Multiplexer(Enum):
    """Role a signal plays in multiplexing."""

    NO_MUX = 0
    MUX_SWITCH = 1
    MUX_VALUE = 2


class SignalError(IntFlag):
    """Problems detected while building a signal; several may be set at once."""

    NO_ERROR = 0
    MACHINE_FLOAT_ENCODING_NOT_SUPPORTED = 1
    MACHINE_DOUBLE_ENCODING_NOT_SUPPORTED = 2
    SIGNAL_EXCEEDS_MESSAGE_SIZE = 4
    WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE = 8