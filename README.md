# canlayout

`canlayout` is a pure-Python, in-memory model of a CAN database. It covers
networks, nodes, messages, signals, value tables, attributes and environment
variables. On top of that model it provides:

- decoding a signal's raw value from a frame payload, and encoding it back,
  for little and big endian signals, signed and unsigned integers, and IEEE
  float and double values;
- conversion between raw and physical values by factor and offset;
- simple multiplexing (one switch value per signal) and extended multiplexing
  (value ranges over one or more named switch signals);
- a text rendering of each message: its bit layout, its signal tree and the
  value choices of its signals;
- decoding of `candump` log lines against one or more buses.

It uses only the standard library and needs Python 3.10 or newer. The `test`
extra installs pytest and hypothesis.

## Modules

| Module                 | Contents |
|------------------------|----------|
| `canlayout.enums`      | `ByteOrder`, `ValueType`, `ExtendedValueType`, `Multiplexer`, `SignalError` |
| `canlayout.attributes` | `ObjectType`, `IntValueType`, `HexValueType`, `FloatValueType`, `StringValueType`, `EnumValueType`, `AttributeDefinition`, `Attribute`, `BitTiming`, `VarType`, `AccessType`, `EnvironmentVariable` |
| `canlayout.values`     | `ValueEncodingDescription`, `SignalType`, `ValueTable` |
| `canlayout.bits`       | `extract_bits`, `insert_bits`, `sign_extend`, `frame_fits` |
| `canlayout.multiplex`  | `ValueRange`, `SignalMultiplexerValue`, `SignalGroup` |
| `canlayout.signal`     | `Signal` |
| `canlayout.message`    | `Message` |
| `canlayout.network`    | `Node`, `Network` |
| `canlayout.human`      | `format_message`, `format_network` |
| `canlayout.candump`    | `CanFrame`, `parse_candump_line`, `active_signals`, `describe_signal`, `describe_frame`, `decode_stream` |

All model classes are frozen dataclasses, except `Network`, whose collections
are plain lists. Every model class has a `clone()` method. `Network.clone()`
returns a deep copy. `ValueRange` and `CanFrame` have no `clone()` method.

Many classes compare "one-sidedly". Scalar fields must match, and every item
in the right-hand object's collections must also appear in the left-hand
object's collections. The docstring of each class says which fields take part.

## Bit-level helpers

`canlayout.bits` works directly on payload bytes. Bit 0 is the least
significant bit of byte 0, as in a Linux CAN frame. A little endian signal
starts at its least significant bit. A big endian signal starts at its most
significant bit.

```python
from canlayout.bits import extract_bits, insert_bits, sign_extend, frame_fits
from canlayout.enums import ByteOrder

data = bytes([0x10, 0x27, 0, 0, 0, 0, 0, 0])
raw = extract_bits(data, 0, 16, ByteOrder.LITTLE_ENDIAN)     # 0x2710

buffer = bytearray(8)
insert_bits(buffer, 0, 16, ByteOrder.LITTLE_ENDIAN, raw)     # in place

sign_extend(0xFF, 8)                                         # -1
frame_fits(60, 8, ByteOrder.LITTLE_ENDIAN, 8)                # False
```

`extract_bits` and `insert_bits` raise `ValueError` when the signal lies
outside the given bytes. `frame_fits` treats messages shorter than 8 bytes as
8 bytes long.

## Signals

```python
from canlayout.signal import Signal

speed = Signal(name="Speed", start_bit=0, bit_size=16, factor=0.5, unit="km/h")

raw = speed.decode(bytes([0x10, 0x27]))    # 10000; short payloads are zero-padded
speed.raw_to_phys(raw)                     # 5000.0

buffer = bytearray(8)
speed.encode(speed.phys_to_raw(12.5), buffer)   # writes raw 25
```

`Signal` takes keyword arguments only. A bit size below 1 or a negative start
bit raises `ValueError`.

`decode` returns signed integer signals sign-extended as negative Python
integers. It returns float and double signals as their IEEE bit pattern, and
`raw_to_phys` turns that pattern into the scaled value. `phys_to_raw`
truncates towards zero for integer signals.

Other layout problems do not raise. They are collected in `Signal.error`,
which is a `SignalError` flag. You can test a single flag with
`has_error(code)`. Two problems are detected:

- the signal does not fit into `message_size` bytes
  (`SIGNAL_EXCEEDS_MESSAGE_SIZE`);
- a float signal is not 32 bits, or a double signal is not 64 bits
  (`WRONG_BIT_SIZE_FOR_EXTENDED_DATA_TYPE`).

## Messages and networks

`Message.mux_signal()` returns the first signal marked
`Multiplexer.MUX_SWITCH`, or `None`. `Message.mux_values()` returns the
distinct switch values of the multiplexed signals, in ascending order.

`Network.merge(other)` appends all of another network's collections to this
one. It keeps this network's version, bit timing and comment.
`Network.parent_message(signal)` finds the message that holds that very
signal object, or returns `None`.

## Human-readable output

```python
from canlayout.human import format_message, format_network

print(format_network(network))
```

For each message, the output shows:

- the name, ID, length and sender;
- an ASCII bit-layout diagram, one for each multiplexer value;
- the signal tree;
- the value descriptions attached to each signal.

`format_message` raises `ValueError` if a message has multiplexed signals but
no multiplexer switch signal.

## Decoding candump output

```python
from canlayout.candump import decode_stream, describe_frame, parse_candump_line
from canlayout.message import Message
from canlayout.network import Network
from canlayout.signal import Signal

counter = Signal(name="Counter", start_bit=0, bit_size=8)
network = Network(messages=[Message(id=0x123, name="Status", message_size=3, signals=(counter,))])
buses = {"vcan0": network}

parse_candump_line("vcan0  123   [3]  11 22 33")
# CanFrame(bus='vcan0', can_id=291, size=3, data=b'\x11"3\x00\x00\x00\x00\x00')

describe_frame(buses, "vcan0  123   [3]  11 22 33")
# 'vcan0  123   [3]  11 22 33 :: Status(Counter: 17)'
```

`decode_stream(buses, lines)` yields one such string for each line that names
a known bus and message. It skips every other line. Only three-digit upper
case hexadecimal identifiers and at most eight payload bytes are recognised.

A signal whose raw value has a value description is shown as the quoted
description followed by the unit. Any other signal is shown as its physical
value followed by its unit.

Multiplexed signals are shown only when they are selected. A signal is
selected when the message's switch signal carries its switch value. With
extended multiplexing, it is selected when its chain of switch signals
matches. In that check the range bounds are compared in reverse order, so in
practice only single-value ranges select a signal.

## What the package does not do

- It does not read or write DBC files, or any other database file format.
  Networks are built in Python from the model classes.
- It does not produce C code.
- It installs no command-line program. Reading candump output from standard
  input, for example, is left to the caller through `decode_stream`.
- It does not talk to CAN hardware or sockets.