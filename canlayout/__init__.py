"""In-memory CAN database model with signal decoding, layout rendering and candump decoding."""

__version__ = "1.0.0"

__all__ = [
    "enums",
    "attributes",
    "values",
    "bits",
    "multiplex",
    "signal",
    "message",
    "network",
    "human",
    "candump",
]