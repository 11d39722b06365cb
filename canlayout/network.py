"""Nodes and whole networks of messages."""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from canlayout.attributes import (
    Attribute,
    AttributeDefinition,
    BitTiming,
    EnvironmentVariable,
)
from canlayout.message import Message
from canlayout.signal import Signal
from canlayout.values import ValueTable


@dataclass(frozen=True, eq=False)
class Node:
    """A bus participant.

    Two nodes compare equal when name and comment match and every attribute
    of the right-hand node is also present in the left-hand one.
    """

    name: str
    comment: str = ""
    attribute_values: tuple[Attribute, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attribute_values", tuple(self.attribute_values))

    def clone(self) -> Node:
        """Return an independent copy."""
        return dataclasses.replace(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.name == other.name
            and self.comment == other.comment
            and all(a in self.attribute_values for a in other.attribute_values)
        )

    def __hash__(self) -> int:
        return hash((self.name, self.comment))


@dataclass(eq=False)
class Network:
    """A complete bus description.

    Equality compares version, bit timing and comment, and requires every
    node, value table, message, environment variable, attribute definition,
    attribute default and attribute value of the right-hand network to be
    present in the left-hand one.  New symbols take no part in equality.
    """

    version: str = ""
    new_symbols: list[str] = field(default_factory=list)
    bit_timing: BitTiming = field(default_factory=BitTiming)
    nodes: list[Node] = field(default_factory=list)
    value_tables: list[ValueTable] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    environment_variables: list[EnvironmentVariable] = field(default_factory=list)
    attribute_definitions: list[AttributeDefinition] = field(default_factory=list)
    attribute_defaults: list[Attribute] = field(default_factory=list)
    attribute_values: list[Attribute] = field(default_factory=list)
    comment: str = ""

    def __post_init__(self) -> None:
        for name in (
            "new_symbols",
            "nodes",
            "value_tables",
            "messages",
            "environment_variables",
            "attribute_definitions",
            "attribute_defaults",
            "attribute_values",
        ):
            setattr(self, name, list(getattr(self, name)))

    def clone(self) -> Network:
        """Return an independent deep copy."""
        return copy.deepcopy(self)

    def merge(self, other: Network) -> None:
        """Append all collections of ``other`` to this network.

        Version, bit timing and comment of this network are kept.
        """
        self.new_symbols.extend(other.new_symbols)
        self.nodes.extend(other.nodes)
        self.value_tables.extend(other.value_tables)
        self.messages.extend(other.messages)
        self.environment_variables.extend(other.environment_variables)
        self.attribute_definitions.extend(other.attribute_definitions)
        self.attribute_defaults.extend(other.attribute_defaults)
        self.attribute_values.extend(other.attribute_values)

    def parent_message(self, signal: Signal) -> Optional[Message]:
        """Return the message holding this very signal object, or None."""
        return next(
            (
                msg
                for msg in self.messages
                if any(sig is signal for sig in msg.signals)
            ),
            None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return (
            self.version == other.version
            and self.bit_timing == other.bit_timing
            and all(n in self.nodes for n in other.nodes)
            and all(v in self.value_tables for v in other.value_tables)
            and all(m in self.messages for m in other.messages)
            and all(
                e in self.environment_variables for e in other.environment_variables
            )
            and all(
                d in self.attribute_definitions for d in other.attribute_definitions
            )
            and all(a in self.attribute_defaults for a in other.attribute_defaults)
            and all(a in self.attribute_values for a in other.attribute_values)
            and self.comment == other.comment
        )

    __hash__ = None  # type: ignore[assignment]