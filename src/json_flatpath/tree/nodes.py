"""JsonNode dataclass and NodeKind StrEnum for the flattener's input trees.

Provides the concrete node type built by NodeBuilder and the MISSING
sentinel that stands in for empty containers once they are recorded as
terminals.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "FLOATING_POINT_KINDS",
    "INTEGRAL_KINDS",
    "MISSING",
    "NUMBER_KINDS",
    "JsonNode",
    "NodeKind",
]


class NodeKind(StrEnum):
    """Structural and scalar kinds a node can carry.

    StrEnum values are the lowercased member names:
    - OBJECT, ARRAY        : containers
    - STRING, BOOLEAN      : text and truth values
    - NULL                 : JSON null
    - MISSING              : sentinel for an absent value (empty container)
    - BINARY               : raw bytes
    - POJO                 : opaque value the builder does not recognise
    - SHORT, INT, LONG     : 16, 32 and 64-bit integers
    - BIG_INTEGER          : integers wider than 64 bits
    - FLOAT, DOUBLE        : single and double precision floats
    - BIG_DECIMAL          : arbitrary-precision decimals
    """

    OBJECT = auto()
    ARRAY = auto()
    STRING = auto()
    BOOLEAN = auto()
    NULL = auto()
    MISSING = auto()
    BINARY = auto()
    POJO = auto()
    SHORT = auto()
    INT = auto()
    LONG = auto()
    BIG_INTEGER = auto()
    FLOAT = auto()
    DOUBLE = auto()
    BIG_DECIMAL = auto()


INTEGRAL_KINDS: frozenset[NodeKind] = frozenset(
    {NodeKind.SHORT, NodeKind.INT, NodeKind.LONG, NodeKind.BIG_INTEGER}
)
FLOATING_POINT_KINDS: frozenset[NodeKind] = frozenset(
    {NodeKind.FLOAT, NodeKind.DOUBLE, NodeKind.BIG_DECIMAL}
)
NUMBER_KINDS: frozenset[NodeKind] = INTEGRAL_KINDS | FLOATING_POINT_KINDS


@dataclass(frozen=True, slots=True)
class JsonNode:
    """A read-only node in a parsed JSON tree.

    Attributes:
        kind:     Which kind of node this is (see NodeKind).
        value:    Original Python value for scalar nodes; None for containers,
                  null and the MISSING sentinel.
        children: Child nodes, in document order. Empty for scalars.
        names:    Field names for OBJECT nodes, index-aligned with
                  ``children``. Empty for arrays and scalars.
    """

    kind: NodeKind
    value: Any = None
    children: tuple[JsonNode, ...] = ()
    names: tuple[str, ...] = ()

    def is_array(self) -> bool:
        return self.kind is NodeKind.ARRAY

    def is_object(self) -> bool:
        return self.kind is NodeKind.OBJECT

    def is_container(self) -> bool:
        return self.kind is NodeKind.ARRAY or self.kind is NodeKind.OBJECT

    def is_empty(self) -> bool:
        """True for containers without children; scalars are never empty."""
        return self.is_container() and not self.children

    def size(self) -> int:
        return len(self.children)

    def elements(self) -> Iterator[JsonNode]:
        return iter(self.children)

    def field_names(self) -> Iterator[str]:
        return iter(self.names)


# Shared sentinel; frozen, so safe to hand out from every Flattener.
MISSING = JsonNode(kind=NodeKind.MISSING)
