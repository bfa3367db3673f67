"""Storage-type classification for terminal nodes.

Maps each terminal node onto the coarse column type a downstream tabular
engine stores it as.  The rules are checked in a fixed order and the first
match wins.  The order is a deliberate widening policy: 32-bit ints map to
``long``, while 64-bit and wider integers are caught by the integral rule
and stored as ``double``.  Booleans become ``byte`` indicators.

Some rules can never fire for nodes built by NodeBuilder (e.g. ``short``
is always caught by the integral rule first); they stay in the table so
custom node implementations are classified by the same ordered policy.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

from json_flatpath.tree.nodes import (
    FLOATING_POINT_KINDS,
    INTEGRAL_KINDS,
    NUMBER_KINDS,
    NodeKind,
)

if TYPE_CHECKING:
    from json_flatpath.protocols import Node

__all__ = ["TypeTag", "classify"]


class TypeTag(StrEnum):
    """Destination storage type of a flattened column."""

    DOUBLE = "double"
    STRL = "strl"
    BYTE = "byte"
    LONG = "long"
    INT = "int"
    STR = "str"
    MISSING = "missing"
    UNKNOWN = "unknown"


def _is(kind: NodeKind) -> Callable[[NodeKind], bool]:
    return lambda k: k is kind


def _within(kinds: frozenset[NodeKind]) -> Callable[[NodeKind], bool]:
    return lambda k: k in kinds


_RULES: tuple[tuple[Callable[[NodeKind], bool], TypeTag], ...] = (
    (_is(NodeKind.BIG_DECIMAL), TypeTag.DOUBLE),
    (_is(NodeKind.BIG_INTEGER), TypeTag.DOUBLE),
    (_is(NodeKind.BINARY), TypeTag.STRL),
    (_is(NodeKind.BOOLEAN), TypeTag.BYTE),
    (_is(NodeKind.DOUBLE), TypeTag.DOUBLE),
    (_is(NodeKind.FLOAT), TypeTag.DOUBLE),
    (_within(FLOATING_POINT_KINDS), TypeTag.DOUBLE),
    (_is(NodeKind.INT), TypeTag.LONG),
    (_within(INTEGRAL_KINDS), TypeTag.DOUBLE),
    (_is(NodeKind.LONG), TypeTag.DOUBLE),
    (_is(NodeKind.MISSING), TypeTag.MISSING),
    (_is(NodeKind.NULL), TypeTag.MISSING),
    (_within(NUMBER_KINDS), TypeTag.DOUBLE),
    (_is(NodeKind.OBJECT), TypeTag.STRL),
    (_is(NodeKind.POJO), TypeTag.STRL),
    (_is(NodeKind.SHORT), TypeTag.INT),
    (_is(NodeKind.STRING), TypeTag.STR),
)


def classify(node: Node) -> TypeTag:
    """Return the storage type tag for a terminal node.

    Never raises: kinds no rule covers (a non-empty array, a foreign kind
    value) are tagged ``TypeTag.UNKNOWN``.
    """
    kind = node.kind
    for matches, tag in _RULES:
        if matches(kind):
            return tag
    return TypeTag.UNKNOWN
