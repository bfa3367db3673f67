"""NodeBuilder: converts parsed Python JSON values into a JsonNode tree.

Uses recursive dispatch to convert dicts, lists and scalar values into
JsonNode objects. Each scalar is given a NodeKind describing its storage
width, the way a JSON parser's typed node model would:

- Python ints are narrowed to the smallest of int (32-bit), long (64-bit)
  or big_integer that holds them.
- Floats are doubles; ``Decimal`` values are big decimals.
- numpy scalars keep their dtype width (int16 -> short, float32 -> float).
- Anything unrecognised becomes an opaque POJO node rather than an error.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from json_flatpath.config import DEFAULT_MAX_NESTING
from json_flatpath.errors import MaxNestingExceededError
from json_flatpath.tree.nodes import JsonNode, NodeKind

__all__ = ["NodeBuilder", "loads"]

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

# numpy integer widths in bytes -> node kind; unsigned types widen one step.
_SIGNED_WIDTHS: dict[int, NodeKind] = {
    1: NodeKind.SHORT,
    2: NodeKind.SHORT,
    4: NodeKind.INT,
    8: NodeKind.LONG,
}
_UNSIGNED_WIDTHS: dict[int, NodeKind] = {
    1: NodeKind.SHORT,
    2: NodeKind.INT,
    4: NodeKind.LONG,
    8: NodeKind.BIG_INTEGER,
}


def _int_kind(value: int) -> NodeKind:
    if _INT32_MIN <= value <= _INT32_MAX:
        return NodeKind.INT
    if _INT64_MIN <= value <= _INT64_MAX:
        return NodeKind.LONG
    return NodeKind.BIG_INTEGER


@dataclass
class NodeBuilder:
    """Converts any parsed JSON value into a JsonNode tree.

    The dispatch order matters: bool MUST be checked before int because bool
    is a subclass of int in Python (isinstance(True, int) is True).

    Containers nested deeper than ``max_nesting`` raise
    ``MaxNestingExceededError``; the outermost container counts as level 1.

    Example::
        builder = NodeBuilder()
        tree = builder.build({"user": {"age": 30}})
        # tree: OBJECT(names=("user",)) -> OBJECT(names=("age",)) -> INT(30)
    """

    max_nesting: int = DEFAULT_MAX_NESTING

    def __post_init__(self) -> None:
        if self.max_nesting < 1:
            msg = f"max_nesting must be >= 1, got {self.max_nesting}"
            raise ValueError(msg)

    def build(self, value: Any) -> JsonNode:
        """Convert a JSON value to a JsonNode tree.

        Args:
            value: A parsed JSON value. Besides the json module's output types,
                   ``Decimal``, ``bytes``, tuples and numpy scalars/arrays are
                   understood.

        Returns:
            The root JsonNode. Values of unknown types become POJO nodes.

        Raises:
            MaxNestingExceededError: If containers nest deeper than
                ``max_nesting``.
        """
        return self._build(value, 0)

    def _build(self, value: Any, nesting: int) -> JsonNode:
        # CRITICAL: bool MUST be checked before int, bool subclasses int in Python
        if isinstance(value, (bool, np.bool_)):
            return JsonNode(kind=NodeKind.BOOLEAN, value=bool(value))

        if isinstance(value, np.ndarray) and value.ndim == 0:
            return self._build(value[()], nesting)

        # Plain loops below keep the recursion at one frame per level.
        if isinstance(value, Mapping):
            level = self._enter(nesting)
            names: list[str] = []
            children: list[JsonNode] = []
            for key, val in value.items():
                names.append(str(key))
                children.append(self._build(val, level))
            return JsonNode(
                kind=NodeKind.OBJECT, children=tuple(children), names=tuple(names)
            )

        if isinstance(value, (list, tuple, np.ndarray)):
            level = self._enter(nesting)
            items: list[JsonNode] = []
            for item in value:
                items.append(self._build(item, level))
            return JsonNode(kind=NodeKind.ARRAY, children=tuple(items))

        if isinstance(value, str):
            return JsonNode(kind=NodeKind.STRING, value=str(value))

        if isinstance(value, int):
            return JsonNode(kind=_int_kind(value), value=value)

        if isinstance(value, np.integer):
            return JsonNode(kind=self._numpy_int_kind(value), value=value)

        if isinstance(value, (np.float16, np.float32)):
            return JsonNode(kind=NodeKind.FLOAT, value=value)

        if isinstance(value, (float, np.floating)):
            return JsonNode(kind=NodeKind.DOUBLE, value=value)

        if isinstance(value, Decimal):
            return JsonNode(kind=NodeKind.BIG_DECIMAL, value=value)

        if isinstance(value, (bytes, bytearray, memoryview)):
            return JsonNode(kind=NodeKind.BINARY, value=bytes(value))

        if value is None:
            return JsonNode(kind=NodeKind.NULL)

        return JsonNode(kind=NodeKind.POJO, value=value)

    def _enter(self, nesting: int) -> int:
        level = nesting + 1
        if level > self.max_nesting:
            raise MaxNestingExceededError(
                f"nesting exceeds max_nesting={self.max_nesting}",
                f"container at nesting level {level} while building the node tree",
            )
        return level

    @staticmethod
    def _numpy_int_kind(value: np.integer) -> NodeKind:
        widths = (
            _UNSIGNED_WIDTHS
            if isinstance(value, np.unsignedinteger)
            else _SIGNED_WIDTHS
        )
        return widths.get(value.dtype.itemsize, NodeKind.BIG_INTEGER)


def loads(
    text: str | bytes,
    use_decimal: bool = False,
    max_nesting: int = DEFAULT_MAX_NESTING,
) -> JsonNode:
    """Parse a JSON document and build its node tree.

    Args:
        text:        The JSON document.
        use_decimal: Parse non-integral numbers as ``Decimal`` (big decimal
                     nodes) instead of ``float`` (double nodes).
        max_nesting: Deepest container nesting accepted.

    Returns:
        The root JsonNode of the document.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON.
        MaxNestingExceededError: If containers nest deeper than
            ``max_nesting``.
    """
    parse_float = Decimal if use_decimal else None
    builder = NodeBuilder(max_nesting=max_nesting)
    return builder.build(json.loads(text, parse_float=parse_float))
