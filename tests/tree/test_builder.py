"""Tests for NodeBuilder and loads.

Covers container construction, field names, bool/int dispatch ordering,
integer width narrowing, numpy scalar widths, Decimal/bytes/opaque values
and JSON text parsing.
"""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import numpy as np
import pytest

from json_flatpath.errors import MaxNestingExceededError
from json_flatpath.tree.builder import NodeBuilder, loads
from json_flatpath.tree.nodes import JsonNode, NodeKind

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def builder() -> NodeBuilder:
    """A fresh NodeBuilder instance for each test."""
    return NodeBuilder()


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


class TestContainers:
    def test_object_names_in_order(self, builder: NodeBuilder) -> None:
        node = builder.build({"b": 1, "a": 2})
        assert node.kind is NodeKind.OBJECT
        assert node.names == ("b", "a")
        assert [c.value for c in node.children] == [1, 2]

    def test_non_string_keys_are_stringified(self, builder: NodeBuilder) -> None:
        node = builder.build({1: "x"})
        assert node.names == ("1",)

    def test_list_and_tuple_are_arrays(self, builder: NodeBuilder) -> None:
        assert builder.build([1, 2]).kind is NodeKind.ARRAY
        assert builder.build((1, 2)).size() == 2

    def test_empty_containers(self, builder: NodeBuilder) -> None:
        assert builder.build([]).is_empty()
        assert builder.build({}).is_empty()

    def test_nested_structure(self, builder: NodeBuilder) -> None:
        node = builder.build({"user": {"tags": ["a"]}})
        user = node.children[0]
        tags = user.children[0]
        assert user.kind is NodeKind.OBJECT
        assert tags.kind is NodeKind.ARRAY
        assert tags.children[0] == JsonNode(kind=NodeKind.STRING, value="a")

    def test_numpy_array_rows(self, builder: NodeBuilder) -> None:
        node = builder.build(np.array([[1, 2], [3, 4]], dtype=np.int32))
        assert node.kind is NodeKind.ARRAY
        assert node.size() == 2
        row = node.children[0]
        assert row.kind is NodeKind.ARRAY
        assert [c.kind for c in row.children] == [NodeKind.INT, NodeKind.INT]

    def test_zero_dim_numpy_array_unwraps(self, builder: NodeBuilder) -> None:
        node = builder.build(np.array(1.5, dtype=np.float32))
        assert node.kind is NodeKind.FLOAT


# ---------------------------------------------------------------------------
# Scalar dispatch
# ---------------------------------------------------------------------------


class TestScalarKinds:
    def test_bool_before_int(self, builder: NodeBuilder) -> None:
        node = builder.build(True)
        assert node.kind is NodeKind.BOOLEAN
        assert node.value is True

    def test_numpy_bool(self, builder: NodeBuilder) -> None:
        node = builder.build(np.bool_(False))
        assert node.kind is NodeKind.BOOLEAN
        assert node.value is False

    def test_string(self, builder: NodeBuilder) -> None:
        assert builder.build("x").kind is NodeKind.STRING

    def test_null(self, builder: NodeBuilder) -> None:
        node = builder.build(None)
        assert node.kind is NodeKind.NULL
        assert node.value is None

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (0, NodeKind.INT),
            (2**31 - 1, NodeKind.INT),
            (-(2**31), NodeKind.INT),
            (2**31, NodeKind.LONG),
            (-(2**63), NodeKind.LONG),
            (2**63, NodeKind.BIG_INTEGER),
            (-(2**70), NodeKind.BIG_INTEGER),
        ],
    )
    def test_int_widths(self, builder: NodeBuilder, value: int, kind: NodeKind) -> None:
        assert builder.build(value).kind is kind

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (np.int8(1), NodeKind.SHORT),
            (np.int16(1), NodeKind.SHORT),
            (np.int32(1), NodeKind.INT),
            (np.int64(1), NodeKind.LONG),
            (np.uint8(1), NodeKind.SHORT),
            (np.uint16(1), NodeKind.INT),
            (np.uint32(1), NodeKind.LONG),
            (np.uint64(1), NodeKind.BIG_INTEGER),
            (np.float16(1.0), NodeKind.FLOAT),
            (np.float32(1.0), NodeKind.FLOAT),
            (np.float64(1.0), NodeKind.DOUBLE),
        ],
    )
    def test_numpy_widths(
        self, builder: NodeBuilder, value: object, kind: NodeKind
    ) -> None:
        assert builder.build(value).kind is kind

    def test_float_is_double(self, builder: NodeBuilder) -> None:
        assert builder.build(1.5).kind is NodeKind.DOUBLE

    def test_decimal(self, builder: NodeBuilder) -> None:
        node = builder.build(Decimal("1.10"))
        assert node.kind is NodeKind.BIG_DECIMAL
        assert node.value == Decimal("1.10")

    def test_binary(self, builder: NodeBuilder) -> None:
        node = builder.build(bytearray(b"ab"))
        assert node.kind is NodeKind.BINARY
        assert node.value == b"ab"

    def test_unknown_value_is_pojo(self, builder: NodeBuilder) -> None:
        node = builder.build(date(2024, 1, 1))
        assert node.kind is NodeKind.POJO
        assert node.value == date(2024, 1, 1)


# ---------------------------------------------------------------------------
# loads
# ---------------------------------------------------------------------------


class TestLoads:
    def test_parses_document(self) -> None:
        node = loads('{"a": [1, 2.5, "x", null, true]}')
        kinds = [c.kind for c in node.children[0].children]
        assert kinds == [
            NodeKind.INT,
            NodeKind.DOUBLE,
            NodeKind.STRING,
            NodeKind.NULL,
            NodeKind.BOOLEAN,
        ]

    def test_use_decimal(self) -> None:
        node = loads('{"a": 2.5}', use_decimal=True)
        assert node.children[0].kind is NodeKind.BIG_DECIMAL
        assert node.children[0].value == Decimal("2.5")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            loads("{not json")

    def test_deep_text_raises_typed_error(self) -> None:
        with pytest.raises(MaxNestingExceededError):
            loads("[" * 600 + "1" + "]" * 600)

    def test_max_nesting_argument(self) -> None:
        assert loads('{"a": [1]}', max_nesting=2).size() == 1
        with pytest.raises(MaxNestingExceededError):
            loads('{"a": [1]}', max_nesting=1)


# ---------------------------------------------------------------------------
# Nesting limit
# ---------------------------------------------------------------------------


class TestNestingLimit:
    def test_default_limit(self, builder: NodeBuilder) -> None:
        assert builder.max_nesting == 500

    def test_outermost_container_is_level_one(self) -> None:
        builder = NodeBuilder(max_nesting=2)
        assert builder.build([[1]]).size() == 1
        with pytest.raises(MaxNestingExceededError):
            builder.build([[[1]]])

    def test_objects_count_as_levels(self) -> None:
        with pytest.raises(MaxNestingExceededError):
            NodeBuilder(max_nesting=2).build({"a": {"b": {}}})

    def test_scalars_do_not_count(self) -> None:
        assert NodeBuilder(max_nesting=1).build(5).kind is NodeKind.INT
        assert NodeBuilder(max_nesting=1).build([1, "x"]).size() == 2

    def test_limit_deep_in_plain_lists(self, builder: NodeBuilder) -> None:
        value: list[object] = []
        for _ in range(499):
            value = [value]
        assert builder.build(value).kind is NodeKind.ARRAY
        with pytest.raises(MaxNestingExceededError):
            builder.build([[value]])

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError, match="max_nesting"):
            NodeBuilder(max_nesting=0)
