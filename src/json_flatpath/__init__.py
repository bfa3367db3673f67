"""json-flatpath - flatten nested JSON into typed, uniquely keyed column paths."""

from __future__ import annotations

from json_flatpath.algorithm.classify import TypeTag
from json_flatpath.api import flatten, loads
from json_flatpath.config import CollisionPolicy, FlattenConfig
from json_flatpath.errors import (
    FlattenError,
    LineageError,
    MaxNestingExceededError,
    NodeReadError,
    PathCollisionError,
)
from json_flatpath.flattener import Flattener
from json_flatpath.protocols import Node
from json_flatpath.tree.nodes import MISSING, JsonNode, NodeKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "MISSING",
    "CollisionPolicy",
    "FlattenConfig",
    "FlattenError",
    "Flattener",
    "JsonNode",
    "LineageError",
    "MaxNestingExceededError",
    "Node",
    "NodeKind",
    "NodeReadError",
    "PathCollisionError",
    "TypeTag",
    "flatten",
    "loads",
]
