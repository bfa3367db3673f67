"""Flattener: turns a nested node tree into uniquely keyed terminal paths.

This is the central component.  Construction performs one synchronous,
recursive pass over the input tree and leaves behind an immutable view of:

- a mapping from path string to terminal node,
- the paths in discovery order (``lineage()``),
- one storage type tag per path, index-aligned with the paths
  (``type_map()``).

Walk rules, applied to every child of a container (``node_id`` is the
1-based child position; array elements have no field name and are called
``element_<node_id>``):

1. array element that is a non-empty container -> recurse, renumbering the
   top lineage segment with the element's ``node_id``;
2. empty container -> terminal, stored as the MISSING sentinel;
3. container holding containers, or an array -> recurse under the field name;
4. object holding only scalars -> recurse under the field name, depth
   qualified when there is no ancestor yet;
5. anything else -> terminal.

The depth passed down never increases with nesting: every terminal is
recorded at ``depth + 1`` of the depth the Flattener was created with, and
that number only shows up in the names of root-level terminals and objects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from json_flatpath.algorithm.classify import TypeTag, classify
from json_flatpath.algorithm.lineage import (
    Lineage,
    merge_name,
    merge_name_depth,
    merge_node_id,
    terminal_path,
)
from json_flatpath.config import RENAME_MARKER, CollisionPolicy, FlattenConfig
from json_flatpath.errors import (
    MaxNestingExceededError,
    NodeReadError,
    PathCollisionError,
)
from json_flatpath.protocols import Node
from json_flatpath.tree.builder import NodeBuilder
from json_flatpath.tree.nodes import MISSING

__all__ = ["Flattener", "contains_containers"]

logger = logging.getLogger(__name__)


def contains_containers(node: Node) -> bool:
    """True when ``node`` is a container with at least one container child."""
    if not node.is_container():
        return False
    return any(child.is_container() for child in node.elements())


@dataclass
class _BuildContext:
    """Accumulators for one flattening pass."""

    on_collision: CollisionPolicy = CollisionPolicy.RENAME
    entries: dict[str, Node] = field(default_factory=dict)
    paths: list[str] = field(default_factory=list)
    tags: list[TypeTag] = field(default_factory=list)

    def record(self, lineage: Lineage, field_name: str, node: Node, depth: int) -> str:
        path = terminal_path(lineage, field_name, depth)
        if path in self.entries:
            if self.on_collision is CollisionPolicy.RAISE:
                raise PathCollisionError(
                    path, f"lineage={lineage!r} field_name={field_name!r} depth={depth}"
                )
            path = self._rename(path)
        value: Node = MISSING if node.is_container() and node.is_empty() else node
        self.entries[path] = value
        self.paths.append(path)
        self.tags.append(classify(value))
        return path

    def _rename(self, path: str) -> str:
        n = 2
        while f"{path}{RENAME_MARKER}{n}" in self.entries:
            n += 1
        renamed = f"{path}{RENAME_MARKER}{n}"
        logger.debug("Terminal path %s already taken, using %s", path, renamed)
        return renamed


class Flattener:
    """Flattened, read-only view of a node tree.

    Accepts either a ``Node``-conformant tree or a plain parsed JSON value,
    which is converted with ``NodeBuilder`` first.  A non-zero ``depth`` and
    a seed ``lineage`` let a caller flatten a sub-tree as if it were still
    embedded at that position in a larger document.

    Example::

        flat = Flattener({"a": 1, "b": [{"c": 2}, {"c": 3}]})
        flat.lineage()    # ("/a_1", "/b_1/c", "/b_2/c")
        flat.type_map()   # (TypeTag.LONG, TypeTag.LONG, TypeTag.LONG)
        flat.get("/b_2/c").value   # 3
    """

    def __init__(
        self,
        node: Node | Any,
        depth: int = 0,
        lineage: Iterable[str] = (),
        config: FlattenConfig | None = None,
    ) -> None:
        """Flatten ``node``.

        Args:
            node:    Root of the tree to flatten.
            depth:   Depth of ``node`` within its document (>= 0).
            lineage: Seed ancestor segments, oldest first.
            config:  Naming and safety settings. Defaults to ``FlattenConfig()``.

        Raises:
            ValueError: If ``depth`` is negative.
            NodeReadError: If reading the input tree raises ``OSError``.
            PathCollisionError: If two terminals resolve to the same path and
                ``config.on_collision`` is ``CollisionPolicy.RAISE``.
            MaxNestingExceededError: If the tree is nested deeper than
                ``config.max_nesting``.
        """
        if depth < 0:
            msg = f"depth must be >= 0, got {depth}"
            raise ValueError(msg)

        self._config: FlattenConfig = config if config is not None else FlattenConfig()
        self._depth = depth
        self._seed: Lineage = tuple(lineage)
        if isinstance(node, Node):
            root: Node = node
        else:
            root = NodeBuilder(max_nesting=self._config.max_nesting).build(node)

        context = _BuildContext(on_collision=self._config.on_collision)
        try:
            if root.is_container() and not root.is_empty():
                self._descend(root, depth, self._seed, 1, context)
            else:
                # A bare terminal has no field name of its own.
                context.record(self._seed, self._config.root_name, root, depth)
        except OSError as exc:
            raise NodeReadError(
                "failed to read the input tree", repr(exc), wrapped=exc
            ) from exc

        self._entries = MappingProxyType(context.entries)
        self._paths: tuple[str, ...] = tuple(context.paths)
        self._tags: tuple[TypeTag, ...] = tuple(context.tags)
        logger.debug(
            "Flattened %d terminal paths (depth=%d, seed=%r)",
            len(self._paths),
            depth,
            self._seed,
        )

    # ------------------------------------------------------------------
    # Descent
    # ------------------------------------------------------------------

    def _descend(
        self,
        node: Node,
        depth: int,
        lineage: Lineage,
        nesting: int,
        context: _BuildContext,
    ) -> None:
        if nesting > self._config.max_nesting:
            raise MaxNestingExceededError(
                f"nesting exceeds max_nesting={self._config.max_nesting}",
                f"lineage={lineage!r}",
            )

        names = list(node.field_names())
        in_array = node.is_array()
        prefix = self._config.element_prefix

        for index, child in enumerate(node.elements()):
            node_id = index + 1
            field_name = names[index] if names else f"{prefix}_{node_id}"
            is_container = child.is_container()
            is_empty = is_container and child.is_empty()

            if in_array and is_container and not is_empty:
                if lineage:
                    branch = merge_node_id(lineage, node_id)
                else:
                    # Root-level elements have nothing to renumber.
                    branch = merge_name_depth(lineage, field_name, depth)
                self._descend(child, depth, branch, nesting + 1, context)

            elif is_empty:
                context.record(lineage, field_name, child, depth + 1)

            elif contains_containers(child) or child.is_array():
                self._descend(
                    child, depth, merge_name(lineage, field_name), nesting + 1, context
                )

            elif child.is_object():
                self._descend(
                    child,
                    depth,
                    merge_name_depth(lineage, field_name, depth),
                    nesting + 1,
                    context,
                )

            else:
                context.record(lineage, field_name, child, depth + 1)

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Depth the tree was flattened at."""
        return self._depth

    @property
    def seed(self) -> Lineage:
        """Seed lineage the tree was flattened under."""
        return self._seed

    def keys(self) -> frozenset[str]:
        """All discovered paths."""
        return frozenset(self._entries)

    def get(self, path: str, default: Node | None = None) -> Node | None:
        """Return the terminal node at ``path``, or ``default`` if unknown."""
        return self._entries.get(path, default)

    def lineage(self) -> tuple[str, ...]:
        """Paths in discovery order, index-aligned with ``type_map()``."""
        return self._paths

    def type_map(self) -> tuple[TypeTag, ...]:
        """Storage type per discovered path, in the order of ``lineage()``."""
        return self._tags

    def columns(self) -> list[tuple[str, TypeTag]]:
        """``(path, type tag)`` pairs in discovery order."""
        return list(zip(self._paths, self._tags, strict=True))

    def items(self) -> Iterator[tuple[str, Node]]:
        """``(path, node)`` pairs in discovery order."""
        for path in self._paths:
            yield path, self._entries[path]

    def __getitem__(self, path: str) -> Node:
        return self._entries[path]

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)
