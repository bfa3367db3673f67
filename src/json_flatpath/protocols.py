"""Node Protocol: the capability set the flattener needs from a tree node.

Any parsed-JSON representation can be flattened without inheriting from a
base class: a class with conformant methods passes ``isinstance`` checks.

Example::

    from json_flatpath.protocols import Node
    from json_flatpath.tree import NodeKind

    class LazyNode:
        kind = NodeKind.ARRAY

        def is_array(self) -> bool: return True
        def is_object(self) -> bool: return False
        def is_container(self) -> bool: return True
        def is_empty(self) -> bool: return False
        def size(self) -> int: return 3
        def elements(self): ...
        def field_names(self): return iter(())

    assert isinstance(LazyNode(), Node)  # True, structural conformance
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_flatpath.tree.nodes import NodeKind


@runtime_checkable
class Node(Protocol):
    """Structural protocol for flattener input nodes.

    The contract:
    - ``kind`` identifies the container or scalar kind of the node.
    - ``elements()`` yields children in document order; ``field_names()``
      yields the matching field names for objects and nothing otherwise.
    - ``is_empty()`` is only ever true for containers.
    - Implementations may read lazily; an ``OSError`` raised while reading is
      reported by the Flattener as ``NodeReadError``.
    """

    @property
    def kind(self) -> NodeKind: ...

    def is_array(self) -> bool: ...

    def is_object(self) -> bool: ...

    def is_container(self) -> bool: ...

    def is_empty(self) -> bool: ...

    def size(self) -> int: ...

    def elements(self) -> Iterator[Node]: ...

    def field_names(self) -> Iterator[str]: ...
