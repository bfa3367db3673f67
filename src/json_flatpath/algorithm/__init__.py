"""algorithm subpackage: lineage merge rules and type classification.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_flatpath.algorithm import merge_name, terminal_path

    lineage = merge_name((), "orders")
    terminal_path(lineage, "total", depth=1)   # "/orders/total"
"""

from __future__ import annotations

from json_flatpath.algorithm.classify import TypeTag, classify
from json_flatpath.algorithm.lineage import (
    Lineage,
    merge_name,
    merge_name_depth,
    merge_node_id,
    render_generation,
    strip_suffix,
    terminal_path,
)

__all__ = [
    "Lineage",
    "TypeTag",
    "classify",
    "merge_name",
    "merge_name_depth",
    "merge_node_id",
    "render_generation",
    "strip_suffix",
    "terminal_path",
]
