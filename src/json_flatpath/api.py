"""Public API functions for json-flatpath.

``flatten`` creates a fresh Flattener per call; there is no global state
shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from json_flatpath.config import FlattenConfig
from json_flatpath.flattener import Flattener
from json_flatpath.tree.builder import loads

__all__ = ["flatten", "loads"]


def flatten(
    value: Any,
    depth: int = 0,
    lineage: Iterable[str] = (),
    config: FlattenConfig | None = None,
) -> Flattener:
    """Flatten a JSON value into uniquely keyed terminal paths.

    Args:
        value:   A parsed JSON value, or any ``Node``-conformant tree.
        depth:   Depth of ``value`` within its document. Defaults to 0.
        lineage: Seed ancestor segments, used when ``value`` is a sub-tree of
                 a larger document. Defaults to no ancestors.
        config:  Naming and safety settings. Defaults to ``FlattenConfig()``.

    Returns:
        A read-only ``Flattener`` exposing ``keys()``, ``get()``,
        ``lineage()`` and ``type_map()``.
    """
    return Flattener(value, depth=depth, lineage=lineage, config=config)
