"""Lineage merge rules and path rendering.

A lineage is the tuple of ancestor path segments in effect while the
flattener descends, oldest ancestor first and the top of the stack last.
Every function here is pure: merges return a new tuple and never touch the
one they were given, so sibling branches always start from the same
lineage.

Segments may carry a 1-based ``_<n>`` suffix.  The merge rules compare
segments with that suffix removed, which lets repeated recursions into the
same field share one stack slot while a change of field keeps the previous
ancestor.
"""

from __future__ import annotations

from cachetools import LRUCache, cached

from json_flatpath.errors import LineageError

__all__ = [
    "Lineage",
    "merge_name",
    "merge_name_depth",
    "merge_node_id",
    "render_generation",
    "strip_suffix",
    "terminal_path",
]

Lineage = tuple[str, ...]

_DIGITS = frozenset("0123456789")


@cached(cache=LRUCache(maxsize=4096))
def strip_suffix(segment: str) -> str:
    """Remove a trailing ``_<digits>`` suffix from a path segment.

    Only ASCII digits count, and the suffix must have at least one digit:
    ``"items_12"`` -> ``"items"``, ``"a_1_2"`` -> ``"a_1"``, ``"a_"`` and
    ``"a_x1"`` are returned unchanged.

    Args:
        segment: One lineage segment.

    Returns:
        The segment without its numeric suffix.
    """
    head, sep, tail = segment.rpartition("_")
    if sep and tail and _DIGITS.issuperset(tail):
        return head
    return segment


def merge_name(lineage: Lineage, field_name: str) -> Lineage:
    """Push ``field_name``, replacing the top segment when it names the same field.

    Args:
        lineage:    Current lineage.
        field_name: Name of the child being descended into.

    Returns:
        The lineage for the child recursion.
    """
    if not lineage:
        return (field_name,)
    *rest, top = lineage
    if strip_suffix(top) != field_name:
        return (*lineage, field_name)
    return (*rest, field_name)


def merge_name_depth(lineage: Lineage, field_name: str, depth: int) -> Lineage:
    """Like ``merge_name``, but an empty lineage gets ``<field_name>_<depth>``.

    This is how root-level sibling objects get depth-qualified names when
    no ancestor segment exists yet.
    """
    if not lineage:
        return (f"{field_name}_{depth}",)
    return merge_name(lineage, field_name)


def merge_node_id(lineage: Lineage, node_id: int) -> Lineage:
    """Renumber the top segment for the ``node_id``-th (1-based) array element.

    The top segment is stripped of its suffix and compared with the segment
    below it.  When they differ the element gets ``<segment>_<node_id>``;
    when they match the stripped segment is used unqualified.

    Args:
        lineage: Current lineage; must not be empty.
        node_id: 1-based position of the element in its array.

    Returns:
        The lineage for the element recursion.

    Raises:
        LineageError: If ``lineage`` is empty.
    """
    if not lineage:
        raise LineageError(
            "array elements need an ancestor segment to number",
            f"merge_node_id called with empty lineage for node_id={node_id}",
        )
    *rest, top = lineage
    stripped = strip_suffix(top)
    parent = rest[-1] if rest else None
    if stripped != parent:
        return (*rest, f"{stripped}_{node_id}")
    return (*rest, stripped)


def render_generation(lineage: Lineage) -> str:
    """Render a lineage as a ``/``-joined generation string.

    Empty segments are skipped.  A non-empty result always starts with
    ``/``; a lineage with no usable segments renders as ``""``.
    """
    joined = "/".join(segment for segment in lineage if segment)
    return f"/{joined}" if joined else ""


def terminal_path(lineage: Lineage, field_name: str, depth: int) -> str:
    """Build the final path of a terminal node.

    Args:
        lineage:    Lineage in effect at the terminal.
        field_name: Declared or synthetic name of the terminal.
        depth:      Depth the terminal is recorded at.

    Returns:
        ``<generation>/<field_name>``, or ``/<field_name>_<depth>`` for a
        terminal without ancestors.
    """
    generation = render_generation(lineage)
    if generation:
        return f"{generation}/{field_name}"
    return f"/{field_name}_{depth}"
