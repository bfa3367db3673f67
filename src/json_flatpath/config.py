"""FlattenConfig and CollisionPolicy: naming and safety settings for the Flattener.

FlattenConfig is a frozen (immutable) dataclass.  It only controls the
synthetic names the flattener invents, what happens when two terminals land
on the same path, and how deep it is willing to recurse; the path and merge
rules themselves are fixed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

# Deep enough for real documents while staying well under the default
# interpreter recursion limit.
DEFAULT_MAX_NESTING = 500

# Separates a renamed path from its collision counter, e.g. ``/m_2/element_1~2``.
# Distinct from the ``_<n>`` positional suffix so renames stay recognisable.
RENAME_MARKER = "~"


class CollisionPolicy(StrEnum):
    """What to do when a terminal resolves to a path that is already taken.

    - RENAME: Append ``~2``, ``~3``, ... to the new path until it is unique.
      The ``~`` marker keeps renames apart from ``_<n>`` array numbering, and
      suffix stripping does not fold a renamed path back into its family.
    - RAISE:  Raise ``PathCollisionError``.
    """

    RENAME = auto()
    RAISE = auto()


@dataclass(frozen=True, slots=True)
class FlattenConfig:
    """Immutable configuration for the Flattener.

    Attributes:
        root_name: Field name used when the flattened node is itself a
            terminal (a scalar or an empty container), e.g. ``/root_0``.
        element_prefix: Prefix of the synthetic field names given to array
            elements, which have no declared name (``element_1``, ...).
        on_collision: How a second terminal on an existing path is handled.
            Ragged nested arrays (``[[1, 2], [3, [4]]]``) can produce such
            paths.  Defaults to ``CollisionPolicy.RENAME``.
        max_nesting: Maximum number of nested containers descended into
            before ``MaxNestingExceededError`` is raised.
    """

    root_name: str = "root"
    element_prefix: str = "element"
    on_collision: CollisionPolicy = CollisionPolicy.RENAME
    max_nesting: int = DEFAULT_MAX_NESTING

    def __post_init__(self) -> None:
        for name in ("root_name", "element_prefix"):
            value = getattr(self, name)
            if not value:
                msg = f"{name} must be a non-empty string"
                raise ValueError(msg)
            if "/" in value:
                msg = f"{name} must not contain '/', got {value!r}"
                raise ValueError(msg)
        if self.max_nesting < 1:
            msg = f"max_nesting must be >= 1, got {self.max_nesting}"
            raise ValueError(msg)
