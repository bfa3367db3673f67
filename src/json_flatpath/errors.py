"""Exception hierarchy for JSON flattening."""

from __future__ import annotations


class FlattenError(Exception):
    """Base exception for flattening errors.

    Provides dual messaging: a short user-facing message and internal
    details (paths, lineages) for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class NodeReadError(FlattenError):
    """Raised when an input node fails with an I/O error while being read."""


class PathCollisionError(FlattenError):
    """Raised when two terminal nodes resolve to the same path."""

    def __init__(self, path: str, internal_details: str = "") -> None:
        super().__init__(f"duplicate terminal path: {path}", internal_details)
        self.path = path


class LineageError(FlattenError, ValueError):
    """Raised when a lineage merge rule is applied to an unusable lineage."""


class MaxNestingExceededError(FlattenError):
    """Raised when container nesting is deeper than the configured limit."""
