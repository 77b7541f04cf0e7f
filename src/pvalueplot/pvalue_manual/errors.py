"""Errors and warnings raised while resolving manual p-value annotations."""

from __future__ import annotations


class MissingColumnError(ValueError):
    """A referenced column is not present in the results table.

    Attributes:
        column: The column name that could not be found.
        role: Which option referenced it ("label", "xmin", "xmax", "y.position").
    """

    def __init__(self, column: str, role: str) -> None:
        self.column = column
        self.role = role
        super().__init__(f"can't find the {role} variable {column!r} in the data")


class AmbiguousRemovalWarning(UserWarning):
    """Bracket removal was requested for pairwise comparisons; brackets are kept."""
