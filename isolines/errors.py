"""Exceptions raised by the isolines package."""

from __future__ import annotations

from typing import Optional


class IsolineError(Exception):
    """Base class for every error raised by isolines."""


class ChainInconsistencyError(IsolineError):
    """An edge does not fit the chain state it refers to.

    Raised when a node ends up with more than two incident edges (the input
    is not a two-valent graph) or when a chain end
    recorded for *node* does not actually sit at that end.  The extraction
    of the affected level is aborted; :attr:`level` is filled in by the
    assembler when the error crosses the per-level boundary.
    """

    def __init__(self, node: int, message: Optional[str] = None) -> None:
        self.node = node
        self.level: Optional[int] = None
        super().__init__(message or f"Inconsistent line at node {node}")

    def __str__(self) -> str:
        text = super().__str__()
        if self.level is not None:
            return f"{text} (level {self.level})"
        return text


class GridBoundsError(IsolineError, ValueError):
    """Grid extent cannot be represented by the NodeID packing."""


class RefinementError(IsolineError, ArithmeticError):
    """A refinement strategy evaluated the field to NaN or undefined."""
