"""Reconstruction of node chains from an unordered set of edges.

The edges of one level form a two-valent graph: every node touches at most
two edges, so the graph decomposes into simple paths and cycles.
:class:`ChainBuilder` recovers them in a single pass over the edges,
whatever their order and orientation.

While building, every chain is a :class:`collections.deque` and the
builder keeps a map from each *free end* node to the chain ending there.
An open chain is therefore reachable under two keys at once; a closed chain
has no free end and leaves the map.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Callable, Deque, Dict, Generic, Iterable, List, Optional, Sequence, TypeVar

from .errors import ChainInconsistencyError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

_Chain = Deque[int]


@dataclass
class LevelStructure(Generic[T]):
    """Lines of one level, split into open chains and closed loops.

    ``error`` is set only when the level could not be extracted and was
    skipped; both line lists are empty then.
    """

    opened: List[T] = field(default_factory=list)
    closed: List[T] = field(default_factory=list)
    error: Optional[Exception] = None

    def map(self, callback: Callable[[T], U]) -> "LevelStructure[U]":
        """Apply *callback* to every line, keeping the open/closed split."""
        return replace(
            self,
            opened=[callback(line) for line in self.opened],
            closed=[callback(line) for line in self.closed],
        )

    def __len__(self) -> int:
        return len(self.opened) + len(self.closed)


class ChainBuilder:
    """Joins edges (or longer sub-paths) into maximal chains.

    >>> builder = ChainBuilder()
    >>> builder.extend([(1, 2), (3, 2), (3, 4)])
    >>> builder.result().opened
    [[1, 2, 3, 4]]
    """

    def __init__(self) -> None:
        self._ends: Dict[int, _Chain] = {}
        self._closed: List[_Chain] = []
        self._degree: Dict[int, int] = {}

    def add(self, fragment: Sequence[int]) -> None:
        """Add one edge, or a sub-path of two or more nodes."""
        line: _Chain = deque(fragment)
        if len(line) < 2:
            raise ValueError(f"a fragment needs at least two nodes, got {list(fragment)}")
        self._count_degree(line)

        first = line[0]
        last = line[-1]
        if first == last:
            line.pop()
            self._closed.append(line)
        elif first in self._ends:
            self._attach(first, line)
        elif last in self._ends:
            self._attach(last, line)
        else:
            self._ends[first] = line
            self._ends[last] = line

    def extend(self, fragments: Iterable[Sequence[int]]) -> None:
        for fragment in fragments:
            self.add(fragment)

    def result(self) -> LevelStructure[List[int]]:
        """Current chains; open ones are deduplicated by identity."""
        opened = {id(line): line for line in self._ends.values()}
        return LevelStructure(
            opened=[list(line) for line in opened.values()],
            closed=[list(line) for line in self._closed],
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _count_degree(self, line: _Chain) -> None:
        # all-or-nothing, so a rejected fragment leaves no trace
        last = len(line) - 1
        updated: Dict[int, int] = {}
        for i, node in enumerate(line):
            degree = updated.get(node, self._degree.get(node, 0))
            degree += 1 if i in (0, last) else 2
            if degree > 2:
                raise ChainInconsistencyError(
                    node, f"Node {node} has more than two incident edges"
                )
            updated[node] = degree
        self._degree.update(updated)

    def _attach(self, node: int, fragment: _Chain) -> None:
        line = self._ends[node]
        new_end = self._splice(line, node, fragment)
        self._rename(line, new_end)

    def _rename(self, line: _Chain, node: int) -> None:
        # node is the fresh free end of line
        if line[0] == line[-1]:
            del self._ends[node]
            line.pop()
            self._closed.append(line)
        elif node in self._ends:
            other = self._ends[node]
            far_end = self._splice(line, node, other)
            self._ends[far_end] = line
        else:
            self._ends[node] = line

    def _splice(self, line: _Chain, node: int, other: _Chain) -> int:
        """Join *other* onto the end of *line* at *node*; returns the new end.

        Drops the map entry for *node*, which is no longer free.
        """
        if line[0] == node:
            if other[0] == node:
                other.reverse()
            if other[-1] != node:
                raise ChainInconsistencyError(node)
            other.pop()
            line.extendleft(reversed(other))
            del self._ends[node]
            return line[0]
        if line[-1] == node:
            if other[-1] == node:
                other.reverse()
            if other[0] != node:
                raise ChainInconsistencyError(node)
            other.popleft()
            line.extend(other)
            del self._ends[node]
            return line[-1]
        raise ChainInconsistencyError(node)


def sort_lines(edges: Iterable[Sequence[int]]) -> LevelStructure[List[int]]:
    """Join the edges of one level into open and closed node chains.

    Parameters
    ----------
    edges:
        Node pairs (or longer sub-paths) in any order and orientation.  Every
        node may touch at most two edges.

    Returns
    -------
    LevelStructure
        ``opened`` chains list their nodes end to end; ``closed`` chains list
        each node of the cycle once, without repeating the first node.
        Chain direction is arbitrary.

    Raises
    ------
    ChainInconsistencyError
        If a node has more than two incident edges.
    """
    builder = ChainBuilder()
    builder.extend(edges)
    result = builder.result()
    logger.debug("%d open, %d closed chains", len(result.opened), len(result.closed))
    return result
