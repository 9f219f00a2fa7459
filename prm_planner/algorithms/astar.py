"""Generic A* search over any graph exposing a heuristic and weighted neighbors."""

import bisect
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Optional, Protocol, Set, Tuple


class SearchNode(Protocol):
    """Capability required by `astar_search`.

    Nodes are used as dictionary keys, so they must be hashable. Equality
    decides whether a popped node is the target.
    """

    def heuristic(self, target: Any) -> float:
        """Estimated cost from this node to `target`."""
        ...

    def neighbors(self) -> Iterable[Tuple[Any, float]]:
        """Outgoing connections as (neighbor, edge cost) pairs."""
        ...


@dataclass
class _Record:
    g: float
    h: float
    parent: Optional[Hashable]

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class SearchResult:
    """Outcome of one A* call.

    Attributes:
        found: True if the target was reached.
        start: Node the search started from.
        target: Node the search was looking for.
        parents: Back-references of every node reached by the search.
        costs: Cost from start (g) of every node reached by the search.
        expanded: Number of nodes moved to the closed list.
    """

    found: bool
    start: Any
    target: Any
    parents: Dict[Any, Optional[Any]] = field(default_factory=dict)
    costs: Dict[Any, float] = field(default_factory=dict)
    expanded: int = 0

    @property
    def cost(self) -> float:
        if not self.found:
            return float("inf")
        return self.costs[self.target]

    def backtrack(self, node: Any) -> List[Any]:
        """Follow parent back-references from `node` to the start node."""
        if node not in self.parents:
            return []
        chain = []
        current: Optional[Any] = node
        while current is not None:
            chain.append(current)
            current = self.parents[current]
        return chain

    def path(self) -> List[Any]:
        """Nodes from start to target, empty if the search failed."""
        if not self.found:
            return []
        return self.backtrack(self.target)[::-1]


def astar_search(start: SearchNode, target: SearchNode) -> SearchResult:
    """Run A* from `start` to `target`.

    The open list is kept ordered by f = g + h; a new entry goes in front of
    the first entry whose f is strictly greater, so earlier entries win ties.
    A node already in the open or closed list is only re-admitted when the
    new cost from start is strictly lower than the recorded one.

    All search state lives in this call, the nodes themselves are never
    mutated, so the same graph can be searched repeatedly.
    """
    if start == target:
        return SearchResult(True, start, target, {start: None}, {start: 0.0})

    records: Dict[Any, _Record] = {}
    open_list: List[Any] = []
    open_f: List[float] = []
    closed: Set[Any] = set()

    def admit(node: Any, cost: float, parent: Optional[Any]) -> None:
        record = records.get(node)
        if record is not None:
            if record.g <= cost:
                # A path at least as cheap is already known
                return
            if node in closed:
                closed.discard(node)
            else:
                i = _index_of(open_list, node)
                del open_list[i]
                del open_f[i]

        record = _Record(g=cost, h=node.heuristic(target), parent=parent)
        records[node] = record
        i = bisect.bisect_right(open_f, record.f)
        open_list.insert(i, node)
        open_f.insert(i, record.f)

    admit(start, 0.0, None)

    found = False
    expanded = 0
    while open_list:
        node = open_list.pop(0)
        open_f.pop(0)
        closed.add(node)
        expanded += 1

        if node == target:
            found = True
            break

        g = records[node].g
        for neighbor, edge_cost in node.neighbors():
            admit(neighbor, g + edge_cost, node)

    return SearchResult(
        found=found,
        start=start,
        target=target,
        parents={n: r.parent for n, r in records.items()},
        costs={n: r.g for n, r in records.items()},
        expanded=expanded,
    )


def _index_of(items: List[Any], node: Any) -> int:
    for i, item in enumerate(items):
        if item == node:
            return i
    raise ValueError(f"{node!r} is not in the open list")
