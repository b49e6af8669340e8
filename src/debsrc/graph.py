"""A small arena-backed directed graph with a deterministic topological sort."""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from debsrc.exceptions import CycleDetected, UnknownNodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Node(Generic[T]):
    """A named node carrying its payload. `index` is its insertion position in the network."""

    name: str
    value: T
    index: int


@dataclass
class Network(Generic[T]):
    """Nodes live in a list (index = identity); edges are sets of outgoing node indices."""

    nodes: list[Node[T]] = field(default_factory=list)
    _index: dict[str, int] = field(default_factory=dict, repr=False)
    _edges: list[set[int]] = field(default_factory=list, repr=False)

    def add_node(self, name: str, value: T) -> Node[T]:
        if name in self._index:
            raise ValueError(f"Node {name!r} already exists")
        node = Node(name=name, value=value, index=len(self.nodes))
        self.nodes.append(node)
        self._index[name] = node.index
        self._edges.append(set())
        return node

    def get(self, name: str) -> Node[T]:
        try:
            return self.nodes[self._index[name]]
        except KeyError:
            raise UnknownNodeError(f"No such node: {name!r}") from None

    def add_edge(self, src: str, dst: str) -> None:
        """Require `src` to come before `dst`. Adding the same edge twice is a no-op."""
        self._edges[self.get(src).index].add(self.get(dst).index)

    def successors(self, name: str) -> list[Node[T]]:
        return [self.nodes[i] for i in sorted(self._edges[self.get(name).index])]

    def sort(self) -> list[Node[T]]:
        """Order all nodes so that every edge points forward.

        Among nodes with no constraint between them, the one added first comes first, so the
        same network always sorts the same way.

        Raises:
            CycleDetected: naming the nodes of one cycle, in edge order
        """
        in_degree = [0] * len(self.nodes)
        for targets in self._edges:
            for target in targets:
                in_degree[target] += 1

        ready = [i for i, degree in enumerate(in_degree) if degree == 0]
        heapq.heapify(ready)
        order: list[Node[T]] = []
        while ready:
            i = heapq.heappop(ready)
            order.append(self.nodes[i])
            for target in self._edges[i]:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    heapq.heappush(ready, target)

        if len(order) != len(self.nodes):
            remaining = {i for i, degree in enumerate(in_degree) if degree > 0}
            raise CycleDetected([self.nodes[i].name for i in self._find_cycle(remaining)])
        return order

    def _find_cycle(self, remaining: set[int]) -> list[int]:
        # every node left over by Kahn's algorithm has a predecessor that is also left over,
        # so walking predecessors backwards has to revisit a node eventually
        predecessors: dict[int, int] = {}
        for src in sorted(remaining):
            for dst in self._edges[src]:
                if dst in remaining:
                    predecessors.setdefault(dst, src)

        seen: dict[int, int] = {}
        path: list[int] = []
        current = min(remaining)
        while current not in seen:
            seen[current] = len(path)
            path.append(current)
            current = predecessors[current]
        cycle = path[seen[current]:]
        cycle.reverse()
        logger.debug(f"Cycle found among {len(remaining)} unsorted nodes")
        return cycle
