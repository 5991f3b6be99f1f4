from __future__ import annotations

import math
from dataclasses import dataclass, replace
from heapq import heappop, heappush
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from errors import InvalidGraph


# Weight of a road whose travel time has not been decided yet.
UNKNOWN = None
PLACEHOLDER_WEIGHT = 1

Weight = Optional[int]


@dataclass(frozen=True)
class Edge:
    origin: int
    target: int
    weight: Weight

    @property
    def is_unknown(self) -> bool:
        return self.weight is UNKNOWN

    def as_tuple(self) -> Tuple[int, int, Weight]:
        return self.origin, self.target, self.weight


class DistanceTable(NamedTuple):
    """Result of a single-source Dijkstra run.

    distances[v] is the shortest known distance from the source to v
    (``math.inf`` when unreachable) and predecessors[v] is the previous node
    on that path.
    """

    source: int
    distances: Dict[int, float]
    predecessors: Dict[int, int]

    def path_to(self, target: int) -> List[int]:
        if self.distances.get(target, math.inf) == math.inf:
            raise ValueError(f"No path between {self.source} and {target}.")

        path: List[int] = [target]
        while path[-1] != self.source:
            path.append(self.predecessors[path[-1]])
        path.reverse()
        return path


def is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_weight(weight: object, allow_unknown: bool) -> None:
    if weight is UNKNOWN:
        if not allow_unknown:
            raise InvalidGraph("Weight must be concrete, got UNKNOWN.")
        return
    if not is_int(weight):
        raise InvalidGraph(f"Edge weight must be an integer or UNKNOWN, got {weight!r}.")
    if weight < 0:
        raise InvalidGraph(f"Edge weight must be non-negative, got {weight}.")


def _validate_edges(
    node_count: int, edges: Iterable[Sequence]
) -> List[Edge]:
    if not is_int(node_count) or node_count < 0:
        raise InvalidGraph(f"Node count must be a non-negative integer, got {node_count!r}.")

    validated: List[Edge] = []
    seen: Dict[FrozenSet[int], int] = {}
    for position, raw in enumerate(edges):
        try:
            origin, target, weight = raw
        except (TypeError, ValueError) as exc:
            raise InvalidGraph(f"Edge #{position} must be (u, v, weight), got {raw!r}.") from exc
        for node in (origin, target):
            if not is_int(node) or not 0 <= node < node_count:
                raise InvalidGraph(
                    f"Edge #{position} references node {node!r} outside [0, {node_count})."
                )
        if origin == target:
            raise InvalidGraph(f"Edge #{position} is a self-loop on node {origin}.")
        key = frozenset((origin, target))
        if key in seen:
            raise InvalidGraph(
                f"Edge #{position} ({origin}, {target}) duplicates edge #{seen[key]}."
            )
        _check_weight(weight, allow_unknown=True)
        seen[key] = position
        validated.append(Edge(origin, target, weight))
    return validated


class Graph:
    """Undirected weighted graph over nodes ``0..n-1`` with Dijkstra support.

    Every edge is stored in both endpoints' adjacency maps and the two entries
    always carry the same weight. Weights are non-negative integers or
    ``UNKNOWN``.
    """

    def __init__(self, node_count: int, edges: Iterable[Sequence]) -> None:
        validated = _validate_edges(node_count, edges)

        self.node_count: int = node_count
        self.nodes: List[int] = list(range(node_count))
        self._edges: List[Edge] = []
        self._edge_index: Dict[FrozenSet[int], int] = {}
        self._adjacency: Dict[int, Dict[int, Weight]] = {node: {} for node in self.nodes}

        for edge in validated:
            self._add_edge(edge)

    def _add_edge(self, edge: Edge) -> None:
        self._edge_index[frozenset((edge.origin, edge.target))] = len(self._edges)
        self._edges.append(edge)
        self._adjacency[edge.origin][edge.target] = edge.weight
        self._adjacency[edge.target][edge.origin] = edge.weight

    def check_node(self, node: object, role: str = "node") -> None:
        if not is_int(node) or not 0 <= node < self.node_count:
            raise InvalidGraph(f"{role.capitalize()} {node!r} outside [0, {self.node_count}).")

    def _edge_position(self, u: int, v: int) -> int:
        position = self._edge_index.get(frozenset((u, v)))
        if position is None:
            raise InvalidGraph(f"Edge {u}-{v} not present in graph.")
        return position

    def neighbors(self, node: int) -> List[Tuple[int, Weight]]:
        return list(self._adjacency[node].items())

    def weight(self, u: int, v: int) -> Weight:
        self._edge_position(u, v)
        return self._adjacency[u][v]

    def set_weight(self, u: int, v: int, weight: int) -> None:
        """Give edge ``u-v`` a concrete weight in both directions."""
        position = self._edge_position(u, v)
        _check_weight(weight, allow_unknown=False)

        self._edges[position] = replace(self._edges[position], weight=weight)
        self._adjacency[u][v] = weight
        self._adjacency[v][u] = weight

    def edges(self) -> List[Tuple[int, int, Weight]]:
        """Edges in input order and orientation."""
        return [edge.as_tuple() for edge in self._edges]

    def unknown_edges(self) -> List[Edge]:
        return [edge for edge in self._edges if edge.is_unknown]

    def copy(self) -> "Graph":
        return Graph(self.node_count, self.edges())

    def dijkstra(self, source: int, unknown_weight: int = PLACEHOLDER_WEIGHT) -> DistanceTable:
        """Compute single-source shortest paths using Dijkstra.

        ``UNKNOWN`` edges are explored at ``unknown_weight``. Ties in the heap
        are broken by node id, and a predecessor only changes on a strict
        improvement, so repeated runs give identical tables.
        """
        self.check_node(source, role="source")

        distances: Dict[int, float] = {node: math.inf for node in self.nodes}
        predecessors: Dict[int, int] = {}
        distances[source] = 0

        queue: List[Tuple[float, int]] = [(0, source)]

        while queue:
            distance_u, u = heappop(queue)
            if distance_u > distances[u]:
                continue

            for v, weight in self._adjacency[u].items():
                cost = unknown_weight if weight is UNKNOWN else weight
                candidate = distance_u + cost
                if candidate < distances[v]:
                    distances[v] = candidate
                    predecessors[v] = u
                    heappush(queue, (candidate, v))

        return DistanceTable(source, distances, predecessors)

    def path_cost(self, path: Sequence[int], unknown_weight: int = PLACEHOLDER_WEIGHT) -> int:
        """Return the total cost of walking along the given node sequence."""
        total_cost = 0
        for u, v in zip(path[:-1], path[1:]):
            weight = self.weight(u, v)
            total_cost += unknown_weight if weight is UNKNOWN else weight
        return total_cost

    def __repr__(self) -> str:
        return f"Graph(node_count={self.node_count}, edges={self.edges()!r})"
