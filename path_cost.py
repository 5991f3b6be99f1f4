from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from errors import InfeasibleTarget, InvalidGraph
from graph import PLACEHOLDER_WEIGHT, DistanceTable, Edge, Graph, is_int
from log_setup import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    edges: List[Tuple[int, int, int]]
    baseline_cost: float
    target_cost: int
    designated_edge: Optional[Tuple[int, int]] = None
    path: List[int] = field(default_factory=list)

    @property
    def delta(self) -> float:
        return self.target_cost - self.baseline_cost


def shortest_distances(graph: Graph, source: int) -> DistanceTable:
    """Dijkstra distances from ``source`` with unknown roads at placeholder cost."""
    return graph.dijkstra(source, unknown_weight=PLACEHOLDER_WEIGHT)


def _fill(
    graph: Graph, unknown: Sequence[Edge], designated: Optional[Edge], designated_weight: int
) -> Graph:
    filled = graph.copy()
    for edge in unknown:
        weight = designated_weight if edge is designated else PLACEHOLDER_WEIGHT
        filled.set_weight(edge.origin, edge.target, weight)
    return filled


class PathCostResolver:
    """Backfill under-construction roads so a route hits an exact travel time.

    Unknown edges are explored at cost 1. The baseline distance to the
    destination fixes ``delta = target - baseline``; every unknown edge is then
    set to 1 except one designated edge which takes ``1 + delta``. Candidates
    for the designated edge are tried in input order and the first one whose
    recomputed shortest distance equals the target wins. The owned graph is
    only written once a complete assignment has been verified.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def shortest_distances(self, source: int) -> DistanceTable:
        return shortest_distances(self.graph, source)

    def _log_graph(self, title: str) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug(title)
        for node in self.graph.nodes:
            logger.debug("  %d: %s", node, self.graph.neighbors(node))

    def _choose_designated(
        self,
        source: int,
        destination: int,
        target_cost: int,
        unknown: List[Edge],
        designated_weight: int,
    ) -> Tuple[Edge, Graph]:
        for edge in unknown:
            trial = _fill(self.graph, unknown, edge, designated_weight)
            reached = shortest_distances(trial, source).distances[destination]
            logger.debug(
                "Trying edge %d-%d at weight %d: shortest distance %s",
                edge.origin,
                edge.target,
                designated_weight,
                reached,
            )
            if reached == target_cost:
                return edge, trial

        raise InfeasibleTarget(
            f"No single unknown edge at weight {designated_weight} gives "
            f"{source}->{destination} a shortest distance of {target_cost}."
        )

    def resolve_target_cost(
        self, source: int, destination: int, target_cost: int
    ) -> ResolutionResult:
        self.graph.check_node(source, role="source")
        self.graph.check_node(destination, role="destination")
        if not is_int(target_cost):
            raise InvalidGraph(f"Target cost must be an integer, got {target_cost!r}.")
        if target_cost < 0:
            raise InfeasibleTarget(f"Target cost must be non-negative, got {target_cost}.")

        self._log_graph("Initial graph:")
        baseline = self.shortest_distances(source)
        for node in self.graph.nodes:
            logger.debug("Node %d: %s", node, baseline.distances[node])

        baseline_cost = baseline.distances[destination]
        if baseline_cost == math.inf:
            raise InfeasibleTarget(f"Destination {destination} is unreachable from {source}.")

        delta = target_cost - baseline_cost
        unknown = self.graph.unknown_edges()
        logger.debug(
            "Baseline %s, target %d, delta %d, %d unknown edge(s)",
            baseline_cost,
            target_cost,
            delta,
            len(unknown),
        )

        designated: Optional[Edge] = None
        if delta == 0:
            resolved = _fill(self.graph, unknown, None, PLACEHOLDER_WEIGHT)
        else:
            designated_weight = PLACEHOLDER_WEIGHT + delta
            if designated_weight < 0:
                raise InfeasibleTarget(
                    f"Target {target_cost} is below the baseline {baseline_cost} by more than "
                    f"one unknown edge can absorb without a negative weight."
                )
            if not unknown:
                raise InfeasibleTarget(
                    f"Baseline {baseline_cost} differs from target {target_cost} "
                    f"and there are no unknown edges to adjust."
                )
            designated, resolved = self._choose_designated(
                source, destination, target_cost, unknown, designated_weight
            )

        for edge in unknown:
            self.graph.set_weight(edge.origin, edge.target, resolved.weight(edge.origin, edge.target))
        self._log_graph("Final graph:")

        final_path = self.shortest_distances(source).path_to(destination)
        return ResolutionResult(
            edges=self.graph.edges(),
            baseline_cost=baseline_cost,
            target_cost=target_cost,
            designated_edge=(designated.origin, designated.target) if designated else None,
            path=final_path,
        )


def resolve_target_cost(
    node_count: int,
    edges: Iterable[Sequence],
    source: int,
    destination: int,
    target_cost: int,
) -> List[Tuple[int, int, int]]:
    """Return ``edges`` with every unknown weight made concrete."""
    resolver = PathCostResolver(Graph(node_count, edges))
    return resolver.resolve_target_cost(source, destination, target_cost).edges
