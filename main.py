from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from errors import NetworkFeasibilityError
from graph import UNKNOWN, Graph
from instance import FriendRequestInstance, RoadNetworkInstance, load_instance
from log_setup import enable_debug_logging, get_logger
from path_cost import PathCostResolver, ResolutionResult
from restricted_union_find import APPROVED, RestrictedUnionFind


logger = get_logger(__name__)


def format_path(path: List[int]) -> str:
    return " -> ".join(str(node) for node in path)


def print_resolution(
    instance: RoadNetworkInstance, graph: Graph, result: ResolutionResult
) -> None:
    print("=== Road Network (Target Travel Time) ===")
    print(
        f"Source {instance.source} -> destination {instance.destination}, "
        f"target travel time {result.target_cost}"
    )
    print(f"Baseline with unknown roads at 1: {result.baseline_cost}")
    if result.designated_edge is None:
        print("Adjusted road: none (target already met)")
    else:
        u, v = result.designated_edge
        print(f"Adjusted road: {u}-{v} (delta {result.delta:+})")
    travel_time = graph.path_cost(result.path)
    print(f"Shortest route: {format_path(result.path)} (travel time {travel_time})")
    print("Roads:")
    for (u, v, weight), (_, _, original) in zip(result.edges, instance.edges):
        note = "  (was unknown)" if original is UNKNOWN else ""
        print(f"  {u} - {v}: {weight}{note}")
    print()


def print_decisions(
    instance: FriendRequestInstance, partition: RestrictedUnionFind, decisions: List[str]
) -> None:
    print("=== Friend Requests (Restricted Groups) ===")
    approved = sum(1 for decision in decisions if decision == APPROVED)
    print(f"{approved} of {len(decisions)} request(s) approved.")
    for (a, b), decision in zip(instance.requests, decisions):
        print(f"  [{a}, {b}] {decision}")
    groups = "; ".join(
        "{" + ", ".join(str(node) for node in members) + "}"
        for members in partition.groups().values()
    )
    print(f"Final groups ({len(partition)}): {groups}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Backfill road travel times and vet friend requests under restrictions."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("problem_instance.yaml"),
        help="Path to the YAML instance configuration.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the resolved road network.",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Display the resolved road network interactively.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the full algorithm trace to stderr.",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    instance = load_instance(args.config)

    road = instance.road_network
    if road is not None:
        resolver = PathCostResolver(Graph(road.node_count, road.edges))
        result = resolver.resolve_target_cost(road.source, road.destination, road.target_cost)
        print_resolution(road, resolver.graph, result)

        if args.static_out or args.visualize:
            from visualize import draw_resolved_network

            draw_resolved_network(
                resolver.graph,
                result,
                road.source,
                road.destination,
                output=args.static_out,
                show=args.visualize,
            )
            if args.static_out:
                print(f"Visualisation stored at: {args.static_out}")
    elif args.static_out or args.visualize:
        logger.warning("Visualisation requested but the instance has no road network.")

    friends = instance.friend_requests
    if friends is not None:
        partition = RestrictedUnionFind(friends.node_count, friends.restrictions)
        decisions = partition.process_requests(friends.requests)
        print_decisions(friends, partition, decisions)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        enable_debug_logging()

    try:
        run(args)
    except (NetworkFeasibilityError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
