from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from errors import InstanceError
from graph import UNKNOWN, Weight


UNKNOWN_MARKERS = {"unknown", "?"}


@dataclass(frozen=True)
class RoadNetworkInstance:
    node_count: int
    edges: List[Tuple[int, int, Weight]]
    source: int
    destination: int
    target_cost: int


@dataclass(frozen=True)
class FriendRequestInstance:
    node_count: int
    restrictions: List[Tuple[int, int]] = field(default_factory=list)
    requests: List[Tuple[int, int]] = field(default_factory=list)


@dataclass(frozen=True)
class ProblemInstance:
    road_network: Optional[RoadNetworkInstance] = None
    friend_requests: Optional[FriendRequestInstance] = None


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        try:
            config = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise InstanceError(f"{path} is not valid YAML: {exc}") from exc
    if not isinstance(config, dict):
        raise InstanceError(f"{path} must contain a YAML mapping at the top level.")
    return config


def _require(section: Dict[str, Any], key: str, where: str) -> Any:
    if key not in section:
        raise InstanceError(f"Missing key '{key}' in '{where}'.")
    return section[key]


def _parse_weight(raw: Any) -> Weight:
    if raw is None:
        return UNKNOWN
    if isinstance(raw, str) and raw.strip().lower() in UNKNOWN_MARKERS:
        return UNKNOWN
    # Range and sign checks belong to Graph.
    return raw


def _parse_pairs(raw: Any, key: str, where: str) -> List[Tuple[int, int]]:
    if not isinstance(raw, list):
        raise InstanceError(f"'{where}.{key}' must be a list of [a, b] pairs.")
    pairs: List[Tuple[int, int]] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise InstanceError(f"'{where}.{key}' entry {item!r} is not an [a, b] pair.")
        pairs.append((item[0], item[1]))
    return pairs


def parse_road_network(section: Dict[str, Any]) -> RoadNetworkInstance:
    where = "road_network"
    if not isinstance(section, dict):
        raise InstanceError(f"'{where}' must be a mapping.")

    raw_edges = _require(section, "edges", where)
    if not isinstance(raw_edges, list):
        raise InstanceError(f"'{where}.edges' must be a list of [u, v, weight] triples.")

    edges: List[Tuple[int, int, Weight]] = []
    for item in raw_edges:
        if not isinstance(item, (list, tuple)) or len(item) != 3:
            raise InstanceError(f"'{where}.edges' entry {item!r} is not a [u, v, weight] triple.")
        edges.append((item[0], item[1], _parse_weight(item[2])))

    return RoadNetworkInstance(
        node_count=_require(section, "node_count", where),
        edges=edges,
        source=_require(section, "source", where),
        destination=_require(section, "destination", where),
        target_cost=_require(section, "target_cost", where),
    )


def parse_friend_requests(section: Dict[str, Any]) -> FriendRequestInstance:
    where = "friend_requests"
    if not isinstance(section, dict):
        raise InstanceError(f"'{where}' must be a mapping.")

    return FriendRequestInstance(
        node_count=_require(section, "node_count", where),
        restrictions=_parse_pairs(section.get("restrictions", []), "restrictions", where),
        requests=_parse_pairs(_require(section, "requests", where), "requests", where),
    )


def parse_instance(config: Dict[str, Any]) -> ProblemInstance:
    road_section = config.get("road_network")
    friend_section = config.get("friend_requests")
    if road_section is None and friend_section is None:
        raise InstanceError(
            "Instance defines neither 'road_network' nor 'friend_requests'."
        )

    return ProblemInstance(
        road_network=parse_road_network(road_section) if road_section is not None else None,
        friend_requests=(
            parse_friend_requests(friend_section) if friend_section is not None else None
        ),
    )


def load_instance(path: Path) -> ProblemInstance:
    return parse_instance(load_config(path))
