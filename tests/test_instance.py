from pathlib import Path

import pytest

from errors import InstanceError
from graph import UNKNOWN
from instance import (
    FriendRequestInstance,
    RoadNetworkInstance,
    load_config,
    load_instance,
    parse_friend_requests,
    parse_instance,
    parse_road_network,
)

SAMPLE = Path(__file__).resolve().parent.parent / "problem_instance.yaml"


def test_sample_instance():
    instance = load_instance(SAMPLE)

    assert instance.road_network == RoadNetworkInstance(
        node_count=5,
        edges=[(4, 1, UNKNOWN), (2, 0, UNKNOWN), (0, 3, UNKNOWN), (4, 3, UNKNOWN)],
        source=0,
        destination=1,
        target_cost=5,
    )
    assert instance.friend_requests == FriendRequestInstance(
        node_count=5,
        restrictions=[(0, 1), (1, 2), (2, 3)],
        requests=[(0, 4), (1, 2), (3, 1), (3, 4)],
    )


def test_unknown_markers():
    section = {
        "node_count": 4,
        "edges": [[0, 1, None], [1, 2, "unknown"], [2, 3, " ? "], [0, 3, 7]],
        "source": 0,
        "destination": 3,
        "target_cost": 4,
    }
    road = parse_road_network(section)
    assert road.edges == [(0, 1, UNKNOWN), (1, 2, UNKNOWN), (2, 3, UNKNOWN), (0, 3, 7)]


def test_restrictions_default_to_empty():
    friends = parse_friend_requests({"node_count": 2, "requests": [[0, 1]]})
    assert friends.restrictions == []
    assert friends.requests == [(0, 1)]


def test_single_section(tmp_path):
    path = tmp_path / "friends.yaml"
    path.write_text("friend_requests:\n  node_count: 2\n  requests: [[0, 1]]\n", encoding="utf-8")
    instance = load_instance(path)
    assert instance.road_network is None
    assert instance.friend_requests.node_count == 2


@pytest.mark.parametrize(
    "section, message",
    [
        ({"edges": [], "source": 0, "destination": 0, "target_cost": 0}, "node_count"),
        ({"node_count": 2, "source": 0, "destination": 1, "target_cost": 1}, "edges"),
        ({"node_count": 2, "edges": [[0, 1]], "source": 0, "destination": 1, "target_cost": 1}, "triple"),
        ({"node_count": 2, "edges": {}, "source": 0, "destination": 1, "target_cost": 1}, "list"),
        ({"node_count": 2, "edges": [], "destination": 1, "target_cost": 1}, "source"),
    ],
)
def test_road_network_errors(section, message):
    with pytest.raises(InstanceError, match=message):
        parse_road_network(section)


def test_friend_request_errors():
    with pytest.raises(InstanceError, match="requests"):
        parse_friend_requests({"node_count": 2})
    with pytest.raises(InstanceError, match="pair"):
        parse_friend_requests({"node_count": 2, "requests": [[0, 1, 2]]})
    with pytest.raises(InstanceError, match="mapping"):
        parse_friend_requests([1, 2])


def test_empty_instance():
    with pytest.raises(InstanceError):
        parse_instance({"other": 1})


def test_non_mapping_document(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(InstanceError):
        load_config(path)


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("road_network: [1, 2\n", encoding="utf-8")
    with pytest.raises(InstanceError, match="not valid YAML"):
        load_config(path)
