import pytest

from graph import UNKNOWN, Graph
from log_setup import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Keep log levels from one test out of the next."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def construction_roads():
    """Road network where every road is still under construction."""
    return [(4, 1, UNKNOWN), (2, 0, UNKNOWN), (0, 3, UNKNOWN), (4, 3, UNKNOWN)]


@pytest.fixture
def square():
    """
    0 --1-- 1
    |       |
    4       1
    |       |
    3 --1-- 2
    """
    return Graph(4, [(0, 1, 1), (1, 2, 1), (2, 3, 1), (3, 0, 4)])


@pytest.fixture
def mixed():
    """Known and unknown roads with two competing routes from 0 to 4."""
    edges = [
        (0, 1, 2),
        (1, 4, UNKNOWN),
        (0, 2, UNKNOWN),
        (2, 3, 3),
        (3, 4, UNKNOWN),
        (5, 6, 1),
    ]
    return Graph(7, edges)


@pytest.fixture
def friend_restrictions():
    return [(0, 1), (1, 2), (2, 3)]


@pytest.fixture
def friend_requests():
    return [(0, 4), (1, 2), (3, 1), (3, 4)]
