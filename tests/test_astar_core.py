import pytest

from field_pathfinder.planning.astar_core import a_star_path
from field_pathfinder.planning.grid import OffGridNode


def _graph(edges):
    """get_neighbors callback over an adjacency dict keyed by node identity."""
    adjacency = {}
    for a, b in edges:
        adjacency.setdefault(id(a), []).append(b)
        adjacency.setdefault(id(b), []).append(a)

    def get_neighbors(node, nodes):
        return list(adjacency.get(id(node), []))

    return get_neighbors


def _always(a, b):
    return True


def test_finds_shorter_of_two_routes():
    start = OffGridNode(0.0, 0.0)
    detour = OffGridNode(5.0, 20.0)
    direct = OffGridNode(5.0, 1.0)
    goal = OffGridNode(10.0, 0.0)
    nodes = [start, detour, direct, goal]
    get_neighbors = _graph([(start, detour), (detour, goal), (start, direct), (direct, goal)])

    path = a_star_path(start, goal, nodes, _always, get_neighbors)
    assert path == [start, direct, goal]


def test_unreachable_goal_returns_none():
    start = OffGridNode(0.0, 0.0)
    middle = OffGridNode(1.0, 0.0)
    goal = OffGridNode(2.0, 0.0)
    get_neighbors = _graph([(start, middle)])

    assert a_star_path(start, goal, [start, middle, goal], _always, get_neighbors) is None


def test_start_is_goal():
    start = OffGridNode(0.0, 0.0)
    assert a_star_path(start, start, [start], _always, _graph([])) == [start]


def test_rejected_moves_are_not_taken():
    start = OffGridNode(0.0, 0.0)
    short = OffGridNode(5.0, 0.0)
    long_way = OffGridNode(5.0, 30.0)
    goal = OffGridNode(10.0, 0.0)
    get_neighbors = _graph([(start, short), (short, goal), (start, long_way), (long_way, goal)])

    def is_valid_neighbor(a, b):
        return b is not short

    path = a_star_path(start, goal, [start, short, long_way, goal], is_valid_neighbor, get_neighbors)
    assert path == [start, long_way, goal]


def test_neighbors_only_come_from_callback():
    start = OffGridNode(0.0, 0.0)
    goal = OffGridNode(1.0, 0.0)
    calls = []

    def get_neighbors(node, nodes):
        calls.append(node)
        return []

    assert a_star_path(start, goal, [start, goal], _always, get_neighbors) is None
    assert calls == [start]


@pytest.mark.parametrize("n", [3, 10])
def test_chain(n):
    chain = [OffGridNode(float(i), 0.0) for i in range(n)]
    get_neighbors = _graph(list(zip(chain, chain[1:])))
    assert a_star_path(chain[0], chain[-1], chain, _always, get_neighbors) == chain
