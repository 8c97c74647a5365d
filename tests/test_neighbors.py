import itertools

import pytest

from field_pathfinder.obstacles import NoFruit
from field_pathfinder.planning.grid import GridNode, NodeCollection, OffGridNode, generate_grid_for_polygon
from field_pathfinder.planning.neighbors import NeighborCheck, add_off_grid_node, get_neighbors
from field_pathfinder.utils.geometry import euclidean_distance


@pytest.fixture
def square_grid(square_xy):
    return generate_grid_for_polygon(square_xy, 10.0, NoFruit())


def test_neighbor_check_distance_bound():
    check = NeighborCheck(grid_spacing=10.0)
    a = OffGridNode(0.0, 0.0)

    assert check(a, OffGridNode(10.0, 0.0))
    assert check(a, OffGridNode(10.0, 10.0))  # diagonal, ~14.1
    assert check(a, OffGridNode(14.9, 0.0))
    assert not check(a, OffGridNode(15.0, 0.0))
    assert check.calls == 4


def test_neighbor_check_only_looks_at_candidate_obstruction():
    check = NeighborCheck(grid_spacing=10.0)
    free = OffGridNode(0.0, 0.0)
    fruit = OffGridNode(5.0, 0.0, obstructed=True)

    assert not check(free, fruit)
    assert check(fruit, free)


def test_interior_grid_node_has_eight_neighbors(square_grid):
    node = square_grid.node_at(5, 5)
    neighbors = get_neighbors(node, square_grid)

    assert len(neighbors) == 8
    assert node not in neighbors
    coords = {(n.row, n.column) for n in neighbors}
    expected = {(5 + dr, 5 + dc) for dr, dc in itertools.product((-1, 0, 1), repeat=2)} - {(5, 5)}
    assert coords == expected


def test_corner_grid_node_has_three_neighbors(square_grid):
    corner = square_grid.node_at(1, 2)
    assert len(get_neighbors(corner, square_grid)) == 3


def test_neighbors_are_close_and_free(square_grid):
    square_grid.node_at(4, 4).obstructed = True
    square_grid.node_at(6, 7).obstructed = True
    limit = 1.5 * square_grid.spacing

    for node in square_grid:
        for neighbor in get_neighbors(node, square_grid):
            assert euclidean_distance(node.position, neighbor.position) < limit
            assert not neighbor.obstructed


def test_obstructed_nodes_filtered_but_kept(square_grid):
    blocked = square_grid.node_at(5, 6)
    blocked.obstructed = True
    size = len(square_grid)

    neighbors = get_neighbors(square_grid.node_at(5, 5), square_grid)
    assert blocked not in neighbors
    assert len(neighbors) == 7
    assert len(square_grid) == size
    assert square_grid.node_at(5, 6) is blocked


def test_explicit_neighbors_are_added():
    nodes = NodeCollection(spacing=10.0)
    nodes.append(GridNode(0.0, 0.0, row=1, column=1))
    nodes.append(GridNode(10.0, 0.0, row=1, column=2))
    far = OffGridNode(100.0, 100.0)
    nodes.append(far)
    nodes[0].neighbor_indexes.append(2)

    neighbors = get_neighbors(nodes[0], nodes)
    assert neighbors == [nodes[1], far]

    far.obstructed = True
    assert get_neighbors(nodes[0], nodes) == [nodes[1]]


def test_off_grid_node_without_links_has_no_neighbors():
    nodes = NodeCollection(spacing=10.0)
    lonely = OffGridNode(0.0, 0.0)
    nodes.append(lonely)
    assert get_neighbors(lonely, nodes) == []


def test_splice_links_both_ways(square_grid):
    check = NeighborCheck(10.0)
    size = len(square_grid)
    start = OffGridNode(0.0, 0.0)

    index = add_off_grid_node(square_grid, start, check)

    assert index == size
    assert square_grid[index] is start
    # only (10, -5) is closer than 15 m to the corner
    corner = square_grid.node_at(10, 2)
    corner_index = square_grid.index_of(10, 2)
    assert start.neighbor_indexes == [corner_index]
    assert corner.neighbor_indexes == [index]
    assert get_neighbors(start, square_grid) == [corner]
    assert start in get_neighbors(corner, square_grid)


def test_splice_keeps_existing_indexes(square_grid):
    before = [(n.x, n.y) for n in square_grid]
    add_off_grid_node(square_grid, OffGridNode(50.0, -50.0), NeighborCheck(10.0))

    after = [(n.x, n.y) for n in square_grid]
    assert after[: len(before)] == before
    assert len(after) == len(before) + 1


def test_splice_skips_obstructed_nodes(square_grid):
    square_grid.node_at(10, 2).obstructed = True
    start = OffGridNode(0.0, 0.0)
    add_off_grid_node(square_grid, start, NeighborCheck(10.0))

    assert start.neighbor_indexes == []
    assert square_grid.node_at(10, 2).neighbor_indexes == []


def test_splice_is_deterministic(square_xy):
    counts = []
    for _ in range(2):
        grid = generate_grid_for_polygon(square_xy, 10.0, NoFruit())
        add_off_grid_node(grid, OffGridNode(33.0, -47.0), NeighborCheck(10.0))
        counts.append([len(n.neighbor_indexes) for n in grid])
    assert counts[0] == counts[1]


def test_goal_can_link_to_start(square_grid):
    check = NeighborCheck(10.0)
    start = OffGridNode(41.0, -52.0)
    goal = OffGridNode(47.0, -52.0)

    start_index = add_off_grid_node(square_grid, start, check)
    goal_index = add_off_grid_node(square_grid, goal, check)

    assert start_index in goal.neighbor_indexes
    assert goal_index in start.neighbor_indexes
