import math

import pytest

from field_pathfinder.utils.geometry import (
    ScanLine,
    calculate_polyline_data,
    euclidean_distance,
    generate_parallel_tracks,
    get_bounding_box,
    point_to_xy,
    points_to_xy,
    points_to_xz,
    polygon_area,
    squared_distance,
    wrap_to_pi,
)


def test_bounding_box(square_xy):
    bbox = get_bounding_box(square_xy)
    assert bbox == (0.0, 100.0, -100.0, 0.0)
    assert bbox.width == 100.0
    assert bbox.height == 100.0


def test_scan_lines_cover_square(square_xy):
    lines = generate_parallel_tracks(square_xy, 10.0)

    assert len(lines) == 10
    assert lines[0].y == pytest.approx(-95.0)
    assert lines[-1].y == pytest.approx(-5.0)
    for line in lines:
        assert line.start[0] == 0.0
        assert line.length == pytest.approx(100.0)
        assert [p[0] for p in line.intersections] == pytest.approx([0.0, 100.0])


def test_scan_lines_none_when_polygon_too_low():
    polygon = [(0.0, 0.0), (100.0, 0.0), (100.0, -4.0), (0.0, -4.0)]
    assert generate_parallel_tracks(polygon, 10.0) is None


def test_single_scan_line_when_spacing_equals_height():
    polygon = [(0.0, 0.0), (100.0, 0.0), (100.0, -10.0), (0.0, -10.0)]
    lines = generate_parallel_tracks(polygon, 10.0)
    assert len(lines) == 1
    assert lines[0].y == pytest.approx(-5.0)


def test_concave_polygon_has_two_spans():
    # U shape open to the top: two prongs between y = 20 and y = 40.
    polygon = [(0, 0), (60, 0), (60, 40), (40, 40), (40, 20), (20, 20), (20, 40), (0, 40)]
    lines = generate_parallel_tracks(polygon, 10.0)

    upper = [line for line in lines if line.y > 20]
    assert upper
    for line in upper:
        assert line.interior_spans() == [
            pytest.approx((0.0, 20.0)),
            pytest.approx((40.0, 60.0)),
        ]


def test_unpaired_intersection_is_ignored():
    line = ScanLine(start=(0.0, 0.0), end=(10.0, 0.0), intersections=[(1.0, 0.0), (4.0, 0.0), (7.0, 0.0)])
    assert line.interior_spans() == [(1.0, 4.0)]


def test_scan_lines_reject_bad_spacing(square_xy):
    with pytest.raises(ValueError):
        generate_parallel_tracks(square_xy, 0.0)


def test_coordinate_conversion_flips_z():
    assert point_to_xy((3.0, 4.0)) == (3.0, -4.0)
    assert point_to_xy({"x": 3.0, "z": 4.0}) == (3.0, -4.0)
    assert point_to_xy({"cx": 3.0, "cz": 4.0}) == (3.0, -4.0)

    points = [(1.0, 2.0), (-5.0, 7.5)]
    assert points_to_xz(points_to_xy(points)) == points


def test_coordinate_conversion_rejects_incomplete_mapping():
    with pytest.raises(ValueError):
        point_to_xy({"x": 1.0})


def test_polygon_area_sign():
    ccw = [(0, 0), (10, 0), (10, 10), (0, 10)]
    assert polygon_area(ccw) == pytest.approx(100.0)
    assert polygon_area(list(reversed(ccw))) == pytest.approx(-100.0)


def test_polyline_data():
    data = calculate_polyline_data([(0, 0), (10, 0), (10, 10)])
    assert data.length == pytest.approx(20.0)
    assert data.edge_lengths == pytest.approx([10.0, 10.0])
    assert data.turn_angles == pytest.approx([math.pi / 2])
    assert data.max_turn == pytest.approx(math.pi / 2)

    assert calculate_polyline_data([(1, 1)]).length == 0.0


def test_distance_and_wrap():
    assert euclidean_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert wrap_to_pi(3 * math.pi) == pytest.approx(math.pi)


def test_squared_distance():
    assert squared_distance((1, 1), (4, 5)) == pytest.approx(25.0)
    assert squared_distance((2, 3), (2, 3)) == 0.0
