# tests/test_geometry.py
import pytest

from app.services.geometry import (
    PolylineLocation,
    geodesic_length,
    haversine_m,
    nearest_point_on_polyline,
    slice_between,
    sub_slice,
)

# One thousandth of a degree of longitude on the equator, in metres
STEP_M = haversine_m((0.0, 0.0), (0.0, 0.001))

L_SHAPE = [(0.0, 0.0), (0.0, 0.001), (0.001, 0.001)]


def test_haversine_one_degree_on_equator():
    assert haversine_m((0.0, 0.0), (0.0, 1.0)) == pytest.approx(111_194.93, rel=1e-6)


def test_geodesic_length_sums_segments():
    assert geodesic_length(L_SHAPE) == pytest.approx(
        STEP_M + haversine_m((0.0, 0.001), (0.001, 0.001))
    )


@pytest.mark.parametrize("polyline", [[], [(7.25, 80.59)], [(7.25, 80.59), (7.25, 80.59)]])
def test_geodesic_length_of_degenerate_polylines_is_zero(polyline):
    assert geodesic_length(polyline) == 0.0


def test_nearest_point_projects_onto_segment():
    snapped = nearest_point_on_polyline(L_SHAPE, (0.0002, 0.0004))

    assert snapped.point[0] == pytest.approx(0.0, abs=1e-12)
    assert snapped.point[1] == pytest.approx(0.0004, abs=1e-12)
    assert snapped.distance_m == pytest.approx(haversine_m((0.0002, 0.0004), (0.0, 0.0004)))
    assert snapped.cumulative_m == pytest.approx(0.4 * STEP_M, rel=1e-6)
    assert snapped.location.segment_index == 0


def test_nearest_point_clamps_to_segment_end():
    snapped = nearest_point_on_polyline([(0.0, 0.0), (0.0, 0.001)], (0.0, 0.005))
    assert snapped.point == (0.0, 0.001)
    assert snapped.location == PolylineLocation(0, 1.0)
    assert snapped.cumulative_m == pytest.approx(STEP_M)


def test_nearest_point_on_second_segment_accumulates_distance():
    snapped = nearest_point_on_polyline(L_SHAPE, (0.0005, 0.0012))
    assert snapped.location.segment_index == 1
    assert snapped.point[1] == 0.001
    assert snapped.cumulative_m == pytest.approx(STEP_M + haversine_m((0.0, 0.001), snapped.point))


def test_nearest_point_ties_go_to_first_segment():
    # the shared vertex is reached as the end of segment 0 and the start of segment 1
    snapped = nearest_point_on_polyline(L_SHAPE, (-0.0005, 0.0015))
    assert snapped.point == (0.0, 0.001)
    assert snapped.location == PolylineLocation(0, 1.0)


def test_nearest_point_on_single_point_polyline():
    snapped = nearest_point_on_polyline([(1.0, 1.0)], (1.0, 1.001))
    assert snapped.point == (1.0, 1.0)
    assert snapped.cumulative_m == 0.0
    assert snapped.distance_m > 0


def test_nearest_point_on_zero_length_segment():
    snapped = nearest_point_on_polyline([(1.0, 1.0), (1.0, 1.0)], (1.0, 1.001))
    assert snapped.point == (1.0, 1.0)


def test_nearest_point_on_empty_polyline_raises():
    with pytest.raises(ValueError):
        nearest_point_on_polyline([], (0.0, 0.0))


def test_sub_slice_keeps_intermediate_vertices():
    part = sub_slice(L_SHAPE, (0.0, 0.0005), (0.0005, 0.001))
    assert part == [(0.0, 0.0005), (0.0, 0.001), (0.0005, 0.001)]


def test_sub_slice_follows_requested_direction():
    forward = sub_slice(L_SHAPE, (0.0, 0.0005), (0.0005, 0.001))
    backward = sub_slice(L_SHAPE, (0.0005, 0.001), (0.0, 0.0005))
    assert backward == list(reversed(forward))


def test_sub_slice_between_endpoints_is_whole_line():
    assert sub_slice(L_SHAPE, L_SHAPE[0], L_SHAPE[-1]) == L_SHAPE


def test_sub_slice_of_same_point_is_single_point():
    assert sub_slice(L_SHAPE, (0.0, 0.001), (0.0, 0.001)) == [(0.0, 0.001)]


def test_slice_between_locations_on_closed_loop():
    loop = [(0.0, 0.0), (0.0, 0.001), (0.001, 0.001), (0.0, 0.0)]
    head = slice_between(loop, PolylineLocation(0, 0.0), PolylineLocation(1, 0.5))
    tail = slice_between(loop, PolylineLocation(1, 0.5), PolylineLocation(2, 1.0))
    assert head[0] == (0.0, 0.0)
    assert tail[-1] == (0.0, 0.0)
    assert head[-1] == tail[0]
    assert geodesic_length(head) + geodesic_length(tail) == pytest.approx(geodesic_length(loop))
