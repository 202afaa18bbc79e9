# app/services/geometry.py
"""
Geodesic helpers for polylines given as (lat, lng) pairs in degrees.

Distances are great-circle (haversine) metres. Projections onto a segment
are done in a local equirectangular plane centred on the query point, which
is accurate at building/campus scale.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

LatLng = Tuple[float, float]

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class PolylineLocation:
    """Position along a polyline: segment index plus fraction within it."""

    segment_index: int
    fraction: float

    def sort_key(self) -> Tuple[int, float]:
        return (self.segment_index, self.fraction)


@dataclass(frozen=True)
class PolylinePoint:
    """Closest point of a polyline to some query point."""

    point: LatLng
    distance_m: float
    cumulative_m: float
    location: PolylineLocation


def haversine_m(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Compute great-circle distance between two (lat, lng) points, in metres.
    """
    lat1 = math.radians(a[0])
    lon1 = math.radians(a[1])
    lat2 = math.radians(b[0])
    lon2 = math.radians(b[1])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def geodesic_length(polyline: Sequence[Sequence[float]]) -> float:
    """
    Sum of haversine distances between consecutive points.

    Empty and single-point polylines have length 0.
    """
    total = 0.0
    for a, b in zip(polyline, polyline[1:]):
        total += haversine_m(a, b)
    return total


def _project_onto_segment(
    point: Sequence[float], a: Sequence[float], b: Sequence[float]
) -> Tuple[LatLng, float]:
    """
    Project `point` onto segment a-b, clamped to the segment.

    Returns the projected (lat, lng) and the fraction along a-b. Clamped ends
    return the exact vertex so later equality checks on vertices hold.
    """
    kx = math.cos(math.radians(point[0]))
    ax, ay = (a[1] - point[1]) * kx, a[0] - point[0]
    bx, by = (b[1] - point[1]) * kx, b[0] - point[0]
    dx, dy = bx - ax, by - ay

    seg_len2 = dx * dx + dy * dy
    if seg_len2 == 0.0:
        return (float(a[0]), float(a[1])), 0.0

    t = -(ax * dx + ay * dy) / seg_len2
    if t <= 0.0:
        return (float(a[0]), float(a[1])), 0.0
    if t >= 1.0:
        return (float(b[0]), float(b[1])), 1.0

    lat = a[0] + t * (b[0] - a[0])
    lng = a[1] + t * (b[1] - a[1])
    return (lat, lng), t


def _segment_candidate(
    polyline: Sequence[Sequence[float]],
    point: Sequence[float],
    index: int,
    walked_m: float,
) -> PolylinePoint:
    a = polyline[index]
    candidate, t = _project_onto_segment(point, a, polyline[index + 1])
    return PolylinePoint(
        point=candidate,
        distance_m=haversine_m(point, candidate),
        cumulative_m=walked_m + haversine_m(a, candidate),
        location=PolylineLocation(index, t),
    )


def nearest_point_on_polyline(
    polyline: Sequence[Sequence[float]], point: Sequence[float]
) -> PolylinePoint:
    """
    Closest point of `polyline` to `point`.

    Every segment is tried in order and the first strictly smaller distance
    wins, so ties resolve to the earliest segment. `cumulative_m` is the
    distance along the polyline from its first vertex to the returned point.
    """
    if not polyline:
        raise ValueError("Cannot snap to an empty polyline.")

    if len(polyline) == 1:
        first = (float(polyline[0][0]), float(polyline[0][1]))
        return PolylinePoint(
            point=first,
            distance_m=haversine_m(point, first),
            cumulative_m=0.0,
            location=PolylineLocation(0, 0.0),
        )

    best = _segment_candidate(polyline, point, 0, 0.0)
    walked = haversine_m(polyline[0], polyline[1])
    for i in range(1, len(polyline) - 1):
        candidate = _segment_candidate(polyline, point, i, walked)
        if candidate.distance_m < best.distance_m:
            best = candidate
        walked += haversine_m(polyline[i], polyline[i + 1])

    return best


def start_location() -> PolylineLocation:
    return PolylineLocation(0, 0.0)


def end_location(polyline: Sequence[Sequence[float]]) -> PolylineLocation:
    if len(polyline) < 2:
        return PolylineLocation(0, 0.0)
    return PolylineLocation(len(polyline) - 2, 1.0)


def point_at(polyline: Sequence[Sequence[float]], location: PolylineLocation) -> LatLng:
    """Coordinate of a location on the polyline."""
    a = polyline[location.segment_index]
    if location.fraction == 0.0 or len(polyline) == 1:
        return (float(a[0]), float(a[1]))
    b = polyline[location.segment_index + 1]
    if location.fraction == 1.0:
        return (float(b[0]), float(b[1]))
    t = location.fraction
    return (a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]))


def _dedupe(coords: List[LatLng]) -> List[LatLng]:
    out: List[LatLng] = []
    for c in coords:
        if out and out[-1] == c:
            continue
        out.append(c)
    return out


def slice_between(
    polyline: Sequence[Sequence[float]],
    start: PolylineLocation,
    end: PolylineLocation,
) -> List[LatLng]:
    """
    Part of the polyline between two locations, oriented from `start` to `end`.

    Intermediate vertices are kept; consecutive identical points are dropped.
    """
    if not polyline:
        return []
    if len(polyline) == 1:
        return [(float(polyline[0][0]), float(polyline[0][1]))]

    forward = start.sort_key() <= end.sort_key()
    lo, hi = (start, end) if forward else (end, start)

    coords: List[LatLng] = [point_at(polyline, lo)]
    for vertex in polyline[lo.segment_index + 1 : hi.segment_index + 1]:
        coords.append((float(vertex[0]), float(vertex[1])))
    coords.append(point_at(polyline, hi))

    coords = _dedupe(coords)
    if not forward:
        coords.reverse()
    return coords


def sub_slice(
    polyline: Sequence[Sequence[float]],
    start_point: Sequence[float],
    end_point: Sequence[float],
) -> List[LatLng]:
    """
    Portion of `polyline` between two points lying on it, oriented from
    `start_point` towards `end_point`.
    """
    start = nearest_point_on_polyline(polyline, start_point).location
    end = nearest_point_on_polyline(polyline, end_point).location
    return slice_between(polyline, start, end)
