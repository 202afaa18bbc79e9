# app/services/route_builder.py
from typing import List, Sequence

from app.core.logger import logger
from app.services.geometry import LatLng
from app.services.graph_builder import PathNetwork
from app.services.snapping import SnapResult


def append_leg(coords: List[LatLng], leg: Sequence[LatLng]) -> None:
    """
    Append a leg to the route polyline.

    If the leg starts exactly where the route currently ends, that shared
    junction point is written once. Near-equal points are kept as they are.
    """
    if not leg:
        return
    if coords and coords[-1] == tuple(leg[0]):
        coords.extend(tuple(p) for p in leg[1:])
    else:
        coords.extend(tuple(p) for p in leg)


def build_route_coords(
    network: PathNetwork,
    path: Sequence[int],
    snap: SnapResult,
) -> List[LatLng]:
    """
    Stitch the polyline for a path that starts at the virtual snap node.

    The first leg is the part of the snapped edge between the snap point and
    `path[1]`; every following hop uses the stored geometry of the static
    edge joining the two nodes, reversed when stored the other way round.
    Returns an empty list for paths with fewer than two nodes.
    """
    if len(path) < 2:
        return []

    coords: List[LatLng] = []
    append_leg(coords, snap.leg_towards(path[1]))

    for u, v in zip(path[1:-1], path[2:]):
        edge = network.find_edge(u, v)
        if edge is None:
            logger.warning(f"No edge between nodes {u} and {v}; skipping leg.")
            continue
        append_leg(coords, edge.coords_from(u))

    return coords
