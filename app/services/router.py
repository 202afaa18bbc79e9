# app/services/router.py
from dataclasses import dataclass
from typing import List, Optional, Sequence

from app.services.geometry import LatLng
from app.services.graph_builder import PathNetwork
from app.services.path_search import STRATEGY_LINEAR, search
from app.services.route_builder import build_route_coords
from app.services.snapping import SnapResult, augment_graph, snap_to_network


@dataclass(frozen=True)
class RouteResult:
    path: List[int]
    snapped_at: LatLng
    route_coords: List[LatLng]
    distance_m: float
    snap: SnapResult


def route_from_point(
    network: PathNetwork,
    query_point: Sequence[float],
    destination: int,
    strategy: str = STRATEGY_LINEAR,
) -> Optional[RouteResult]:
    """
    Shortest walking route from an arbitrary (lat, lng) to a network node.

    The query point is snapped onto the nearest edge and joined to the graph
    as a virtual node on a per-query copy. Returns None when the destination
    cannot be reached from the snapped position.
    """
    snap = snap_to_network(query_point, network)
    graph = augment_graph(network, snap)

    result = search(graph.adjacency(), graph.virtual_index, destination, strategy)
    if len(result.path) < 2:
        return None

    return RouteResult(
        path=result.path,
        snapped_at=snap.point,
        route_coords=build_route_coords(network, result.path, snap),
        distance_m=result.distance_m,
        snap=snap,
    )
