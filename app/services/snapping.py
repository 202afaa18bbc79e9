# app/services/snapping.py
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from app.services.geometry import (
    LatLng,
    PolylineLocation,
    end_location,
    geodesic_length,
    nearest_point_on_polyline,
    slice_between,
    start_location,
)
from app.services.graph_builder import (
    AdjacencyList,
    Edge,
    Node,
    PathNetwork,
    build_adjacency,
)


@dataclass(frozen=True)
class SnapResult:
    """
    Where a query point lands on the network.

    `dist_to_start_m` / `dist_to_end_m` are measured along the edge's
    polyline towards its `from_node` / `to_node`.
    """

    edge: Edge
    point: LatLng
    distance_m: float
    location: PolylineLocation
    dist_to_start_m: float
    dist_to_end_m: float

    def leg_towards(self, node_index: int) -> List[LatLng]:
        """
        Polyline from the snap point along the snapped edge to one of its
        endpoints, in travel order.
        """
        coords = self.edge.coords
        to_start = node_index == self.edge.from_node
        if self.edge.from_node == self.edge.to_node:
            # loop edge: both virtual edges reach the same node, take the shorter side
            to_start = self.dist_to_start_m <= self.dist_to_end_m

        if to_start:
            return slice_between(coords, self.location, start_location())
        return slice_between(coords, self.location, end_location(coords))


@dataclass(frozen=True)
class AugmentedGraph:
    """Per-query copy of the network with the virtual node appended."""

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    virtual_index: int

    def adjacency(self) -> AdjacencyList:
        return build_adjacency(len(self.nodes), self.edges)


def snap_to_network(point: Sequence[float], network: PathNetwork) -> SnapResult:
    """
    Snap `point` onto the nearest edge of the network.

    Edges are scanned in list order and only a strictly closer edge replaces
    the current best, so the first of several equidistant edges wins. A
    built PathNetwork always has at least one edge.
    """
    best_edge = network.edges[0]
    best = nearest_point_on_polyline(best_edge.coords, point)
    for edge in network.edges[1:]:
        candidate = nearest_point_on_polyline(edge.coords, point)
        if candidate.distance_m < best.distance_m:
            best = candidate
            best_edge = edge

    coords = best_edge.coords
    to_start = slice_between(coords, start_location(), best.location)
    to_end = slice_between(coords, best.location, end_location(coords))

    return SnapResult(
        edge=best_edge,
        point=best.point,
        distance_m=best.distance_m,
        location=best.location,
        dist_to_start_m=geodesic_length(to_start),
        dist_to_end_m=geodesic_length(to_end),
    )


def augment_graph(network: PathNetwork, snap: SnapResult) -> AugmentedGraph:
    """
    Extend copies of the node and edge lists with a virtual node at the snap
    point and two virtual edges to the snapped edge's endpoints.

    The shared network is left untouched.
    """
    virtual_index = len(network.nodes)
    virtual_node = Node(index=virtual_index, lat=snap.point[0], lng=snap.point[1])

    nodes = network.nodes + (virtual_node,)
    edges = network.edges + (
        Edge(
            from_node=virtual_index,
            to_node=snap.edge.from_node,
            coords=(),
            length_m=snap.dist_to_start_m,
        ),
        Edge(
            from_node=virtual_index,
            to_node=snap.edge.to_node,
            coords=(),
            length_m=snap.dist_to_end_m,
        ),
    )
    return AugmentedGraph(nodes=nodes, edges=edges, virtual_index=virtual_index)
