# app/services/graph_builder.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from app.core.logger import logger
from app.services.geometry import LatLng, geodesic_length, haversine_m

# (neighbor_index, weight_m) pairs per node index
AdjacencyList = List[List[Tuple[int, float]]]

# Polyline ends further than this from their node are reported on load.
ENDPOINT_MISMATCH_TOLERANCE_M = 1.0


class NetworkDataError(ValueError):
    """The static path network is malformed (missing nodes, empty edges, ...)."""


@dataclass(frozen=True)
class Node:
    index: int
    lat: float
    lng: float
    name: Optional[str] = None

    @property
    def coord(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Edge:
    """
    Undirected connection between two node indices.

    `coords` traces the edge from `from_node` to `to_node`. Edges joining
    a snapped position for one query carry no geometry.
    """

    from_node: int
    to_node: int
    coords: Tuple[LatLng, ...]
    length_m: float

    def connects(self, u: int, v: int) -> bool:
        return (self.from_node == u and self.to_node == v) or (
            self.from_node == v and self.to_node == u
        )

    def coords_from(self, u: int) -> List[LatLng]:
        """Polyline oriented so that it starts at node `u`."""
        if self.from_node == u:
            return list(self.coords)
        return list(reversed(self.coords))


def _edge_key(u: int, v: int) -> Tuple[int, int]:
    return (u, v) if u <= v else (v, u)


def build_adjacency(node_count: int, edges: Iterable[Edge]) -> AdjacencyList:
    """
    Symmetric adjacency list weighted by edge length, in edge order.

    An edge pointing at a node index outside the node list means the dataset
    is corrupt, so construction is aborted.
    """
    adj: AdjacencyList = [[] for _ in range(node_count)]
    for i, e in enumerate(edges):
        for end in (e.from_node, e.to_node):
            if not 0 <= end < node_count:
                raise NetworkDataError(
                    f"Edge {i} references node {end}, but only {node_count} nodes exist."
                )
        adj[e.from_node].append((e.to_node, e.length_m))
        adj[e.to_node].append((e.from_node, e.length_m))
    return adj


@dataclass(frozen=True)
class PathNetwork:
    """
    Read-only path network shared by all queries.

    `edge_index` maps an unordered node pair to the shortest edge joining
    them (first one on equal length), which is the edge a search relaxes.
    """

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    edge_index: Dict[Tuple[int, int], Edge]

    @classmethod
    def build(
        cls,
        nodes: Sequence[Node],
        edges: Iterable[Tuple[int, int, Sequence[Sequence[float]]]],
    ) -> "PathNetwork":
        """
        Build the network from nodes and raw (from, to, coords) edge records,
        computing each edge's geodesic length once.
        """
        node_count = len(nodes)
        built: List[Edge] = []
        mismatched = 0

        for i, (u, v, coords) in enumerate(edges):
            for end in (u, v):
                if not 0 <= end < node_count:
                    raise NetworkDataError(
                        f"Edge {i} references node {end}, but only {node_count} nodes exist."
                    )
            if not coords:
                raise NetworkDataError(f"Edge {i} ({u}-{v}) has no coordinates.")

            polyline = tuple((float(lat), float(lng)) for lat, lng in coords)
            if (
                haversine_m(polyline[0], nodes[u].coord) > ENDPOINT_MISMATCH_TOLERANCE_M
                or haversine_m(polyline[-1], nodes[v].coord) > ENDPOINT_MISMATCH_TOLERANCE_M
            ):
                mismatched += 1

            built.append(
                Edge(
                    from_node=int(u),
                    to_node=int(v),
                    coords=polyline,
                    length_m=geodesic_length(polyline),
                )
            )

        if not built:
            raise NetworkDataError(
                f"Path network has no edges ({node_count} nodes); nothing can be routed."
            )

        if mismatched:
            logger.warning(
                f"{mismatched} edges have polyline ends more than "
                f"{ENDPOINT_MISMATCH_TOLERANCE_M:.1f} m away from their nodes."
            )

        edge_index: Dict[Tuple[int, int], Edge] = {}
        for e in built:
            key = _edge_key(e.from_node, e.to_node)
            current = edge_index.get(key)
            if current is None or e.length_m < current.length_m:
                edge_index[key] = e

        return cls(nodes=tuple(nodes), edges=tuple(built), edge_index=edge_index)

    @classmethod
    def from_records(
        cls,
        coords: Sequence[Sequence[float]],
        edges: Iterable[Tuple[int, int, Sequence[Sequence[float]]]],
    ) -> "PathNetwork":
        """Build from plain (lat, lng) node coordinates; indices are positional."""
        nodes = [Node(index=i, lat=float(c[0]), lng=float(c[1])) for i, c in enumerate(coords)]
        return cls.build(nodes, edges)

    def adjacency(self) -> AdjacencyList:
        return build_adjacency(len(self.nodes), self.edges)

    def find_edge(self, u: int, v: int) -> Optional[Edge]:
        return self.edge_index.get(_edge_key(u, v))

    def total_length_m(self) -> float:
        return sum(e.length_m for e in self.edges)

    def component_count(self) -> int:
        """Number of connected components, isolated nodes included."""
        G = nx.Graph()
        G.add_nodes_from(range(len(self.nodes)))
        G.add_edges_from((e.from_node, e.to_node) for e in self.edges)
        return nx.number_connected_components(G)
