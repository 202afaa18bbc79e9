# app/services/routing_service.py

from time import perf_counter
from typing import List, Optional

from app.core.config import settings
from app.core.logger import logger
from app.models.routing import (
    Coordinate,
    NetworkNode,
    NetworkSummary,
    RouteRequest,
    RouteResponse,
)
from app.services.network_manager import NetworkManager
from app.services.router import route_from_point


class RoutingService:
    """
    High-level routing service:
    - makes sure the static path network is loaded
    - snaps the origin onto the network and searches the augmented graph
    - converts the result into the API response model
    """

    def __init__(
        self,
        network_manager: NetworkManager | None = None,
        strategy: str | None = None,
    ) -> None:
        self.network_manager = network_manager or NetworkManager()
        self.strategy = strategy or settings.SEARCH_STRATEGY
        logger.info(f"RoutingService initialised (search strategy: {self.strategy}).")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def compute_route(self, request: RouteRequest) -> Optional[RouteResponse]:
        """
        Main entry point for the routing endpoints.

        Returns None when the destination cannot be reached from the
        snapped origin; the caller decides how to report that.
        """
        return self.route_from_point(request.origin, request.destination)

    def route_from_point(
        self, origin: Coordinate, destination: int
    ) -> Optional[RouteResponse]:
        t0 = perf_counter()

        logger.info(
            f"Received routing request from ({origin.lat:.6f}, {origin.lng:.6f}) "
            f"-> node {destination}"
        )

        network = self.network_manager.get_network()
        result = route_from_point(
            network,
            (origin.lat, origin.lng),
            destination,
            strategy=self.strategy,
        )

        t1 = perf_counter()

        if result is None:
            logger.info(
                f"No route to node {destination} "
                f"(search took {(t1 - t0) * 1000.0:.2f} ms)"
            )
            return None

        snap = result.snap
        logger.info(
            f"Snapped to edge {snap.edge.from_node}-{snap.edge.to_node} at "
            f"({snap.point[0]:.6f}, {snap.point[1]:.6f}), {snap.distance_m:.1f} m off the network"
        )
        logger.info(
            f"Route summary: {len(result.path)} nodes, {len(result.route_coords)} points, "
            f"distance={result.distance_m:.1f} m, time={(t1 - t0) * 1000.0:.2f} ms"
        )

        return RouteResponse(
            path=result.path,
            snapped_at=list(result.snapped_at),
            route_coords=[list(p) for p in result.route_coords],
            distance_m=result.distance_m,
        )

    def network_summary(self) -> NetworkSummary:
        network = self.network_manager.get_network()
        return NetworkSummary(
            nodes=len(network.nodes),
            edges=len(network.edges),
            components=network.component_count(),
            total_length_m=network.total_length_m(),
        )

    def list_nodes(self) -> List[NetworkNode]:
        network = self.network_manager.get_network()
        return [
            NetworkNode(id=n.index, lat=n.lat, lng=n.lng, name=n.name)
            for n in network.nodes
        ]
