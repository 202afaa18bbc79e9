# app/api/v1/routes_routing.py
from fastapi import APIRouter, HTTPException, Query

from app.models.routing import Coordinate, RouteRequest, RouteResponse
from app.services.network_manager import NetworkManager
from app.services.routing_service import RoutingService

router = APIRouter(
    tags=["routing"],
)

# Single shared instances
network_manager = NetworkManager()
routing_service = RoutingService(network_manager=network_manager)


def _found(response: RouteResponse | None) -> RouteResponse:
    if response is None:
        raise HTTPException(status_code=404, detail="No route found")
    return response


@router.post(
    "/route/",
    response_model=RouteResponse,
    summary="Compute a walking route from a position to a network node",
)
async def compute_route(request: RouteRequest) -> RouteResponse:
    """
    Compute the shortest walking route from an arbitrary position to a node.

    - Snaps the origin onto the nearest path segment.
    - Runs Dijkstra on the path network extended with the snapped position.
    """
    return _found(routing_service.compute_route(request))


@router.get(
    "/routing",
    response_model=RouteResponse,
    summary="Compute a walking route (query-string form)",
)
async def compute_route_query(
    lat: float = Query(ge=-90.0, le=90.0),
    long: float = Query(ge=-180.0, le=180.0),
    dest: int = Query(),
) -> RouteResponse:
    """
    Same as POST /route/, taking `lat`, `long` and `dest` from the query string.
    """
    origin = Coordinate(lat=lat, lng=long)
    return _found(routing_service.route_from_point(origin, dest))
