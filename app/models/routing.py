# app/models/routing.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """
    Simple latitude/longitude coordinate in degrees.
    """
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class RouteRequest(BaseModel):
    """
    Request body for the /route endpoint.
    """
    origin: Coordinate
    # Index of the destination node in the loaded network
    destination: int


class RouteResponse(BaseModel):
    """
    Response for the routing endpoints.

    Serialised with camelCase keys:
    {
        "path": [12, 3, 4],
        "snappedAt": [7.2541, 80.5921],
        "routeCoords": [[7.2541, 80.5921], [7.2540, 80.5920], ...],
        "distanceM": 84.2
    }

    `path` starts with the virtual node standing for the snapped position,
    whose index equals the number of nodes in the network.
    """
    model_config = ConfigDict(populate_by_name=True)

    path: List[int]
    snapped_at: List[float] = Field(alias="snappedAt")
    route_coords: List[List[float]] = Field(alias="routeCoords")
    distance_m: float = Field(alias="distanceM")


class NetworkNode(BaseModel):
    """
    A node clients can route to.
    """
    id: int
    lat: float
    lng: float
    name: Optional[str] = None


class NetworkSummary(BaseModel):
    nodes: int
    edges: int
    components: int
    total_length_m: float
