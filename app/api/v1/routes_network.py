# app/api/v1/routes_network.py
from typing import List

from fastapi import APIRouter

from app.api.v1.routes_routing import routing_service
from app.models.routing import NetworkNode, NetworkSummary

router = APIRouter(
    prefix="/network",
    tags=["network"],
)


@router.get("/", response_model=NetworkSummary, summary="Loaded path network summary")
async def network_summary() -> NetworkSummary:
    return routing_service.network_summary()


@router.get("/nodes", response_model=List[NetworkNode], summary="Routable nodes")
async def list_nodes() -> List[NetworkNode]:
    """
    All nodes of the path network; `id` is the value to pass as destination.
    """
    return routing_service.list_nodes()
