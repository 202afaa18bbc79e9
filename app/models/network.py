# app/models/network.py

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class NodeRecord(BaseModel):
    """
    One node of the path network file. Its index is its position in the list.
    """
    lat: float
    lng: float
    name: Optional[str] = None


class EdgeRecord(BaseModel):
    """
    One edge of the path network file.

    `coords` is the [lat, lng] polyline from node `from` to node `to`.
    """
    model_config = ConfigDict(populate_by_name=True)

    from_node: int = Field(alias="from")
    to_node: int = Field(alias="to")
    coords: List[Tuple[float, float]] = Field(min_length=1)


class NetworkFile(BaseModel):
    nodes: List[NodeRecord]
    edges: List[EdgeRecord]
