"""Schemas for roadmap completion progress."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CompletedNode(BaseModel):
    """A node marked complete. Presence in the list means completed."""

    node_id: str = Field(..., serialization_alias="nodeId")
    completed: bool = True
    timestamp: datetime

    model_config = ConfigDict(populate_by_name=True)


class RoadmapProgress(BaseModel):
    """Completion ledger for one roadmap."""

    roadmap_id: str = Field(..., serialization_alias="roadmapId")
    completed_nodes: List[CompletedNode] = Field(default_factory=list, serialization_alias="completedNodes")
    total_nodes: int = Field(default=0, ge=0, serialization_alias="totalNodes")
    last_updated: datetime = Field(..., serialization_alias="lastUpdated")

    model_config = ConfigDict(populate_by_name=True)


class NodeProgress(BaseModel):
    """Public view of a completed node."""

    node_id: str = Field(..., serialization_alias="nodeId")
    timestamp: datetime

    model_config = ConfigDict(populate_by_name=True)


class ProgressStats(BaseModel):
    """Aggregate progress for one roadmap."""

    total_completed: int = Field(..., serialization_alias="totalCompleted")
    completed_nodes: List[NodeProgress] = Field(default_factory=list, serialization_alias="completedNodes")
    last_updated: Optional[datetime] = Field(default=None, serialization_alias="lastUpdated")

    model_config = ConfigDict(populate_by_name=True)


class ToggleRequest(BaseModel):
    """Body of a node toggle request."""

    roadmap_id: str = Field(..., min_length=1, alias="roadmapId")
    node_id: str = Field(..., min_length=1, alias="nodeId")
    total_nodes: Optional[int] = Field(default=None, ge=0, alias="totalNodes")

    model_config = ConfigDict(populate_by_name=True)


class ToggleResponse(BaseModel):
    success: bool = True
    completed: bool
    timestamp: datetime
