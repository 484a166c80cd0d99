"""Roadmap progress endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ..auth import current_active_user
from ..schemas.progress import NodeProgress, ProgressStats, ToggleRequest, ToggleResponse
from ..schemas.users import User
from ..services import progress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_node(body: ToggleRequest, user: User = Depends(current_active_user)) -> ToggleResponse:
    """Mark a node complete, or incomplete if it already was."""
    return await progress.toggle_node(user, body.roadmap_id, body.node_id, body.total_nodes)


@router.get("/{roadmap_id}", response_model=List[NodeProgress])
async def get_completed_nodes(roadmap_id: str, user: User = Depends(current_active_user)) -> List[NodeProgress]:
    return progress.completed_nodes(user.roadmap_progress, roadmap_id)


@router.get("/{roadmap_id}/stats", response_model=ProgressStats)
async def get_progress_stats(roadmap_id: str, user: User = Depends(current_active_user)) -> ProgressStats:
    return progress.stats(user.roadmap_progress, roadmap_id)
