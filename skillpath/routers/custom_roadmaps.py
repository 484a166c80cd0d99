"""User-authored roadmaps: CRUD, ratings and follows."""

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, Query, status

from ..auth import current_active_user
from ..schemas.roadmaps import (
    CustomRoadmapCreate,
    CustomRoadmapRead,
    CustomRoadmapUpdate,
    FollowResponse,
    RateRequest,
)
from ..schemas.users import User
from ..services import bookmarks, custom_roadmaps

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/custom-roadmaps",
    tags=["custom-roadmaps"],
    dependencies=[Depends(current_active_user)],
)


@router.post("/", response_model=CustomRoadmapRead, status_code=status.HTTP_201_CREATED)
async def create_roadmap(data: CustomRoadmapCreate, user: User = Depends(current_active_user)) -> CustomRoadmapRead:
    roadmap = await custom_roadmaps.create_roadmap(user.id, data)
    return CustomRoadmapRead.model_validate(roadmap)


@router.get("/mine", response_model=List[CustomRoadmapRead])
async def list_my_roadmaps(user: User = Depends(current_active_user)) -> List[CustomRoadmapRead]:
    roadmaps = await custom_roadmaps.list_user_roadmaps(user.id)
    return [CustomRoadmapRead.model_validate(r) for r in roadmaps]


@router.get("/public", response_model=List[CustomRoadmapRead])
async def list_public_roadmaps(
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
) -> List[CustomRoadmapRead]:
    """Public roadmaps, best rated first."""
    roadmaps = await custom_roadmaps.list_public_roadmaps(search=search, skip=skip, limit=limit)
    return [CustomRoadmapRead.model_validate(r) for r in roadmaps]


@router.get("/{roadmap_id}", response_model=CustomRoadmapRead)
async def get_roadmap(roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)) -> CustomRoadmapRead:
    roadmap = await custom_roadmaps.get_visible_roadmap(roadmap_id, user.id)
    return CustomRoadmapRead.model_validate(roadmap)


@router.put("/{roadmap_id}", response_model=CustomRoadmapRead)
async def update_roadmap(
    roadmap_id: PydanticObjectId,
    data: CustomRoadmapUpdate,
    user: User = Depends(current_active_user),
) -> CustomRoadmapRead:
    roadmap = await custom_roadmaps.update_roadmap(roadmap_id, user.id, data)
    return CustomRoadmapRead.model_validate(roadmap)


@router.delete("/{roadmap_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_roadmap(roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)) -> None:
    await custom_roadmaps.delete_roadmap(roadmap_id, user.id)


@router.post("/{roadmap_id}/rate", response_model=CustomRoadmapRead)
async def rate_roadmap(
    roadmap_id: PydanticObjectId,
    body: RateRequest,
    user: User = Depends(current_active_user),
) -> CustomRoadmapRead:
    """Rate a roadmap 1-5; rating again replaces the earlier rating."""
    roadmap = await custom_roadmaps.rate_roadmap(roadmap_id, user.id, body.value)
    return CustomRoadmapRead.model_validate(roadmap)


@router.get("/{roadmap_id}/follow", response_model=FollowResponse)
async def check_follow(roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)) -> FollowResponse:
    following = bookmarks.is_following(user, roadmap_id)
    return FollowResponse(action="followed" if following else "unfollowed", following=following)


@router.post("/{roadmap_id}/follow", response_model=FollowResponse)
async def toggle_follow(roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)) -> FollowResponse:
    await custom_roadmaps.get_visible_roadmap(roadmap_id, user.id)
    action = await bookmarks.toggle_follow(user, roadmap_id)
    return FollowResponse(action=action, following=action == "followed")
