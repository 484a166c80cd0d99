"""Service layer for user-authored roadmaps."""

import logging
from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId

from ..schemas.roadmaps import CustomRoadmap, CustomRoadmapCreate, CustomRoadmapUpdate
from ..utils.errors import NotFoundError

logger = logging.getLogger(__name__)


async def create_roadmap(user_id: PydanticObjectId, data: CustomRoadmapCreate) -> CustomRoadmap:
    roadmap = CustomRoadmap(created_by=user_id, **data.model_dump())
    await roadmap.insert()
    logger.info(f"Created custom roadmap '{roadmap.title}' for user {user_id}")
    return roadmap


async def list_user_roadmaps(user_id: PydanticObjectId) -> List[CustomRoadmap]:
    return await CustomRoadmap.find(CustomRoadmap.created_by == user_id).sort("-last_updated").to_list()


async def list_public_roadmaps(search: Optional[str] = None, skip: int = 0, limit: int = 20) -> List[CustomRoadmap]:
    """Public roadmaps, best rated first, optionally filtered by a text search."""
    query: dict = {"is_private": False}
    if search:
        query["$text"] = {"$search": search}
    return (
        await CustomRoadmap.find(query)
        .sort([("rating_stats.average_rating", -1), ("last_updated", -1)])
        .skip(skip)
        .limit(limit)
        .to_list()
    )


async def get_visible_roadmap(roadmap_id: PydanticObjectId, user_id: PydanticObjectId) -> CustomRoadmap:
    """Get a roadmap the user owns or that is public."""
    roadmap = await CustomRoadmap.get(roadmap_id)
    if roadmap is None or (roadmap.is_private and roadmap.created_by != user_id):
        raise NotFoundError("Roadmap", str(roadmap_id))
    return roadmap


async def get_owned_roadmap(roadmap_id: PydanticObjectId, user_id: PydanticObjectId) -> CustomRoadmap:
    roadmap = await CustomRoadmap.get(roadmap_id)
    if roadmap is None or roadmap.created_by != user_id:
        raise NotFoundError("Roadmap", str(roadmap_id))
    return roadmap


async def update_roadmap(
    roadmap_id: PydanticObjectId, user_id: PydanticObjectId, data: CustomRoadmapUpdate
) -> CustomRoadmap:
    roadmap = await get_owned_roadmap(roadmap_id, user_id)
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        return roadmap

    update_data["last_updated"] = datetime.utcnow()
    await roadmap.update({"$set": update_data})
    await roadmap.sync()
    logger.info(f"Updated custom roadmap {roadmap_id} for user {user_id}")
    return roadmap


async def delete_roadmap(roadmap_id: PydanticObjectId, user_id: PydanticObjectId) -> None:
    roadmap = await get_owned_roadmap(roadmap_id, user_id)
    await roadmap.delete()
    logger.info(f"Deleted custom roadmap {roadmap_id} for user {user_id}")


async def rate_roadmap(roadmap_id: PydanticObjectId, user_id: PydanticObjectId, value: int) -> CustomRoadmap:
    roadmap = await get_visible_roadmap(roadmap_id, user_id)
    roadmap.rate(user_id, value)
    await roadmap.save()
    return roadmap
