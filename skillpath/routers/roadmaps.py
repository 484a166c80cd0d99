"""Official roadmaps."""

from fastapi import APIRouter

from ..schemas.roadmaps import RoadmapRead
from ..services.roadmaps import find_roadmap
from ..utils.errors import NotFoundError

router = APIRouter(prefix="/main-roadmaps", tags=["roadmaps"])


@router.get("/{roadmap_id}", response_model=RoadmapRead)
async def get_main_roadmap(roadmap_id: str) -> RoadmapRead:
    """Look up an official roadmap by slug, id or name."""
    roadmap = await find_roadmap(roadmap_id)
    if roadmap is None:
        raise NotFoundError("Roadmap", roadmap_id)
    return RoadmapRead(name=roadmap.name, children=roadmap.children)
