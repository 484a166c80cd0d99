"""AI roadmap generation endpoints."""

from typing import List

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..ai.base import AIModel
from ..auth import current_active_user
from ..logic import roadmap_generation
from ..schemas.generation import GeneratedRoadmap, GenerateRoadmapRequest, GenerateRoadmapResponse
from ..schemas.usage import FeatureKind
from ..schemas.users import User
from ..services import usage
from .dependencies import get_ai_model

router = APIRouter(prefix="/ai", tags=["ai"])


class RoadmapUsageResponse(BaseModel):
    can_generate: bool = Field(..., serialization_alias="canGenerate")
    usage_count: int = Field(..., serialization_alias="usageCount")
    remaining_count: int = Field(..., serialization_alias="remainingCount")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    msg: str


@router.get("/usage", response_model=RoadmapUsageResponse)
async def get_roadmap_usage(user: User = Depends(current_active_user)) -> RoadmapUsageResponse:
    status = usage.get_usage(user, FeatureKind.ROADMAP)
    return RoadmapUsageResponse(
        can_generate=status.can_use,
        usage_count=status.usage_count,
        remaining_count=status.remaining_count,
    )


@router.post("/generate", response_model=GenerateRoadmapResponse)
async def generate_roadmap(
    body: GenerateRoadmapRequest,
    user: User = Depends(current_active_user),
    model: AIModel = Depends(get_ai_model),
) -> GenerateRoadmapResponse:
    """Generate a learning roadmap; limited to 10 per day."""
    return await roadmap_generation.generate_roadmap(user, body, model)


@router.get("/generated-roadmaps", response_model=List[GeneratedRoadmap])
async def list_generated_roadmaps(user: User = Depends(current_active_user)) -> List[GeneratedRoadmap]:
    return roadmap_generation.list_generated(user)


@router.get("/generated-roadmaps/{roadmap_id}", response_model=GeneratedRoadmap)
async def get_generated_roadmap(
    roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)
) -> GeneratedRoadmap:
    return roadmap_generation.get_generated(user, roadmap_id)


@router.delete("/generated-roadmaps/{roadmap_id}", response_model=MessageResponse)
async def delete_generated_roadmap(
    roadmap_id: PydanticObjectId, user: User = Depends(current_active_user)
) -> MessageResponse:
    await roadmap_generation.delete_generated(user, roadmap_id)
    return MessageResponse(msg="Roadmap deleted successfully")
