"""Career path simulation endpoints."""

from typing import List

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, status

from ..ai.base import AIModel
from ..auth import current_active_user
from ..logic import career
from ..schemas.generation import CareerPathInputs, CareerPathResponse, SavedCareerPath
from ..schemas.usage import FeatureKind, UsageStatus
from ..schemas.users import User
from ..services import usage
from .dependencies import get_ai_model

router = APIRouter(prefix="/career-track", tags=["career-track"])


@router.post("/simulate", response_model=CareerPathResponse)
async def simulate(
    inputs: CareerPathInputs,
    user: User = Depends(current_active_user),
    model: AIModel = Depends(get_ai_model),
) -> CareerPathResponse:
    """Generate a career progression path; limited to 3 per day."""
    return await career.simulate(user, inputs, model)


@router.get("/usage", response_model=UsageStatus)
async def get_career_usage(user: User = Depends(current_active_user)) -> UsageStatus:
    return usage.get_usage(user, FeatureKind.CAREER_TRACK)


@router.get("/saved", response_model=List[SavedCareerPath])
async def list_saved_paths(user: User = Depends(current_active_user)) -> List[SavedCareerPath]:
    return career.list_saved(user)


@router.get("/{career_path_id}", response_model=SavedCareerPath)
async def get_saved_path(career_path_id: PydanticObjectId, user: User = Depends(current_active_user)) -> SavedCareerPath:
    return career.get_saved(user, career_path_id)


@router.delete("/{career_path_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_path(career_path_id: PydanticObjectId, user: User = Depends(current_active_user)) -> None:
    await career.delete_saved(user, career_path_id)
