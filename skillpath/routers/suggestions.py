"""AI learning-guide suggestions."""

from typing import List

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, status

from ..ai.base import AIModel
from ..auth import current_active_user
from ..logic import suggestions
from ..schemas.generation import SavedSuggestion, SuggestionRequest, SuggestionResponse
from ..schemas.usage import FeatureKind, UsageStatus
from ..schemas.users import User
from ..services import usage
from .dependencies import get_ai_model

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.post("/suggest", response_model=SuggestionResponse)
async def suggest(
    body: SuggestionRequest,
    user: User = Depends(current_active_user),
    model: AIModel = Depends(get_ai_model),
) -> SuggestionResponse:
    """Generate a personalised learning guide; limited to 3 per day."""
    return await suggestions.suggest(user, body.answers, model)


@router.get("/usage", response_model=UsageStatus)
async def get_suggestions_usage(user: User = Depends(current_active_user)) -> UsageStatus:
    return usage.get_usage(user, FeatureKind.AI_SUGGESTIONS)


@router.get("/saved", response_model=List[SavedSuggestion])
async def list_saved_suggestions(user: User = Depends(current_active_user)) -> List[SavedSuggestion]:
    return suggestions.list_saved(user)


@router.get("/saved/{suggestion_id}", response_model=SavedSuggestion)
async def get_saved_suggestion(
    suggestion_id: PydanticObjectId, user: User = Depends(current_active_user)
) -> SavedSuggestion:
    return suggestions.get_saved(user, suggestion_id)


@router.delete("/saved/{suggestion_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_suggestion(suggestion_id: PydanticObjectId, user: User = Depends(current_active_user)) -> None:
    await suggestions.delete_saved(user, suggestion_id)
