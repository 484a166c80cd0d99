"""Learning mentor endpoints: chat, progress insights and next steps."""

from fastapi import APIRouter, Depends

from ..ai.base import AIModel
from ..auth import current_active_user
from ..logic import mentor
from ..schemas.generation import MentorChatRequest, MentorChatResponse
from ..schemas.insights import InsightsResponse, NextStepsResponse
from ..schemas.usage import FeatureKind, UsageStatus
from ..schemas.users import User
from ..services import usage
from .dependencies import get_ai_model

router = APIRouter(prefix="/mentor", tags=["mentor"])


@router.get("/usage", response_model=UsageStatus)
async def get_chat_usage(user: User = Depends(current_active_user)) -> UsageStatus:
    return usage.get_usage(user, FeatureKind.CHATBOT)


@router.post("/chat", response_model=MentorChatResponse)
async def chat(
    body: MentorChatRequest,
    user: User = Depends(current_active_user),
    model: AIModel = Depends(get_ai_model),
) -> MentorChatResponse:
    """Ask the mentor a question; limited to 10 messages per day."""
    return await mentor.chat(user, body, model)


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(user: User = Depends(current_active_user)) -> InsightsResponse:
    """Progress analytics: per-roadmap completion, streak, activity and recommendations."""
    return InsightsResponse(insights=mentor.build_insights(user))


@router.get("/suggestions", response_model=NextStepsResponse)
async def get_next_steps(user: User = Depends(current_active_user)) -> NextStepsResponse:
    """Prioritised next steps; does not call the AI and uses no quota."""
    return mentor.next_steps(user)
