"""Personalised learning guides from questionnaire answers."""

import logging
from typing import List

from beanie import PydanticObjectId

from ..ai.base import AIModel
from ..ai.prompts.base import join_values
from ..ai.prompts.suggestions import SuggestionPrompt
from ..schemas.generation import SavedSuggestion, SuggestionAnswers, SuggestionResponse
from ..schemas.usage import FeatureKind
from ..schemas.users import User
from ..services import store, usage
from ..utils.errors import NotFoundError, UpstreamFormatError
from ..utils.html import sanitize_html, strip_code_fences

logger = logging.getLogger(__name__)

suggestion_prompt = SuggestionPrompt()


def clean_guide(raw: str) -> str:
    """Strip code fences and reduce model HTML to the allowed tags."""
    return sanitize_html(strip_code_fences(raw))


async def suggest(user: User, answers: SuggestionAnswers, model: AIModel) -> SuggestionResponse:
    """Generate, sanitise and save a learning guide.

    Raises:
        QuotaExceededError: If today's suggestion limit is reached
        ProviderError: If the AI provider fails
        UpstreamFormatError: If nothing survives sanitising
    """
    usage.ensure_can_use(user, FeatureKind.AI_SUGGESTIONS)

    raw = await model.text(
        suggestion_prompt,
        career_goals=answers.career_goals,
        experience=answers.experience,
        learning_style=answers.learning_style,
        time_commitment=answers.time_commitment,
        current_knowledge=join_values(answers.current_knowledge),
        preference=answers.preference or "No preference",
    )
    guide = clean_guide(raw)
    if not guide:
        raise UpstreamFormatError("Generated guide is empty")

    await usage.record_usage(user.id, FeatureKind.AI_SUGGESTIONS)

    entry = SavedSuggestion(answers=answers, roadmap=guide)
    await store.push_entry(user.id, "saved_ai_suggestions", entry)
    logger.info(f"Saved AI suggestion {entry.id} for user {user.id}")

    usage_info = await usage.refresh_usage(user, FeatureKind.AI_SUGGESTIONS)
    return SuggestionResponse(roadmap=guide, suggestion_id=entry.id, usage_info=usage_info)


def list_saved(user: User) -> List[SavedSuggestion]:
    return user.saved_ai_suggestions


def get_saved(user: User, suggestion_id: PydanticObjectId) -> SavedSuggestion:
    for entry in user.saved_ai_suggestions:
        if entry.id == suggestion_id:
            return entry
    raise NotFoundError("Suggestion", str(suggestion_id))


async def delete_saved(user: User, suggestion_id: PydanticObjectId) -> None:
    if not await store.pull_entry(user.id, "saved_ai_suggestions", suggestion_id):
        raise NotFoundError("Suggestion", str(suggestion_id))
