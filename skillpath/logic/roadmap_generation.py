"""AI roadmap generation, gated by the daily roadmap quota."""

import logging
from typing import List

from beanie import PydanticObjectId

from ..ai.base import AIModel
from ..ai.prompts.roadmap import NO_CONTEXT, RoadmapFeedbackPrompt, RoadmapPrompt
from ..schemas.generation import GeneratedRoadmap, GenerateRoadmapRequest, GenerateRoadmapResponse
from ..schemas.roadmaps import RoadmapNode
from ..schemas.usage import FeatureKind
from ..schemas.users import User
from ..services import store, usage
from ..utils.errors import NotFoundError, UpstreamFormatError

logger = logging.getLogger(__name__)

# Roadmap generation answers 403 on the daily limit, unlike the other features
QUOTA_STATUS = 403

roadmap_prompt = RoadmapPrompt()
feedback_prompt = RoadmapFeedbackPrompt()


async def generate_roadmap(user: User, request: GenerateRoadmapRequest, model: AIModel) -> GenerateRoadmapResponse:
    """Generate a roadmap tree plus feedback, save it and count the use.

    Nothing is saved or counted when generation fails.

    Raises:
        QuotaExceededError: If today's roadmap limit is reached
        ProviderError: If the AI provider fails
        UpstreamFormatError: If the generated tree is malformed
    """
    usage.ensure_can_use(user, FeatureKind.ROADMAP, status_code=QUOTA_STATUS)

    prompt_vars = {
        "topic": request.input,
        "timeframe": request.timeframe,
        "level": request.level,
        "context": request.context_info or NO_CONTEXT,
    }
    feedback = await model.text(feedback_prompt, **prompt_vars)
    tree = await model.structured(roadmap_prompt, RoadmapNode, **prompt_vars)
    if not tree.children:
        raise UpstreamFormatError("Generated roadmap has no categories")

    await usage.record_usage(user.id, FeatureKind.ROADMAP, status_code=QUOTA_STATUS)

    entry = GeneratedRoadmap(title=request.input, roadmap=tree)
    await store.push_entry(user.id, "ai_generated_roadmaps", entry)
    logger.info(f"Generated roadmap '{request.input}' with {tree.count_nodes()} nodes for user {user.id}")

    usage_info = await usage.refresh_usage(user, FeatureKind.ROADMAP)
    return GenerateRoadmapResponse(
        roadmap=tree,
        roadmap_id=entry.id,
        usage_info=usage_info,
        ai_feedback=feedback.strip(),
    )


def list_generated(user: User) -> List[GeneratedRoadmap]:
    return user.ai_generated_roadmaps


def get_generated(user: User, roadmap_id: PydanticObjectId) -> GeneratedRoadmap:
    for entry in user.ai_generated_roadmaps:
        if entry.id == roadmap_id:
            return entry
    raise NotFoundError("Roadmap", str(roadmap_id))


async def delete_generated(user: User, roadmap_id: PydanticObjectId) -> None:
    if not await store.pull_entry(user.id, "ai_generated_roadmaps", roadmap_id):
        raise NotFoundError("Roadmap", str(roadmap_id))
