"""Career path simulation, gated by the daily career-track quota."""

import logging
import re
from typing import List

from beanie import PydanticObjectId

from ..ai.base import AIModel
from ..ai.prompts.career import CareerPathPrompt
from ..schemas.generation import CareerPathInputs, CareerPathResponse, CareerPlan, SavedCareerPath
from ..schemas.usage import FeatureKind
from ..schemas.users import User
from ..services import store, usage
from ..utils.errors import NotFoundError, ValidationFailure

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

career_prompt = CareerPathPrompt()


def _label(key: str) -> str:
    """``careerGoal`` -> ``Career Goal``."""
    spaced = re.sub(r"([A-Z])", r" \1", key).strip()
    return spaced[:1].upper() + spaced[1:]


def describe_inputs(inputs: CareerPathInputs) -> str:
    """Render every input as a ``- Label: value`` line for the prompt."""
    lines = []
    for key, value in inputs.model_dump(by_alias=True).items():
        if isinstance(value, list):
            value = ", ".join(value)
        lines.append(f"- {_label(key)}: {value or NOT_AVAILABLE}")
    return "\n".join(lines)


def validate_inputs(inputs: CareerPathInputs) -> None:
    problem = inputs.missing_required()
    if problem:
        raise ValidationFailure(problem)


async def simulate(user: User, inputs: CareerPathInputs, model: AIModel) -> CareerPathResponse:
    """Generate, validate and save a career path.

    Raises:
        ValidationFailure: If a required input is missing
        QuotaExceededError: If today's career-track limit is reached
        ProviderError: If the AI provider fails
        UpstreamFormatError: If the path is not a valid list of steps
    """
    validate_inputs(inputs)
    usage.ensure_can_use(user, FeatureKind.CAREER_TRACK)

    plan = await model.structured(
        career_prompt,
        CareerPlan,
        user_details=describe_inputs(inputs),
        goal_timeframe=inputs.goal_timeframe or NOT_AVAILABLE,
        hours_per_week=inputs.hours_per_week or NOT_AVAILABLE,
        career_stage=inputs.career_stage,
        education_level=inputs.education_level,
        currently_studying=inputs.currently_studying or NOT_AVAILABLE,
        major=inputs.major or NOT_AVAILABLE,
        experience=inputs.years_of_experience or inputs.work_experience or NOT_AVAILABLE,
    )

    await usage.record_usage(user.id, FeatureKind.CAREER_TRACK)

    entry = SavedCareerPath(inputs=inputs, career_path=plan.steps)
    await store.push_entry(user.id, "saved_career_paths", entry)
    logger.info(f"Saved career path {entry.id} with {len(plan.steps)} steps for user {user.id}")

    return CareerPathResponse(career_path=plan.steps, career_path_id=entry.id)


def list_saved(user: User) -> List[SavedCareerPath]:
    return user.saved_career_paths


def get_saved(user: User, career_path_id: PydanticObjectId) -> SavedCareerPath:
    for entry in user.saved_career_paths:
        if entry.id == career_path_id:
            return entry
    raise NotFoundError("Career path", str(career_path_id))


async def delete_saved(user: User, career_path_id: PydanticObjectId) -> None:
    """Remove a saved path. Deleting an unknown id is not an error."""
    removed = await store.pull_entry(user.id, "saved_career_paths", career_path_id)
    if not removed:
        logger.debug(f"Career path {career_path_id} not found for user {user.id}")
