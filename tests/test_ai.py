import json

import pytest
from pydantic import SecretStr

from skillpath.ai.base import AIModel
from skillpath.ai.prompts import CareerPathPrompt, RoadmapPrompt
from skillpath.ai.providers import GoogleAIProvider, GroqProvider
from skillpath.config import PROVIDER_TYPE, settings
from skillpath.schemas.generation import CareerPlan
from skillpath.schemas.roadmaps import RoadmapNode
from skillpath.utils.errors import ProviderError, UpstreamFailure, UpstreamFormatError

from .helpers import ScriptedProvider


ROADMAP_VARS = {"topic": "Rust", "timeframe": "3 months", "level": "beginner", "context": "No additional context"}

STEP = {
    "title": "Junior Developer",
    "timeToAchieve": 6,
    "requiredSkills": ["Python"],
    "description": "Writes code",
    "learningResources": ["Docs"],
}


async def test_structured_parses_fenced_json_into_tree():
    tree = {"name": "Rust", "children": [{"name": "Basics", "timeframe": "2 weeks", "children": []}]}
    provider = ScriptedProvider(["```json\n" + json.dumps(tree) + "\n```"])

    result = await AIModel(provider=provider, max_retries=0).structured(RoadmapPrompt(), RoadmapNode, **ROADMAP_VARS)

    assert result.children[0].name == "Basics"
    assert "3 months" in provider.prompts[0]
    assert provider.system_prompts[0] == RoadmapPrompt().system_prompt


async def test_non_json_answer_is_a_format_error():
    provider = ScriptedProvider(["Sure! Here is your roadmap."])

    with pytest.raises(UpstreamFormatError):
        await AIModel(provider=provider, max_retries=0).structured("prompt", RoadmapNode)


async def test_wrong_shape_is_a_format_error_not_a_provider_error():
    provider = ScriptedProvider([json.dumps({"title": "no name field"})])

    with pytest.raises(UpstreamFormatError) as exc_info:
        await AIModel(provider=provider, max_retries=0).structured("prompt", RoadmapNode)

    assert not isinstance(exc_info.value, ProviderError)
    assert isinstance(exc_info.value, UpstreamFailure)
    assert exc_info.value.status_code == 502


async def test_career_plan_requires_feedback_on_first_step():
    provider = ScriptedProvider([json.dumps([STEP])])

    with pytest.raises(UpstreamFormatError):
        await AIModel(provider=provider, max_retries=0).structured("prompt", CareerPlan)


async def test_career_plan_rejects_non_numeric_months():
    steps = [dict(STEP, aiFeedback="Keep going", timeToAchieve="six")]
    provider = ScriptedProvider([json.dumps(steps)])

    with pytest.raises(UpstreamFormatError):
        await AIModel(provider=provider, max_retries=0).structured("prompt", CareerPlan)


async def test_career_plan_rejects_empty_list():
    provider = ScriptedProvider(["[]"])

    with pytest.raises(UpstreamFormatError):
        await AIModel(provider=provider, max_retries=0).structured("prompt", CareerPlan)


async def test_valid_career_plan():
    steps = [dict(STEP, aiFeedback="Keep going"), dict(STEP, title="Senior Developer", timeToAchieve=24)]
    provider = ScriptedProvider([json.dumps(steps)])

    plan = await AIModel(provider=provider, max_retries=0).structured(
        CareerPathPrompt(),
        CareerPlan,
        user_details="- Career Goal: Engineer",
        goal_timeframe="2 years",
        hours_per_week="10-20",
        career_stage="Student",
        education_level="Bachelor",
        currently_studying="Yes",
        major="CS",
        experience="N/A",
    )

    assert [s.title for s in plan.steps] == ["Junior Developer", "Senior Developer"]
    assert plan.steps[0].ai_feedback == "Keep going"


async def test_provider_errors_are_not_retried_by_default():
    provider = ScriptedProvider([ProviderError("down"), "ok"])

    with pytest.raises(ProviderError):
        await AIModel(provider=provider, max_retries=0).text("hello")
    assert len(provider.prompts) == 1


async def test_provider_errors_retried_when_configured():
    provider = ScriptedProvider([ProviderError("down"), "ok"])

    assert await AIModel(provider=provider, max_retries=1).text("hello") == "ok"
    assert len(provider.prompts) == 2


def test_default_model_uses_configured_provider(monkeypatch):
    monkeypatch.setattr(settings.ai, "default_provider", PROVIDER_TYPE.GROQ)
    monkeypatch.setattr(settings.ai, "groq_api_key", SecretStr("test-key"))

    model = AIModel.default()

    assert isinstance(model.provider, GroqProvider)
    assert model.provider.model == settings.ai.groq_model


def test_default_model_explicit_provider_wins(monkeypatch):
    monkeypatch.setattr(settings.ai, "default_provider", PROVIDER_TYPE.GROQ)

    model = AIModel.default(PROVIDER_TYPE.GOOGLE)

    assert isinstance(model.provider, GoogleAIProvider)
