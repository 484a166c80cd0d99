import json
from datetime import datetime
from types import SimpleNamespace

import pytest
from beanie import PydanticObjectId

from skillpath.ai.base import AIModel
from skillpath.logic import career, mentor, roadmap_generation, suggestions
from skillpath.schemas.generation import (
    CareerPathInputs,
    GenerateRoadmapRequest,
    MentorChatRequest,
    SuggestionAnswers,
)
from skillpath.schemas.usage import UsageCounter, UsageStatus
from skillpath.services import store, usage
from skillpath.utils.errors import ProviderError, QuotaExceededError, UpstreamFormatError

from .helpers import ScriptedProvider

TREE = {"name": "Rust", "children": [{"name": "Basics", "timeframe": "2 weeks", "children": []}]}


def make_user(**overrides):
    fields = dict(
        id=PydanticObjectId(),
        username="ada",
        email="ada@example.com",
        created_at=datetime(2025, 1, 1),
        roadmap_progress=[],
        bookmarked_roadmaps=[],
        followed_roadmaps=[],
        ai_generated_roadmaps=[],
        saved_ai_suggestions=[],
        saved_career_paths=[],
        roadmap_usage=[],
        chatbot_usage=[],
        ai_suggestions_usage=[],
        career_track_usage=[],
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def model_answering(*answers):
    return AIModel(provider=ScriptedProvider(list(answers)), max_retries=0)


@pytest.fixture
def events(monkeypatch):
    """Records quota commits and saves instead of touching Mongo."""
    recorded = []

    async def record_usage(user_id, feature, status_code=429, max_attempts=3):
        recorded.append(("record", feature.value))

    async def refresh_usage(user, feature):
        recorded.append(("refresh", feature.value))
        return UsageStatus(can_use=True, usage_count=1, remaining_count=9)

    async def push_entry(user_id, field, entry):
        recorded.append(("push", field))

    monkeypatch.setattr(usage, "record_usage", record_usage)
    monkeypatch.setattr(usage, "refresh_usage", refresh_usage)
    monkeypatch.setattr(store, "push_entry", push_entry)
    return recorded


def roadmap_request():
    return GenerateRoadmapRequest(input="Rust", timeframe="3 months", level="beginner")


async def test_generate_roadmap_commits_usage_then_saves(events):
    response = await roadmap_generation.generate_roadmap(
        make_user(), roadmap_request(), model_answering("Nice pick", json.dumps(TREE))
    )

    assert events == [("record", "roadmap"), ("push", "ai_generated_roadmaps"), ("refresh", "roadmap")]
    assert response.ai_feedback == "Nice pick"
    assert response.roadmap.children[0].name == "Basics"


@pytest.mark.parametrize("tree_answer", [json.dumps({"name": "Rust", "children": []}), "not json"])
async def test_malformed_roadmap_uses_no_quota(events, tree_answer):
    with pytest.raises(UpstreamFormatError):
        await roadmap_generation.generate_roadmap(make_user(), roadmap_request(), model_answering("ok", tree_answer))

    assert events == []


async def test_roadmap_provider_failure_uses_no_quota(events):
    with pytest.raises(ProviderError):
        await roadmap_generation.generate_roadmap(make_user(), roadmap_request(), model_answering(ProviderError("down")))

    assert events == []


async def test_roadmap_limit_rejects_before_calling_ai(events):
    user = make_user(roadmap_usage=[UsageCounter(day=usage.today_key(), count=10)])
    model = model_answering()

    with pytest.raises(QuotaExceededError) as exc_info:
        await roadmap_generation.generate_roadmap(user, roadmap_request(), model)

    assert exc_info.value.status_code == 403
    assert model.provider.prompts == []
    assert events == []


def suggestion_answers():
    return SuggestionAnswers(
        career_goals="Data Engineer", experience="beginner", learning_style="visual", time_commitment="5 hours"
    )


async def test_empty_guide_uses_no_quota(events):
    with pytest.raises(UpstreamFormatError):
        await suggestions.suggest(make_user(), suggestion_answers(), model_answering("<script>x()</script>"))

    assert events == []


async def test_suggestion_limit_is_429(events):
    user = make_user(ai_suggestions_usage=[UsageCounter(day=usage.today_key(), count=3)])

    with pytest.raises(QuotaExceededError) as exc_info:
        await suggestions.suggest(user, suggestion_answers(), model_answering())

    assert exc_info.value.status_code == 429


async def test_invalid_career_plan_uses_no_quota(events):
    inputs = CareerPathInputs(current_skills=["Go"], career_goal="SRE", career_stage="student", education_level="BSc")
    steps = [{"title": "SRE", "timeToAchieve": 12, "requiredSkills": [], "description": "d", "learningResources": []}]

    with pytest.raises(UpstreamFormatError):
        await career.simulate(make_user(), inputs, model_answering(json.dumps(steps)))

    assert events == []


async def test_mentor_chat_counts_after_answer(events):
    response = await mentor.chat(make_user(), MentorChatRequest(message="What next?"), model_answering("Try loops"))

    assert response.response == "Try loops"
    assert events == [("record", "chatbot"), ("refresh", "chatbot")]


async def test_mentor_provider_failure_uses_no_quota(events):
    with pytest.raises(ProviderError):
        await mentor.chat(make_user(), MentorChatRequest(message="What next?"), model_answering(ProviderError("down")))

    assert events == []
