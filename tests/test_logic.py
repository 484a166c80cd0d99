from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from skillpath.logic.career import describe_inputs, validate_inputs
from skillpath.logic.mentor import build_user_context, completion_rate, format_history, validate_message
from skillpath.schemas.generation import CareerPathInputs, ChatMessage, MentorChatRequest, SuggestionAnswers
from skillpath.services.progress import toggle
from skillpath.services.usage import increment, today_key
from skillpath.utils.errors import ValidationFailure

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


def make_user(**overrides):
    fields = dict(
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


def test_completion_rate():
    assert completion_rate(1, 3) == 33.3
    assert completion_rate(5, 0) == 0.0


def test_user_context_summarises_progress():
    progress = []
    for i, node in enumerate(["vars", "loops", "funcs", "classes"]):
        toggle(progress, "python", node, total_nodes=8, now=NOW - timedelta(days=i))
    user = make_user(roadmap_progress=progress, bookmarked_roadmaps=["python", "rust"])

    context = build_user_context(user, now=NOW)

    assert "Total Progress: 4/8 nodes completed (50.0% overall completion)" in context
    assert "- python: 4/8 nodes (50.0% complete)" in context
    assert "recently completed: vars, loops, funcs" in context
    assert "With Progress: python" in context
    assert "Not Started: rust" in context
    assert "4 completions this week" in context


def test_user_context_for_new_user():
    chat_counters = increment([], today_key())
    user = make_user(chatbot_usage=chat_counters)

    context = build_user_context(user, now=NOW)

    assert "User: ada" in context
    assert "- No roadmap progress yet" in context
    assert "- No recent activity" in context
    assert "- No career path information available" in context
    assert "Chat 1/10" in context


def test_history_keeps_last_eight_turns():
    history = [ChatMessage(type="user" if i % 2 == 0 else "ai", content=f"m{i}") for i in range(10)]

    lines = format_history(history).splitlines()

    assert len(lines) == 8
    assert lines[0] == "User: m2"
    assert lines[1] == "AI Mentor: m3"
    assert format_history([]) == "No previous conversation"


@pytest.mark.parametrize("message", ["", "   ", "x" * 1001])
def test_invalid_messages_rejected(message):
    with pytest.raises(ValidationFailure) as exc_info:
        validate_message(message)
    assert exc_info.value.status_code == 400


def test_message_at_limit_accepted():
    assert validate_message("x" * 1000) == "x" * 1000


def test_chat_request_accepts_camel_case_history():
    request = MentorChatRequest.model_validate(
        {"message": "hi", "conversationHistory": [{"type": "ai", "content": "hello"}]}
    )

    assert request.conversation_history[0].type == "ai"


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"careerGoal": "SRE", "careerStage": "student", "educationLevel": "BSc"}, "At least one skill is required"),
        ({"currentSkills": ["Go"], "careerStage": "student", "educationLevel": "BSc"}, "Career goal is required"),
        ({"currentSkills": ["Go"], "careerGoal": "SRE", "educationLevel": "BSc"}, "Career stage is required"),
        ({"currentSkills": ["Go"], "careerGoal": "SRE", "careerStage": "student"}, "Education level is required"),
    ],
)
def test_career_inputs_required_fields(payload, message):
    with pytest.raises(ValidationFailure) as exc_info:
        validate_inputs(CareerPathInputs.model_validate(payload))
    assert exc_info.value.message == message


def test_describe_inputs_labels_fields():
    inputs = CareerPathInputs.model_validate(
        {"currentSkills": ["Go", "SQL"], "careerGoal": "SRE", "careerStage": "student", "educationLevel": "BSc"}
    )

    lines = describe_inputs(inputs).splitlines()

    assert "- Current Skills: Go, SQL" in lines
    assert "- Career Goal: SRE" in lines
    assert "- Major: N/A" in lines


def test_suggestion_answers_split_comma_separated_knowledge():
    answers = SuggestionAnswers.model_validate(
        {
            "careerGoals": "Data Engineer",
            "experience": "beginner",
            "learningStyle": "visual",
            "timeCommitment": "5 hours",
            "currentKnowledge": "python, sql,  ",
        }
    )

    assert answers.current_knowledge == ["python", "sql"]
