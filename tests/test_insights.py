from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

from skillpath.logic.mentor import build_insights, learning_streak, next_steps
from skillpath.schemas.generation import CareerPathInputs
from skillpath.schemas.insights import InsightsResponse
from skillpath.services.progress import toggle

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


def make_user(**overrides):
    fields = dict(
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


def complete(progress, roadmap_id, total, days_ago):
    """Complete one node for each ``days_ago`` entry, in the given order."""
    for i, days in enumerate(days_ago):
        toggle(progress, roadmap_id, f"{roadmap_id}-{i}", total_nodes=total, now=NOW - timedelta(days=days))
    return progress


def test_streak_counts_consecutive_days_back_from_today():
    days = {date(2025, 3, 14), date(2025, 3, 13), date(2025, 3, 12), date(2025, 3, 10)}

    assert learning_streak(days, date(2025, 3, 14)) == 3


def test_streak_is_zero_without_activity_today():
    assert learning_streak({date(2025, 3, 13), date(2025, 3, 12)}, date(2025, 3, 14)) == 0
    assert learning_streak(set(), date(2025, 3, 14)) == 0


def test_insights_summarise_progress():
    progress = complete([], "python", 10, [0, 1, 2, 40])
    complete(progress, "rust", 4, [60])
    user = make_user(roadmap_progress=progress, bookmarked_roadmaps=["python", "go"])

    insights = build_insights(user, now=NOW)

    assert [r.roadmap_id for r in insights.roadmap_progress] == ["python", "rust"]
    assert [r.completion_rate for r in insights.roadmap_progress] == [40.0, 25.0]
    assert (insights.total_progress.completed, insights.total_progress.total) == (5, 14)
    assert insights.total_progress.percentage == 36
    assert insights.streak.current == 3
    assert insights.streak.unique_active_days == 5
    assert insights.streak.average_nodes_per_day == 1.0
    assert insights.streak.last_activity == NOW
    assert (insights.activity.this_week, insights.activity.this_month) == (3, 3)
    assert insights.activity.most_active_roadmap.roadmap_id == "python"
    assert insights.roadmaps.bookmarked_with_progress == 1
    assert insights.roadmaps.bookmarked_without_progress == 1
    assert insights.recommendations == [
        'Resume progress on "rust" - you\'re 25.0% complete and close to a milestone',
        "You have 1 bookmarked roadmaps you haven't started yet",
    ]


def test_insights_for_new_user():
    insights = build_insights(make_user(), now=NOW)

    assert insights.total_progress.percentage == 0
    assert insights.streak.current == 0
    assert insights.activity.most_active_roadmap is None
    assert insights.recommendations == [
        "Focus on completing smaller milestones to build momentum in your learning journey",
        "Restart your learning streak - even 10 minutes daily can make a big difference",
    ]


def test_insights_serialise_camel_case():
    progress = complete([], "python", 10, [0])

    body = InsightsResponse(insights=build_insights(make_user(roadmap_progress=progress), now=NOW)).model_dump(
        by_alias=True
    )

    assert body["insights"]["totalProgress"] == {"completed": 1, "total": 10, "percentage": 10}
    assert body["insights"]["roadmapProgress"][0]["completionRate"] == 10.0
    assert body["insights"]["usage"]["aiSuggestions"]["remainingCount"] == 3


def test_next_steps_ordered_by_urgency():
    progress = complete([], "python", 10, [0] * 9)
    complete(progress, "rust", 10, [60, 60, 60])
    user = make_user(roadmap_progress=progress, bookmarked_roadmaps=["go"])

    response = next_steps(user, now=NOW)

    assert [s.type for s in response.suggestions] == [
        "finish_roadmap",
        "create_career_path",
        "revive_roadmap",
        "start_bookmarked",
        "use_ai_suggestions",
    ]
    finish, _, revive = response.suggestions[:3]
    assert finish.urgency.value == "urgent"
    assert finish.description == "You're 90.0% complete! Only 1 nodes left to finish."
    assert revive.priority.value == "low"
    assert "60 days" in revive.description
    assert response.metadata.priority_breakdown == {"urgent": 1, "high": 1, "medium": 1, "low": 3}
    assert response.metadata.user_stats.current_streak == 1


def test_streak_suggestions():
    active = make_user(roadmap_progress=complete([], "python", 20, [0, 1, 2]))
    lapsed = make_user(roadmap_progress=complete([], "python", 20, [5]))

    maintain = [s for s in next_steps(active, now=NOW).suggestions if s.type == "maintain_streak"]
    restart = [s for s in next_steps(lapsed, now=NOW).suggestions if s.type == "restart_streak"]

    assert maintain[0].title == "Maintain Your 3-Day Streak!"
    assert "5 days ago" in restart[0].description


def test_career_suggestions_use_latest_saved_path():
    inputs = CareerPathInputs(
        current_skills=["Go", "SQL"], career_goal="SRE", career_stage="student", education_level="BSc"
    )
    user = make_user(saved_career_paths=[SimpleNamespace(inputs=inputs)])

    steps = {s.type: s for s in next_steps(user, now=NOW).suggestions}

    assert steps["career_aligned"].title == "Skills for SRE"
    assert steps["skill_gap"].description.endswith("Go, SQL")
    assert "create_career_path" not in steps


def test_next_steps_capped_at_eight():
    progress = []
    for i in range(12):
        complete(progress, f"roadmap-{i}", 10, [0] * 9)

    response = next_steps(make_user(roadmap_progress=progress), now=NOW)

    assert len(response.suggestions) == 8
    assert response.metadata.total_suggestions > 8
