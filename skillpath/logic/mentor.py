"""Learning mentor: quota-gated chat plus progress insights and next-step suggestions."""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Set

from ..ai.base import AIModel
from ..ai.prompts.base import join_values
from ..ai.prompts.mentor import MentorPrompt
from ..schemas.generation import ChatMessage, MentorChatRequest, MentorChatResponse
from ..schemas.insights import (
    ActivitySummary,
    CareerSummary,
    Insights,
    NextStep,
    NextStepsMetadata,
    NextStepsResponse,
    NextStepStats,
    Priority,
    RecentCompletion,
    RoadmapCounts,
    RoadmapInsight,
    StreakInfo,
    TotalProgress,
)
from ..schemas.progress import RoadmapProgress
from ..schemas.usage import DAILY_CAPS, FeatureKind
from ..schemas.users import User
from ..services import usage
from ..services.progress import stats as progress_stats
from ..utils.errors import ValidationFailure
from ..utils.utils import round_half_up

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 1000
HISTORY_TURNS = 8
RECENT_PER_ROADMAP = 3
RECENT_OVERALL = 10
MAX_NEXT_STEPS = 8

mentor_prompt = MentorPrompt()


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _date(moment: Optional[datetime]) -> str:
    return _aware(moment).date().isoformat() if moment else "Never"


def completion_rate(completed: int, total: int) -> float:
    """Percentage complete to one decimal; 0 when the total is unknown."""
    return round_half_up(completed / total * 100) if total > 0 else 0.0


def format_history(history: List[ChatMessage], turns: int = HISTORY_TURNS) -> str:
    lines = [f"{'User' if msg.type == 'user' else 'AI Mentor'}: {msg.content}" for msg in history[-turns:]]
    return "\n".join(lines) or "No previous conversation"


def _roadmap_lines(progress: List[RoadmapProgress]) -> List[str]:
    lines = []
    for entry in progress:
        done = len(entry.completed_nodes)
        recent = sorted(entry.completed_nodes, key=lambda n: _aware(n.timestamp), reverse=True)[:RECENT_PER_ROADMAP]
        recent_names = join_values([node.node_id for node in recent])
        lines.append(
            f"- {entry.roadmap_id}: {done}/{entry.total_nodes} nodes "
            f"({completion_rate(done, entry.total_nodes)}% complete), last updated {_date(entry.last_updated)}, "
            f"recently completed: {recent_names}"
        )
    return lines


def build_user_context(user: User, now: Optional[datetime] = None) -> str:
    """Summarise the user's progress, bookmarks, saved AI content and usage for the prompt."""
    now = now or datetime.now(timezone.utc)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    progress = user.roadmap_progress
    total_completed = sum(len(p.completed_nodes) for p in progress)
    total_nodes = sum(p.total_nodes for p in progress)

    completions = [
        (entry.roadmap_id, node) for entry in progress for node in entry.completed_nodes if node.timestamp
    ]
    completions.sort(key=lambda item: _aware(item[1].timestamp), reverse=True)
    week_activity = sum(1 for _, node in completions if _aware(node.timestamp) > week_ago)
    month_activity = sum(1 for _, node in completions if _aware(node.timestamp) > month_ago)
    recent_lines = [
        f'- Completed "{node.node_id}" in {roadmap_id} ({_date(node.timestamp)})'
        for roadmap_id, node in completions[:RECENT_OVERALL]
    ]

    started = {p.roadmap_id for p in progress}
    bookmarks = user.bookmarked_roadmaps
    with_progress = [b for b in bookmarks if b in started]
    without_progress = [b for b in bookmarks if b not in started]

    recent_ai = sorted(user.ai_generated_roadmaps, key=lambda r: _aware(r.created_at), reverse=True)[:3]
    recent_ai_titles = join_values([f'"{r.title}" ({_date(r.created_at)})' for r in recent_ai])

    career_lines = ["- No career path information available"]
    if user.saved_career_paths:
        latest = max(user.saved_career_paths, key=lambda c: _aware(c.created_at)).inputs
        career_lines = [
            f"- Career Goal: {latest.career_goal or 'Not specified'}",
            f"- Career Stage: {latest.career_stage or 'Not specified'}",
            f"- Current Skills: {join_values(latest.current_skills, 'Not specified')}",
            f"- Education Level: {latest.education_level or 'Not specified'}",
            f"- Goal Timeframe: {latest.goal_timeframe or 'Not specified'}",
        ]

    overview = usage.get_usage_overview(user)
    usage_line = (
        f"- Daily limits used: Roadmaps {overview.roadmap.usage_count}/{DAILY_CAPS[FeatureKind.ROADMAP]}, "
        f"Chat {overview.chatbot.usage_count}/{DAILY_CAPS[FeatureKind.CHATBOT]}, "
        f"AI Suggestions {overview.ai_suggestions.usage_count}/{DAILY_CAPS[FeatureKind.AI_SUGGESTIONS]}, "
        f"Career Track {overview.career_track.usage_count}/{DAILY_CAPS[FeatureKind.CAREER_TRACK]}"
    )

    sections = [
        "===== USER LEARNING PROFILE =====",
        f"User: {user.username or user.email}",
        f"Account Created: {_date(user.created_at)}",
        "",
        "===== OVERALL PROGRESS SUMMARY =====",
        f"- Total Progress: {total_completed}/{total_nodes} nodes completed "
        f"({completion_rate(total_completed, total_nodes)}% overall completion)",
        f"- Active Roadmaps: {len(progress)}",
        f"- Recent Activity: {week_activity} completions this week, {month_activity} this month",
        "",
        "===== ROADMAP PROGRESS DETAILS =====",
        *(_roadmap_lines(progress) or ["- No roadmap progress yet"]),
        "",
        "===== RECENT LEARNING ACTIVITY =====",
        *(recent_lines or ["- No recent activity"]),
        "",
        "===== ROADMAP ENGAGEMENT =====",
        f"- Bookmarked Roadmaps: {len(bookmarks)} total",
        f"  - With Progress: {join_values(with_progress)}",
        f"  - Not Started: {join_values(without_progress)}",
        f"- Following Custom Roadmaps: {len(user.followed_roadmaps)}",
        "",
        "===== AI-GENERATED CONTENT =====",
        f"- AI Generated Roadmaps: {len(user.ai_generated_roadmaps)} total, recent: {recent_ai_titles}",
        f"- Saved AI Suggestions: {len(user.saved_ai_suggestions)} total",
        "",
        "===== CAREER INFORMATION =====",
        *career_lines,
        "",
        "===== USAGE =====",
        usage_line,
    ]
    return "\n".join(sections)


def validate_message(message: str) -> str:
    if not message or not message.strip():
        raise ValidationFailure("Message is required", details={"code": "INVALID_INPUT"})
    if len(message) > MAX_MESSAGE_LENGTH:
        raise ValidationFailure(
            f"Message is too long. Please keep it under {MAX_MESSAGE_LENGTH} characters.",
            details={"code": "MESSAGE_TOO_LONG"},
        )
    return message


async def chat(user: User, request: MentorChatRequest, model: AIModel) -> MentorChatResponse:
    """Answer a mentor chat message and count the use.

    Raises:
        QuotaExceededError: If today's chat limit is reached
        ValidationFailure: If the message is empty or too long
        ProviderError: If the AI provider fails
    """
    usage.ensure_can_use(user, FeatureKind.CHATBOT)
    message = validate_message(request.message)

    answer = await model.text(
        mentor_prompt,
        user_context=build_user_context(user),
        history=format_history(request.conversation_history),
        message=message,
    )

    await usage.record_usage(user.id, FeatureKind.CHATBOT)
    usage_info = await usage.refresh_usage(user, FeatureKind.CHATBOT)
    return MentorChatResponse(response=answer, usage=usage_info)


# Progress insights


def roadmap_insights(progress_list: List[RoadmapProgress], now: datetime) -> List[RoadmapInsight]:
    """Per-roadmap completion and activity, highest completion rate first."""
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    insights = []
    for entry in progress_list:
        summary = progress_stats(progress_list, entry.roadmap_id)
        stamps = [_aware(node.timestamp) for node in summary.completed_nodes]
        insights.append(
            RoadmapInsight(
                roadmap_id=entry.roadmap_id,
                completed=summary.total_completed,
                total=entry.total_nodes,
                completion_rate=completion_rate(summary.total_completed, entry.total_nodes),
                last_updated=summary.last_updated,
                this_week=sum(1 for stamp in stamps if stamp > week_ago),
                this_month=sum(1 for stamp in stamps if stamp > month_ago),
                completed_nodes=summary.completed_nodes,
            )
        )
    insights.sort(key=lambda insight: insight.completion_rate, reverse=True)
    return insights


def recent_completions(progress_list: List[RoadmapProgress]) -> List[RecentCompletion]:
    """Every completed node across roadmaps, newest first."""
    completions = [
        RecentCompletion(node_id=node.node_id, roadmap_id=entry.roadmap_id, timestamp=_aware(node.timestamp))
        for entry in progress_list
        for node in entry.completed_nodes
        if node.timestamp
    ]
    completions.sort(key=lambda completion: completion.timestamp, reverse=True)
    return completions


def active_days(completions: Iterable[RecentCompletion]) -> Set[date]:
    """UTC calendar days on which at least one node was completed."""
    return {completion.timestamp.astimezone(timezone.utc).date() for completion in completions}


def learning_streak(days: Set[date], today: date) -> int:
    """Consecutive active days ending today; 0 when nothing was completed today."""
    streak = 0
    day = today
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def _most_active(insights: List[RoadmapInsight]) -> Optional[RoadmapInsight]:
    most_active = None
    for insight in insights:
        if insight.this_month > (most_active.this_month if most_active else 0):
            most_active = insight
    return most_active


def _recommendations(
    overall_rate: float,
    streak: int,
    week_total: int,
    total_completed: int,
    insights: List[RoadmapInsight],
    unstarted_bookmarks: int,
) -> List[str]:
    recommendations = []
    if overall_rate < 20:
        recommendations.append("Focus on completing smaller milestones to build momentum in your learning journey")
    elif overall_rate > 80:
        recommendations.append("Excellent progress! Consider exploring advanced topics or new domains")

    if streak == 0:
        recommendations.append("Restart your learning streak - even 10 minutes daily can make a big difference")
    elif streak > 7:
        recommendations.append(f"Outstanding {streak}-day streak! Your consistency is paying off")

    if week_total == 0 and total_completed > 0:
        recommendations.append("You haven't made progress this week. Consider setting aside time for learning")

    stagnant = [i for i in insights if i.this_month == 0 and 0 < i.completion_rate < 100]
    if stagnant:
        recommendations.append(
            f'Resume progress on "{stagnant[0].roadmap_id}" - you\'re {stagnant[0].completion_rate}% complete '
            "and close to a milestone"
        )

    near_completion = [i for i in insights if 80 < i.completion_rate < 100]
    if near_completion:
        recommendations.append(
            f"You're {near_completion[0].completion_rate}% done with \"{near_completion[0].roadmap_id}\" "
            "- finish strong to complete it!"
        )

    if unstarted_bookmarks:
        recommendations.append(f"You have {unstarted_bookmarks} bookmarked roadmaps you haven't started yet")
    return recommendations


def build_insights(user: User, now: Optional[datetime] = None) -> Insights:
    """Summarise progress, streak, activity and saved content, with recommendations."""
    now = _aware(now or datetime.now(timezone.utc))
    insights = roadmap_insights(user.roadmap_progress, now)
    completions = recent_completions(user.roadmap_progress)
    days = active_days(completions)
    streak = learning_streak(days, now.astimezone(timezone.utc).date())

    total_completed = sum(i.completed for i in insights)
    total_nodes = sum(i.total for i in insights)
    overall_rate = total_completed / total_nodes * 100 if total_nodes > 0 else 0.0
    week_total = sum(i.this_week for i in insights)

    started = {i.roadmap_id for i in insights}
    with_progress = sum(1 for b in user.bookmarked_roadmaps if b in started)
    without_progress = len(user.bookmarked_roadmaps) - with_progress
    latest_path = user.saved_career_paths[-1] if user.saved_career_paths else None

    return Insights(
        total_progress=TotalProgress(
            completed=total_completed, total=total_nodes, percentage=int(round_half_up(overall_rate, 0))
        ),
        roadmap_progress=insights,
        streak=StreakInfo(
            current=streak,
            last_activity=completions[0].timestamp if completions else None,
            unique_active_days=len(days),
            average_nodes_per_day=round_half_up(total_completed / len(days)) if days else 0.0,
        ),
        activity=ActivitySummary(
            this_week=week_total,
            this_month=sum(i.this_month for i in insights),
            most_active_roadmap=_most_active(insights),
            recent_completions=completions[:RECENT_OVERALL],
        ),
        roadmaps=RoadmapCounts(
            bookmarked=len(user.bookmarked_roadmaps),
            following=len(user.followed_roadmaps),
            ai_generated=len(user.ai_generated_roadmaps),
            active_roadmaps=len(insights),
            bookmarked_with_progress=with_progress,
            bookmarked_without_progress=without_progress,
        ),
        career=CareerSummary(
            paths_saved=len(user.saved_career_paths),
            latest_goal=(latest_path.inputs.career_goal or None) if latest_path else None,
            ai_suggestions_saved=len(user.saved_ai_suggestions),
        ),
        usage=usage.get_usage_overview(user),
        recommendations=_recommendations(
            overall_rate, streak, week_total, total_completed, insights, without_progress
        ),
    )


def _roadmap_steps(insights: List[RoadmapInsight], now: datetime) -> List[NextStep]:
    steps = []
    for insight in insights:
        if 80 <= insight.completion_rate < 100:
            remaining = insight.total - insight.completed
            steps.append(
                NextStep(
                    type="finish_roadmap",
                    roadmap_id=insight.roadmap_id,
                    title=f"Finish {insight.roadmap_id} Roadmap",
                    description=(
                        f"You're {insight.completion_rate}% complete! Only {remaining} nodes left to finish."
                    ),
                    priority=Priority.HIGH,
                    urgency=Priority.URGENT if insight.completion_rate >= 90 else Priority.HIGH,
                    details={"completed": insight.completed, "total": insight.total, "remaining": remaining},
                )
            )

    active = [i for i in insights if 20 <= i.completion_rate < 80 and i.this_month > 0]
    active.sort(key=lambda insight: insight.this_month, reverse=True)
    for insight in active[:2]:
        steps.append(
            NextStep(
                type="continue_active",
                roadmap_id=insight.roadmap_id,
                title=f"Continue {insight.roadmap_id} Progress",
                description=(
                    f"Great momentum! You've completed {insight.this_month} nodes this month. Keep going!"
                ),
                priority=Priority.MEDIUM,
                details={"completionRate": insight.completion_rate, "recentProgress": insight.this_month},
            )
        )

    stagnant = [i for i in insights if 20 <= i.completion_rate < 100 and i.this_month == 0]
    for insight in stagnant[:2]:
        idle_days = (now - _aware(insight.last_updated)).days if insight.last_updated else 0
        steps.append(
            NextStep(
                type="revive_roadmap",
                roadmap_id=insight.roadmap_id,
                title=f"Revive {insight.roadmap_id} Learning",
                description=(
                    f"You made good progress ({insight.completion_rate}% complete) but haven't updated in "
                    f"{idle_days} days. Time to get back on track!"
                ),
                priority=Priority.MEDIUM if insight.completion_rate > 50 else Priority.LOW,
                details={"completionRate": insight.completion_rate, "daysSinceUpdate": idle_days},
            )
        )
    return steps


def _bookmark_steps(bookmarks: List[str], by_id: Dict[str, RoadmapInsight]) -> List[NextStep]:
    steps = []
    barely_started = [b for b in bookmarks if b in by_id and by_id[b].completion_rate < 20]
    for roadmap_id in barely_started[:2]:
        steps.append(
            NextStep(
                type="bookmarked_low_progress",
                roadmap_id=roadmap_id,
                title=f"Start {roadmap_id} Properly",
                description=(
                    f"You bookmarked this but only completed {by_id[roadmap_id].completed} nodes. "
                    "Give it a proper start!"
                ),
                priority=Priority.MEDIUM,
            )
        )

    for roadmap_id in [b for b in bookmarks if b not in by_id][:3]:
        steps.append(
            NextStep(
                type="start_bookmarked",
                roadmap_id=roadmap_id,
                title=f"Start {roadmap_id} Roadmap",
                description=(
                    "You bookmarked this roadmap but haven't started yet. Ready to begin your learning journey?"
                ),
                priority=Priority.LOW,
            )
        )
    return steps


def _career_steps(user: User) -> List[NextStep]:
    if not user.saved_career_paths:
        return []
    inputs = user.saved_career_paths[-1].inputs
    goal = inputs.career_goal
    steps = [
        NextStep(
            type="career_aligned",
            title=f"Skills for {goal or 'Your Career Goal'}",
            description=(
                f"Focus on roadmaps that align with your {goal} goal in the {inputs.career_stage} stage. "
                f"Target completion within {inputs.goal_timeframe or 'your timeframe'}."
            ),
            priority=Priority.HIGH,
            details={
                "goal": goal,
                "stage": inputs.career_stage,
                "timeframe": inputs.goal_timeframe,
                "skillsCount": len(inputs.current_skills),
            },
        )
    ]
    if goal and inputs.current_skills:
        steps.append(
            NextStep(
                type="skill_gap",
                title="Fill Skill Gaps",
                description=(
                    f"Based on your {goal} goal, consider strengthening areas not covered in your current skills: "
                    f"{join_values(inputs.current_skills)}"
                ),
                priority=Priority.MEDIUM,
            )
        )
    return steps


def _streak_steps(streak: int, completions: List[RecentCompletion], now: datetime) -> List[NextStep]:
    if streak == 0 and completions:
        last = completions[0]
        idle_days = (now - last.timestamp).days
        return [
            NextStep(
                type="restart_streak",
                title="Restart Your Learning Streak",
                description=(
                    f"You had a good learning rhythm before! Your last activity was {idle_days} days ago. "
                    "Start a new streak today."
                ),
                priority=Priority.MEDIUM,
                details={"daysSinceActivity": idle_days, "lastRoadmap": last.roadmap_id},
            )
        ]
    if streak >= 3:
        return [
            NextStep(
                type="maintain_streak",
                title=f"Maintain Your {streak}-Day Streak!",
                description="Excellent consistency! Keep your learning momentum going with any roadmap.",
                priority=Priority.HIGH,
                details={"currentStreak": streak},
            )
        ]
    return []


def next_steps(user: User, now: Optional[datetime] = None) -> NextStepsResponse:
    """Rule-based next steps from progress, bookmarks, career plans and remaining quota.

    Suggestions are ordered by urgency (or priority when no urgency is set)
    and capped at eight; the metadata counts all of them.
    """
    now = _aware(now or datetime.now(timezone.utc))
    insights = roadmap_insights(user.roadmap_progress, now)
    by_id = {insight.roadmap_id: insight for insight in insights}
    completions = recent_completions(user.roadmap_progress)
    streak = learning_streak(active_days(completions), now.astimezone(timezone.utc).date())
    overview = usage.get_usage_overview(user)

    steps = _roadmap_steps(insights, now)
    steps += _bookmark_steps(user.bookmarked_roadmaps, by_id)
    steps += _career_steps(user)
    steps += _streak_steps(streak, completions, now)

    recent_ai = sorted(user.ai_generated_roadmaps, key=lambda r: _aware(r.created_at), reverse=True)[:3]
    for generated in [r for r in recent_ai if r.title not in by_id][:2]:
        steps.append(
            NextStep(
                type="use_ai_roadmap",
                roadmap_id=generated.title,
                title="Start Your AI-Generated Roadmap",
                description=(
                    f'You created "{generated.title}" but haven\'t started it yet. Put your custom roadmap to use!'
                ),
                priority=Priority.MEDIUM,
            )
        )

    if overview.ai_suggestions.remaining_count > 0 and insights:
        steps.append(
            NextStep(
                type="use_ai_suggestions",
                title="Get AI Learning Suggestions",
                description=(
                    f"You have {overview.ai_suggestions.remaining_count} AI suggestions remaining today. "
                    "Get personalized recommendations!"
                ),
                priority=Priority.LOW,
                details={
                    "remaining": overview.ai_suggestions.remaining_count,
                    "total": DAILY_CAPS[FeatureKind.AI_SUGGESTIONS],
                },
            )
        )
    if overview.career_track.remaining_count > 0 and not user.saved_career_paths:
        steps.append(
            NextStep(
                type="create_career_path",
                title="Create Your Career Path",
                description=(
                    "Plan your learning journey with a personalized career path. "
                    "Define your goals and get structured guidance."
                ),
                priority=Priority.MEDIUM,
            )
        )

    total_completed = sum(i.completed for i in insights)
    total_nodes = sum(i.total for i in insights)
    overall_rate = completion_rate(total_completed, total_nodes)
    barely_started = [i for i in insights if i.completion_rate < 20]
    if len(barely_started) >= 3 and overall_rate < 10:
        steps.append(
            NextStep(
                type="build_momentum",
                title="Build Learning Momentum",
                description=(
                    f"You've started {len(insights)} roadmaps but have {len(barely_started)} roadmaps with less "
                    "than 20% completion. Focus on one roadmap to build momentum."
                ),
                priority=Priority.HIGH,
            )
        )

    # sort() is stable, so equal ranks keep rule order
    steps.sort(key=lambda step: step.rank, reverse=True)
    breakdown = {"urgent": sum(1 for s in steps if s.urgency == Priority.URGENT)}
    for level in (Priority.HIGH, Priority.MEDIUM, Priority.LOW):
        breakdown[level.value] = sum(1 for s in steps if s.priority == level)

    return NextStepsResponse(
        suggestions=steps[:MAX_NEXT_STEPS],
        metadata=NextStepsMetadata(
            total_suggestions=len(steps),
            priority_breakdown=breakdown,
            user_stats=NextStepStats(
                total_roadmaps=len(insights),
                total_completed_nodes=total_completed,
                total_nodes=total_nodes,
                overall_completion_rate=overall_rate,
                current_streak=streak,
                bookmarked_roadmaps=len(user.bookmarked_roadmaps),
                ai_generated_roadmaps=len(user.ai_generated_roadmaps),
                has_career_path=bool(user.saved_career_paths),
            ),
            usage_limits=overview,
            last_updated=now,
        ),
    )
