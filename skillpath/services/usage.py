"""Usage tracking service.

Each gated feature keeps a list of per-day counters on the user document.
Days are ISO calendar dates in UTC, so bucketing does not depend on the
host's local time zone.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from beanie import PydanticObjectId

from ..schemas.usage import DAILY_CAPS, USAGE_FIELDS, FeatureKind, UsageCounter, UsageOverview, UsageStatus
from ..schemas.users import User
from ..utils.errors import QuotaExceededError

logger = logging.getLogger(__name__)


def today_key(now: Optional[datetime] = None) -> str:
    """Return the UTC calendar day for ``now`` as ``YYYY-MM-DD``."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date().isoformat()


def _day(today: Optional[str | date]) -> str:
    if today is None:
        return today_key()
    if isinstance(today, date):
        return today.isoformat()
    return today


def _find_today(counters: List[UsageCounter], day: str) -> Optional[UsageCounter]:
    return next((counter for counter in counters if counter.day == day), None)


def check(counters: List[UsageCounter], cap: int, today: Optional[str | date] = None) -> UsageStatus:
    """Report whether a feature may be used today.

    Args:
        counters: The feature's counters from the user document
        cap: Daily cap for the feature
        today: Day to check; defaults to the current UTC day

    Returns:
        UsageStatus with ``can_use`` false once today's count reaches the cap
    """
    current = _find_today(counters, _day(today))
    if current is None:
        return UsageStatus(can_use=True, usage_count=0, remaining_count=cap)

    return UsageStatus(
        can_use=current.count < cap,
        usage_count=current.count,
        remaining_count=max(0, cap - current.count),
    )


def increment(counters: List[UsageCounter], today: Optional[str | date] = None) -> List[UsageCounter]:
    """Record one use for today, creating today's counter if needed."""
    day = _day(today)
    current = _find_today(counters, day)
    if current is not None:
        current.count += 1
    else:
        counters.append(UsageCounter(day=day, count=1))
    return counters


def counters_for(user: User, feature: FeatureKind) -> List[UsageCounter]:
    return getattr(user, USAGE_FIELDS[feature])


def get_usage(user: User, feature: FeatureKind, today: Optional[str | date] = None) -> UsageStatus:
    """Get a user's usage status for a feature."""
    return check(counters_for(user, feature), DAILY_CAPS[feature], today)


def get_usage_overview(user: User) -> UsageOverview:
    day = today_key()
    return UsageOverview(
        roadmap=get_usage(user, FeatureKind.ROADMAP, day),
        chatbot=get_usage(user, FeatureKind.CHATBOT, day),
        ai_suggestions=get_usage(user, FeatureKind.AI_SUGGESTIONS, day),
        career_track=get_usage(user, FeatureKind.CAREER_TRACK, day),
    )


def ensure_can_use(user: User, feature: FeatureKind, status_code: int = 429) -> UsageStatus:
    """Raise QuotaExceededError when the daily cap is already reached."""
    usage = get_usage(user, feature)
    if not usage.can_use:
        logger.info(f"User {user.id} hit the daily {feature.value} limit ({usage.usage_count})")
        raise QuotaExceededError(feature.value, usage.usage_count, status_code=status_code)
    return usage


async def record_usage(
    user_id: PydanticObjectId, feature: FeatureKind, status_code: int = 429, max_attempts: int = 3
) -> None:
    """Atomically count one use of a feature, never exceeding its cap.

    The increment is a conditional update on the stored document: either
    today's counter is below the cap and gets ``$inc``, or no counter exists
    for today and one is pushed. Concurrent requests cannot both pass.

    Raises:
        QuotaExceededError: If the cap was reached, possibly by a concurrent request
    """
    field = USAGE_FIELDS[feature]
    cap = DAILY_CAPS[feature]
    collection = User.get_motor_collection()

    for _ in range(max_attempts):
        day = today_key()

        result = await collection.update_one(
            {"_id": user_id, field: {"$elemMatch": {"day": day, "count": {"$lt": cap}}}},
            {"$inc": {f"{field}.$.count": 1}},
        )
        if result.modified_count:
            return

        result = await collection.update_one(
            {"_id": user_id, f"{field}.day": {"$ne": day}},
            {"$push": {field: {"day": day, "count": 1}}},
        )
        if result.modified_count:
            return

        # Either today's counter is at the cap, or it was created between the two updates
        doc = await collection.find_one({"_id": user_id}, {field: 1})
        counters = [UsageCounter(**c) for c in (doc or {}).get(field, [])]
        status = check(counters, cap, day)
        if not status.can_use:
            raise QuotaExceededError(feature.value, status.usage_count, status_code=status_code)

    raise QuotaExceededError(feature.value, cap, status_code=status_code)


async def refresh_usage(user: User, feature: FeatureKind) -> UsageStatus:
    """Reload the user's counters after an atomic update and report usage."""
    await user.sync()
    return get_usage(user, feature)
