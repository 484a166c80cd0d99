"""Usage endpoints: today's counts and limits per gated feature."""

from fastapi import APIRouter, Depends

from ..auth import current_active_user
from ..schemas.usage import FeatureKind, UsageOverview, UsageStatus
from ..schemas.users import User
from ..services import usage

router = APIRouter(prefix="/usage", tags=["usage"])


@router.get("/", response_model=UsageOverview)
async def get_usage_overview(user: User = Depends(current_active_user)) -> UsageOverview:
    """Today's usage of every gated feature."""
    return usage.get_usage_overview(user)


@router.get("/{feature}", response_model=UsageStatus)
async def get_feature_usage(feature: FeatureKind, user: User = Depends(current_active_user)) -> UsageStatus:
    return usage.get_usage(user, feature)
