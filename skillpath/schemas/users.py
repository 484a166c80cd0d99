from datetime import datetime
from typing import List, Optional

from beanie import Document, PydanticObjectId
from fastapi_users.db import BeanieBaseUser
from fastapi_users.schemas import BaseUser, BaseUserCreate, BaseUserUpdate
from fastapi_users_db_beanie import BaseOAuthAccount
from pydantic import Field

from .generation import GeneratedRoadmap, SavedCareerPath, SavedSuggestion
from .progress import RoadmapProgress
from .usage import UsageCounter


class OAuthAccount(BaseOAuthAccount):
    pass


class User(BeanieBaseUser, Document):
    """Account record; owns all of a user's usage, progress and saved content."""

    username: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    oauth_accounts: List[OAuthAccount] = Field(default_factory=list)

    roadmap_progress: List[RoadmapProgress] = Field(default_factory=list)
    progress_version: int = 0
    bookmarked_roadmaps: List[str] = Field(default_factory=list)
    followed_roadmaps: List[PydanticObjectId] = Field(default_factory=list)

    roadmap_usage: List[UsageCounter] = Field(default_factory=list)
    chatbot_usage: List[UsageCounter] = Field(default_factory=list)
    ai_suggestions_usage: List[UsageCounter] = Field(default_factory=list)
    career_track_usage: List[UsageCounter] = Field(default_factory=list)

    ai_generated_roadmaps: List[GeneratedRoadmap] = Field(default_factory=list)
    saved_ai_suggestions: List[SavedSuggestion] = Field(default_factory=list)
    saved_career_paths: List[SavedCareerPath] = Field(default_factory=list)

    class Settings(BeanieBaseUser.Settings):
        name = "users"


class UserRead(BaseUser[PydanticObjectId]):
    username: Optional[str] = None
    bookmarked_roadmaps: List[str] = Field(default_factory=list)


class UserCreate(BaseUserCreate):
    username: Optional[str] = None


class UserUpdate(BaseUserUpdate):
    username: Optional[str] = None
