"""Schema definitions for roadmaps and their node trees."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Optional

from beanie import Document, Indexed, Insert, PydanticObjectId, Replace, before_event
from pydantic import BaseModel, ConfigDict, Field

from ..utils.utils import round_half_up, slugify


class RoadmapNode(BaseModel):
    """A topic in a roadmap tree. Each node exclusively owns its children."""

    name: str = Field(..., min_length=1)
    timeframe: Optional[str] = Field(None, description="Time to spend on this step (top-level nodes only)")
    preferred: bool = False
    divider_text: Optional[str] = Field(None, alias="dividerText")
    children: List["RoadmapNode"] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def walk(self) -> Iterator["RoadmapNode"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count_nodes(self) -> int:
        return sum(1 for _ in self.walk())

    def depth(self) -> int:
        """Number of levels in the tree, counting this node."""
        if not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)


RoadmapNode.model_rebuild()


class Roadmap(Document):
    """An official roadmap, addressed by its slug."""

    name: str
    slug: Annotated[Optional[str], Indexed(unique=True, sparse=True)] = None
    children: List[RoadmapNode] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "roadmaps"

    @before_event(Insert, Replace)
    def fill_slug(self):
        if not self.slug and self.name:
            self.slug = slugify(self.name)
        self.updated_at = datetime.utcnow()


class RoadmapRead(BaseModel):
    name: str
    children: List[RoadmapNode]


class RoadmapType(str, Enum):
    CUSTOM = "custom"
    TEMPLATE = "template"
    OFFICIAL = "official"


class Rating(BaseModel):
    user_id: PydanticObjectId
    value: int = Field(..., ge=1, le=5)
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class RatingStats(BaseModel):
    average_rating: float = 0
    rating_count: int = 0


class RoadmapStructure(BaseModel):
    """Free-form graph the roadmap editor produces."""

    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    edges: List[Dict[str, Any]] = Field(default_factory=list)


class RoadmapPalette(BaseModel):
    primary: Optional[str] = None
    secondary: Optional[str] = None
    connection: Optional[str] = None
    text: Optional[str] = None


class RoadmapBackground(BaseModel):
    variant: Optional[str] = None
    color: Optional[str] = None
    gap: Optional[float] = None
    size: Optional[float] = None


class RoadmapDisplaySettings(BaseModel):
    palette: RoadmapPalette = Field(default_factory=RoadmapPalette)
    background: RoadmapBackground = Field(default_factory=RoadmapBackground)


class CustomRoadmapBase(BaseModel):
    """Fields a user can set on a custom roadmap."""

    title: str = Field(..., min_length=1)
    description: str = ""
    structure: RoadmapStructure = Field(default_factory=RoadmapStructure)
    display_settings: RoadmapDisplaySettings = Field(default_factory=RoadmapDisplaySettings)
    type: RoadmapType = RoadmapType.CUSTOM
    is_private: bool = True


class CustomRoadmapCreate(CustomRoadmapBase):
    pass


class CustomRoadmapUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    structure: Optional[RoadmapStructure] = None
    display_settings: Optional[RoadmapDisplaySettings] = None
    is_private: Optional[bool] = None


class CustomRoadmap(Document, CustomRoadmapBase):
    """A user-authored roadmap."""

    created_by: PydanticObjectId
    ratings: List[Rating] = Field(default_factory=list)
    rating_stats: RatingStats = Field(default_factory=RatingStats)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_updated: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "custom_roadmaps"
        indexes = [
            [("created_by", 1)],
            [("is_private", 1)],
            [("title", "text"), ("description", "text")],
        ]

    def rate(self, user_id: PydanticObjectId, value: int) -> None:
        """Record ``user_id``'s rating, replacing any earlier one."""
        self.ratings = [r for r in self.ratings if r.user_id != user_id]
        self.ratings.append(Rating(user_id=user_id, value=value))
        self.refresh_rating_stats()

    def refresh_rating_stats(self) -> None:
        if not self.ratings:
            self.rating_stats = RatingStats(average_rating=0, rating_count=0)
            return
        total = sum(r.value for r in self.ratings)
        self.rating_stats = RatingStats(
            average_rating=round_half_up(total / len(self.ratings)),
            rating_count=len(self.ratings),
        )


class CustomRoadmapRead(CustomRoadmapBase):
    id: PydanticObjectId
    created_by: PydanticObjectId
    rating_stats: RatingStats
    created_at: datetime
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True)


class RateRequest(BaseModel):
    value: int = Field(..., ge=1, le=5)


class FollowResponse(BaseModel):
    action: str
    following: bool


class BookmarkResponse(BaseModel):
    roadmap_id: str = Field(..., serialization_alias="roadmapId")
    bookmarked: bool

    model_config = ConfigDict(populate_by_name=True)
