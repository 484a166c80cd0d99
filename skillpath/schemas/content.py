"""Schemas for aggregated article feeds."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """An article fetched from an external feed. Never persisted."""

    title: str
    url: str
    tag: str
    published_at: Optional[str] = None
    source: str
    image: Optional[str] = None
    article_id: str = Field(..., serialization_alias="articleId")
    description: Optional[str] = None
    author: Optional[str] = None
    read_time: Optional[str] = Field(None, serialization_alias="readTime")

    model_config = ConfigDict(populate_by_name=True)


class SourceInfo(BaseModel):
    id: str
    name: str


class Pagination(BaseModel):
    current_page: int = Field(..., serialization_alias="currentPage")
    has_more: bool = Field(..., serialization_alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class SmartFeedResponse(BaseModel):
    articles: List[Article]
    pagination: Pagination
    available_sources: List[SourceInfo] = Field(..., serialization_alias="availableSources")

    model_config = ConfigDict(populate_by_name=True)


class SourcesResponse(BaseModel):
    sources: List[SourceInfo]
