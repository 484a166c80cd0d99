"""Bookmarks of official roadmaps."""

from typing import List

from fastapi import APIRouter, Depends

from ..auth import current_active_user
from ..schemas.roadmaps import BookmarkResponse
from ..schemas.users import User
from ..services import bookmarks

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=List[str])
async def list_bookmarks(user: User = Depends(current_active_user)) -> List[str]:
    return bookmarks.list_bookmarks(user)


@router.get("/{roadmap_id}", response_model=BookmarkResponse)
async def check_bookmark(roadmap_id: str, user: User = Depends(current_active_user)) -> BookmarkResponse:
    return BookmarkResponse(roadmap_id=roadmap_id, bookmarked=bookmarks.is_bookmarked(user, roadmap_id))


@router.post("/{roadmap_id}", response_model=BookmarkResponse)
async def toggle_bookmark(roadmap_id: str, user: User = Depends(current_active_user)) -> BookmarkResponse:
    """Bookmark a roadmap, or remove the bookmark if it exists."""
    bookmarked = await bookmarks.toggle_bookmark(user, roadmap_id)
    return BookmarkResponse(roadmap_id=roadmap_id, bookmarked=bookmarked)
