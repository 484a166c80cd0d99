"""Bookmarks of official roadmaps and follows of custom roadmaps."""

import logging
from typing import List

from beanie import PydanticObjectId

from ..schemas.users import User
from . import store

logger = logging.getLogger(__name__)


def is_bookmarked(user: User, roadmap_id: str) -> bool:
    return roadmap_id in user.bookmarked_roadmaps


def list_bookmarks(user: User) -> List[str]:
    return list(user.bookmarked_roadmaps)


async def toggle_bookmark(user: User, roadmap_id: str) -> bool:
    """Bookmark ``roadmap_id`` or remove the bookmark.

    Returns:
        True if the roadmap is bookmarked afterwards
    """
    if await store.add_to_set(user.id, "bookmarked_roadmaps", roadmap_id):
        user.bookmarked_roadmaps.append(roadmap_id)
        logger.info(f"User {user.id} bookmarked roadmap {roadmap_id}")
        return True

    await store.remove_value(user.id, "bookmarked_roadmaps", roadmap_id)
    user.bookmarked_roadmaps = [r for r in user.bookmarked_roadmaps if r != roadmap_id]
    logger.info(f"User {user.id} removed bookmark for roadmap {roadmap_id}")
    return False


def is_following(user: User, roadmap_id: PydanticObjectId) -> bool:
    return any(str(followed) == str(roadmap_id) for followed in user.followed_roadmaps)


async def toggle_follow(user: User, roadmap_id: PydanticObjectId) -> str:
    """Follow or unfollow a custom roadmap.

    Returns:
        ``"followed"`` or ``"unfollowed"``
    """
    if await store.add_to_set(user.id, "followed_roadmaps", roadmap_id):
        user.followed_roadmaps.append(roadmap_id)
        return "followed"

    await store.remove_value(user.id, "followed_roadmaps", roadmap_id)
    user.followed_roadmaps = [r for r in user.followed_roadmaps if str(r) != str(roadmap_id)]
    return "unfollowed"
