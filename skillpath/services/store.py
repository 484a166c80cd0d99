"""Targeted writes against the user document.

Handlers never replace a whole user document: every mutation here touches a
single embedded list, so it cannot clobber counters or progress written by a
concurrent request.
"""

import logging
from typing import List

from beanie import PydanticObjectId
from pydantic import BaseModel

from ..schemas.progress import RoadmapProgress
from ..schemas.users import User
from ..utils.errors import NotFoundError

logger = logging.getLogger(__name__)


async def get_user(user_id: PydanticObjectId) -> User:
    """Load a user or raise NotFoundError."""
    user = await User.get(user_id)
    if user is None:
        raise NotFoundError("User", str(user_id))
    return user


async def push_entry(user_id: PydanticObjectId, field: str, entry: BaseModel) -> None:
    """Append an embedded entry to one of the user's lists."""
    result = await User.find_one(User.id == user_id).update({"$push": {field: entry}})
    if not result.matched_count:
        raise NotFoundError("User", str(user_id))
    logger.debug(f"Appended {type(entry).__name__} to {field} for user {user_id}")


async def pull_entry(user_id: PydanticObjectId, field: str, entry_id: PydanticObjectId) -> bool:
    """Remove the embedded entry with ``entry_id``. Returns False if absent."""
    result = await User.find_one(User.id == user_id).update({"$pull": {field: {"id": entry_id}}})
    return bool(result.modified_count)


async def add_to_set(user_id: PydanticObjectId, field: str, value) -> bool:
    """Add ``value`` to a list unless present. Returns True if it was added."""
    result = await User.find_one({"_id": user_id, field: {"$ne": value}}).update({"$push": {field: value}})
    return bool(result.modified_count)


async def remove_value(user_id: PydanticObjectId, field: str, value) -> bool:
    """Remove every occurrence of ``value`` from a list. Returns True if one was removed."""
    result = await User.find_one(User.id == user_id).update({"$pull": {field: value}})
    return bool(result.modified_count)


async def set_progress_if_unchanged(
    user_id: PydanticObjectId, expected_version: int, progress: List[RoadmapProgress]
) -> bool:
    """Replace ``roadmap_progress`` only if no one wrote it since ``expected_version``."""
    # Documents created before versioning have no field at all
    version_filter = expected_version if expected_version else {"$in": [0, None]}
    result = await User.find_one({"_id": user_id, "progress_version": version_filter}).update(
        {"$set": {"roadmap_progress": progress}, "$inc": {"progress_version": 1}}
    )
    return bool(result.modified_count)
