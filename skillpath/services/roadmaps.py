"""Official roadmap lookup."""

import logging
import re
from typing import List, Optional

from ..schemas.roadmaps import Roadmap
from ..utils.utils import parse_object_id, slugify

logger = logging.getLogger(__name__)

# Name shapes official roadmaps were imported under, most specific first
NAME_PATTERNS = [
    "{name} Developer Roadmap for Beginners to Advanced 2025",
    "{name} Developer Roadmap 2025",
    "{name} Roadmap 2025",
    "{name} Developer",
    "{name}",
]


def name_from_identifier(identifier: str) -> str:
    """``"full-stack"`` -> ``"Full Stack"``."""
    return " ".join(word[:1].upper() + word[1:] for word in identifier.split("-"))


def candidate_names(identifier: str) -> List[str]:
    name = name_from_identifier(identifier)
    return [pattern.format(name=name) for pattern in NAME_PATTERNS]


async def find_roadmap(identifier: str) -> Optional[Roadmap]:
    """Find an official roadmap by slug, then id, then known name shapes."""
    roadmap = await Roadmap.find_one(Roadmap.slug == identifier)
    if roadmap:
        return roadmap

    object_id = parse_object_id(identifier)
    if object_id is not None:
        roadmap = await Roadmap.get(object_id)
        if roadmap:
            return roadmap

    for candidate in candidate_names(identifier):
        pattern = f"^{re.escape(candidate)}$"
        roadmap = await Roadmap.find_one({"name": {"$regex": pattern, "$options": "i"}})
        if roadmap:
            logger.debug(f"Resolved roadmap '{identifier}' by name '{candidate}'")
            return roadmap

    return None


async def backfill_slugs() -> int:
    """Give every official roadmap without a slug one derived from its name."""
    updated = 0
    async for roadmap in Roadmap.find({"$or": [{"slug": None}, {"slug": ""}, {"slug": {"$exists": False}}]}):
        roadmap.slug = slugify(roadmap.name)
        await roadmap.save()
        logger.info(f"Updated '{roadmap.name}' with slug '{roadmap.slug}'")
        updated += 1
    logger.info(f"Backfilled slugs for {updated} roadmaps")
    return updated
