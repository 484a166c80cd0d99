import math
import re
from typing import Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId


def slugify(name: str) -> str:
    """Turn a roadmap name into its URL slug."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def parse_object_id(value: str) -> Optional[PydanticObjectId]:
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        return None


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to ``digits`` decimals with halves going up rather than to even."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
