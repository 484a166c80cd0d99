"""Give official roadmaps missing a slug one derived from their name.

Run with ``python -m skillpath.scripts.backfill_slugs``.
"""

import asyncio
import logging

from ..db import init_db
from ..services.roadmaps import backfill_slugs
from ..utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def main() -> int:
    client = await init_db()
    try:
        return await backfill_slugs()
    finally:
        client.close()


def run() -> None:
    setup_logging()
    updated = asyncio.run(main())
    logger.info(f"Done, {updated} roadmaps updated")


if __name__ == "__main__":
    run()
