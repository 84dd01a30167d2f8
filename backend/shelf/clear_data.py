"""Reset every entity file except users.json to an empty array.

Usage: python -m shelf.clear_data
"""

import asyncio
import logging

from .config import get_settings
from .database import Storage

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    storage = Storage.from_settings(settings)
    cleared = asyncio.run(storage.clear_data())
    logger.info(f"Cleared {len(cleared)} data files; user accounts kept")


if __name__ == "__main__":
    main()
