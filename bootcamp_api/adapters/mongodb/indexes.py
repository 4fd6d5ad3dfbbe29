"""
Index setup for the bootcamp database.
"""

import logging

from pymongo import ASCENDING, GEOSPHERE
from pymongo.database import Database

logger = logging.getLogger(__name__)


def ensure_indexes(database: Database) -> None:
    """Create the unique and lookup indexes the services depend on."""
    database["bootcamps"].create_index([("name", ASCENDING)], unique=True)
    database["users"].create_index([("email", ASCENDING)], unique=True)

    # One review per user per bootcamp
    database["reviews"].create_index(
        [("bootcamp", ASCENDING), ("user", ASCENDING)], unique=True
    )
    database["courses"].create_index([("bootcamp", ASCENDING)])
    database["bootcamps"].create_index([("location", GEOSPHERE)])

    logger.info("Indexes ensured on database '%s'", database.name)
