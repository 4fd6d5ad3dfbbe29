"""
Load or wipe the sample data in ``data/``.

Usage:
    python seeder.py -i    # import users, bootcamps, courses and reviews
    python seeder.py -d    # delete everything from those collections
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pymongo import MongoClient

from bootcamp_api.adapters.mongodb import MongoAggregateStore, MongoRepository, ensure_indexes
from bootcamp_api.aggregates.maintainer import AVERAGE_COST, AVERAGE_RATING, AggregateMaintainer
from bootcamp_api.core.config import Settings
from bootcamp_api.core.interfaces import IAggregateStore, IGeocoder, IRepository
from bootcamp_api.core.logging_config import configure_logging
from bootcamp_api.core.security import hash_password
from bootcamp_api.services.common import slugify, utcnow

logger = logging.getLogger("seeder")

DATA_DIR = Path(__file__).parent / "data"

# Referenced collections first
SEED_ORDER = ("users", "bootcamps", "courses", "reviews")


def load_fixtures(data_dir: Path = DATA_DIR) -> Dict[str, List[Dict[str, Any]]]:
    """Read one JSON array per collection, e.g. ``data/bootcamps.json``."""
    fixtures = {}
    for name in SEED_ORDER:
        path = data_dir / f"{name}.json"
        with path.open(encoding="utf-8") as f:
            fixtures[name] = json.load(f)
    return fixtures


def import_data(
    repositories: Dict[str, IRepository],
    aggregate_store: IAggregateStore,
    fixtures: Dict[str, List[Dict[str, Any]]],
    geocoder: Optional[IGeocoder] = None,
) -> Dict[str, int]:
    """
    Insert fixture documents and compute the bootcamp averages.

    Passwords are hashed and bootcamps get their slug, as when created through
    the API. Locations are only filled in when a geocoder is given.

    Args:
        repositories: One repository per collection name
        aggregate_store: Used to recompute averageCost and averageRating
        fixtures: Documents per collection name
        geocoder: Optional address lookup

    Returns:
        Number of inserted documents per collection
    """
    counts = {}

    for name in SEED_ORDER:
        inserted = 0
        for fixture in fixtures.get(name, []):
            document = dict(fixture)
            document.setdefault("createdAt", utcnow())

            if name == "users":
                document["password"] = hash_password(document["password"])
            elif name == "bootcamps":
                document["slug"] = slugify(document["name"])
                if geocoder is not None and document.get("address"):
                    location = geocoder.geocode(document["address"])
                    if location is not None:
                        document["location"] = location.to_geojson()

            repositories[name].insert(document)
            inserted += 1

        counts[name] = inserted
        logger.info("Imported %d %s", inserted, name)

    bootcamp_ids = [doc["_id"] for doc in repositories["bootcamps"].find_many({})]
    for spec in (AVERAGE_COST, AVERAGE_RATING):
        maintainer = AggregateMaintainer(aggregate_store, spec)
        for bootcamp_id in bootcamp_ids:
            maintainer.recompute(bootcamp_id)

    return counts


def destroy_data(repositories: Dict[str, IRepository]) -> Dict[str, int]:
    """Delete every document of the seeded collections."""
    counts = {}
    for name in reversed(SEED_ORDER):
        counts[name] = repositories[name].delete_many({})
        logger.info("Deleted %d %s", counts[name], name)
    return counts


def main() -> None:
    if len(sys.argv) != 2 or sys.argv[1] not in ("-i", "-d"):
        print(__doc__)
        sys.exit(1)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    client = MongoClient(settings.mongo_uri)
    try:
        database = client[settings.mongo_database]
        repositories = {name: MongoRepository(database, name) for name in SEED_ORDER}

        if sys.argv[1] == "-i":
            ensure_indexes(database)

            geocoder = None
            if settings.geocoder_api_key:
                from bootcamp_api.adapters.mapquest import MapQuestGeocoder

                geocoder = MapQuestGeocoder.from_settings(settings)
            else:
                logger.warning("GEOCODER_API_KEY is not set; bootcamps get no location")

            import_data(repositories, MongoAggregateStore(database), load_fixtures(), geocoder)
            logger.info("Data imported")
        else:
            destroy_data(repositories)
            logger.info("Data destroyed")
    finally:
        client.close()


if __name__ == "__main__":
    main()
