"""
Wiring of repositories, aggregate maintainers, services and list pipelines.

Collaborators are constructed once and passed in explicitly; nothing looks up
a database connection globally.
"""

from typing import Dict, Optional

from pymongo.database import Database

from bootcamp_api.aggregates.maintainer import AVERAGE_COST, AVERAGE_RATING, AggregateMaintainer
from bootcamp_api.core.config import Settings
from bootcamp_api.core.interfaces import IAggregateStore, IGeocoder, IRepository
from bootcamp_api.core.schemas import FILTER_FIELD_TYPES
from bootcamp_api.orchestrator import ResultsOrchestrator
from bootcamp_api.services import (
    AuthService,
    BootcampService,
    CourseService,
    ReviewService,
    UserService,
)
from bootcamp_api.services.bootcamps import COURSES_POPULATE
from bootcamp_api.services.courses import BOOTCAMP_SUMMARY_POPULATE

COLLECTIONS = ("bootcamps", "courses", "reviews", "users")


class ServiceContainer:
    """Everything a request handler needs, built from injected collaborators."""

    def __init__(
        self,
        settings: Settings,
        repositories: Dict[str, IRepository],
        aggregate_store: IAggregateStore,
        listings: Dict[str, ResultsOrchestrator],
        geocoder: IGeocoder,
    ):
        """
        Args:
            settings: Application settings
            repositories: One repository per collection name
            aggregate_store: Grouping and write-back primitives
            listings: One advanced-results pipeline per collection name
            geocoder: Address lookup for bootcamp locations
        """
        self.settings = settings
        self.listings = listings

        self.bootcamps = BootcampService(
            repositories["bootcamps"],
            repositories["courses"],
            repositories["reviews"],
            geocoder,
        )
        self.courses = CourseService(
            repositories["courses"],
            repositories["bootcamps"],
            AggregateMaintainer(aggregate_store, AVERAGE_COST),
        )
        self.reviews = ReviewService(
            repositories["reviews"],
            repositories["bootcamps"],
            AggregateMaintainer(aggregate_store, AVERAGE_RATING),
        )
        self.users = UserService(repositories["users"])
        self.auth = AuthService(repositories["users"], settings)

    @classmethod
    def from_mongodb(
        cls,
        database: Database,
        settings: Settings,
        geocoder: Optional[IGeocoder] = None,
    ) -> "ServiceContainer":
        """
        Create the container for a MongoDB database.

        Args:
            database: Connected database handle
            settings: Application settings
            geocoder: Address lookup; a MapQuest client built from settings
                when omitted

        Returns:
            Configured ServiceContainer
        """
        from bootcamp_api.adapters.mapquest import MapQuestGeocoder
        from bootcamp_api.adapters.mongodb import MongoAggregateStore, MongoRepository

        repositories = {name: MongoRepository(database, name) for name in COLLECTIONS}
        limit = settings.default_page_limit

        listing_options = {
            "bootcamps": {"populate": [COURSES_POPULATE]},
            "courses": {"populate": [BOOTCAMP_SUMMARY_POPULATE]},
            "reviews": {"populate": [BOOTCAMP_SUMMARY_POPULATE]},
            "users": {"hidden_fields": ["password"]},
        }
        listings = {
            name: ResultsOrchestrator.from_mongodb(
                database,
                name,
                default_limit=limit,
                field_types=FILTER_FIELD_TYPES[name],
                **options,
            )
            for name, options in listing_options.items()
        }

        return cls(
            settings=settings,
            repositories=repositories,
            aggregate_store=MongoAggregateStore(database),
            listings=listings,
            geocoder=geocoder or MapQuestGeocoder.from_settings(settings),
        )
