"""
Bootcamp API - test configuration and fixtures.
"""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from api import create_app
from bootcamp_api.adapters.mongodb import MongoQueryTranslator
from bootcamp_api.container import COLLECTIONS, ServiceContainer
from bootcamp_api.core.config import Settings
from bootcamp_api.core.models import GeoLocation
from bootcamp_api.core.schemas import FILTER_FIELD_TYPES
from bootcamp_api.core.security import create_access_token
from bootcamp_api.orchestrator import ResultsOrchestrator
from bootcamp_api.services.bootcamps import COURSES_POPULATE
from bootcamp_api.services.common import utcnow
from bootcamp_api.services.courses import BOOTCAMP_SUMMARY_POPULATE
from tests.fakes import (
    FakeGeocoder,
    InMemoryAggregateStore,
    InMemoryDatabase,
    InMemoryQueryExecutor,
    InMemoryRepository,
)


UNIQUE_KEYS = {
    "bootcamps": (("name",),),
    "users": (("email",),),
    "reviews": (("bootcamp", "user"),),
}


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret="test-jwt-secret", jwt_expire_minutes=5, log_level="WARNING")


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def repositories(database) -> Dict[str, InMemoryRepository]:
    return {
        name: InMemoryRepository(database, name, unique=UNIQUE_KEYS.get(name, ()))
        for name in COLLECTIONS
    }


@pytest.fixture
def aggregate_store(database) -> InMemoryAggregateStore:
    return InMemoryAggregateStore(database)


def make_listing(database, name, **kwargs) -> ResultsOrchestrator:
    return ResultsOrchestrator(
        query_translator=MongoQueryTranslator(),
        query_executor=InMemoryQueryExecutor(database, name),
        field_types=FILTER_FIELD_TYPES[name],
        **kwargs,
    )


BOSTON = GeoLocation(
    latitude=42.3478,
    longitude=-71.1043,
    formatted_address="233 Bay State Rd, Boston, MA 02215, US",
    street="233 Bay State Rd",
    city="Boston",
    state="MA",
    zipcode="02215",
    country="US",
)

NEW_YORK = GeoLocation(
    latitude=40.7506,
    longitude=-73.9972,
    formatted_address="45 W 25th St, New York, NY 10001, US",
    street="45 W 25th St",
    city="New York",
    state="NY",
    zipcode="10001",
    country="US",
)


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        {
            "233 Bay State Rd Boston MA 02215": BOSTON,
            "02215": BOSTON,
            "45 W 25th St New York NY 10001": NEW_YORK,
            "10001": NEW_YORK,
        }
    )


@pytest.fixture
def container(settings, database, repositories, aggregate_store, geocoder) -> ServiceContainer:
    listings = {
        "bootcamps": make_listing(database, "bootcamps", populate=[COURSES_POPULATE]),
        "courses": make_listing(database, "courses", populate=[BOOTCAMP_SUMMARY_POPULATE]),
        "reviews": make_listing(database, "reviews", populate=[BOOTCAMP_SUMMARY_POPULATE]),
        "users": make_listing(database, "users", hidden_fields=["password"]),
    }
    return ServiceContainer(
        settings=settings,
        repositories=repositories,
        aggregate_store=aggregate_store,
        listings=listings,
        geocoder=geocoder,
    )


@pytest.fixture
def client(settings, container) -> TestClient:
    return TestClient(create_app(settings=settings, container=container))


@pytest.fixture
def make_user(repositories) -> Callable[..., Dict[str, Any]]:
    """Insert a user directly; password hashing is not needed for token auth."""
    counter = {"n": 0}

    def factory(role: str = "user", **overrides) -> Dict[str, Any]:
        counter["n"] += 1
        document = {
            "name": f"Test {role} {counter['n']}",
            "email": f"{role}{counter['n']}@example.com",
            "role": role,
            "password": "not-a-real-hash",
            "createdAt": utcnow(),
        }
        document.update(overrides)
        return repositories["users"].insert(document)

    return factory


@pytest.fixture
def auth_headers(settings) -> Callable[[Dict[str, Any]], Dict[str, str]]:
    def factory(user: Dict[str, Any]) -> Dict[str, str]:
        token = create_access_token(user["_id"], settings)
        return {"Authorization": f"Bearer {token}"}

    return factory


@pytest.fixture
def bootcamp_payload() -> Dict[str, Any]:
    return {
        "name": "Devworks Bootcamp",
        "description": "Full stack web development",
        "website": "https://devworks.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "address": "233 Bay State Rd Boston MA 02215",
        "careers": ["Web Development", "UI/UX", "Business"],
        "housing": True,
        "jobAssistance": True,
    }


@pytest.fixture
def course_payload() -> Dict[str, Any]:
    return {
        "title": "Front End Web Development",
        "description": "HTML, CSS and JavaScript",
        "weeks": 8,
        "tuition": 8000,
        "minimumSkill": "beginner",
        "scholarshipAvailable": True,
    }
