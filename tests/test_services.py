import pytest

from bootcamp_api.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from bootcamp_api.core.schemas import (
    BootcampCreate,
    BootcampUpdate,
    CourseCreate,
    CourseUpdate,
    LoginRequest,
    RegisterRequest,
    ReviewCreate,
    ReviewUpdate,
    UpdatePasswordRequest,
    UserCreate,
)


@pytest.fixture
def publisher(make_user):
    return make_user("publisher")


@pytest.fixture
def bootcamp(container, publisher, bootcamp_payload):
    return container.bootcamps.create(BootcampCreate(**bootcamp_payload), publisher)


def course(tuition, **overrides):
    fields = {
        "title": f"Course {tuition}",
        "description": "Description",
        "weeks": 6,
        "tuition": tuition,
        "minimumSkill": "intermediate",
    }
    fields.update(overrides)
    return CourseCreate(**fields)


def review(rating, title="Great"):
    return ReviewCreate(title=title, text="Learned a lot", rating=rating)


def stored_bootcamp(repositories, bootcamp):
    return repositories["bootcamps"].documents[bootcamp["_id"]]


class TestBootcampService:
    def test_create_sets_owner_and_slug(self, bootcamp, publisher):
        assert bootcamp["user"] == publisher["_id"]
        assert bootcamp["slug"] == "devworks-bootcamp"
        assert "averageCost" not in bootcamp

    def test_get_populates_courses(self, container, bootcamp, publisher):
        container.courses.add(bootcamp["_id"], course(100), publisher)

        fetched = container.bootcamps.get(bootcamp["_id"])

        assert [c["title"] for c in fetched["courses"]] == ["Course 100"]

    def test_get_missing(self, container):
        with pytest.raises(NotFoundError):
            container.bootcamps.get("bootcamps-404")

    def test_rename_refreshes_slug(self, container, bootcamp, publisher):
        updated = container.bootcamps.update(
            bootcamp["_id"], BootcampUpdate(name="Code Masters"), publisher
        )

        assert updated["slug"] == "code-masters"

    def test_other_publisher_cannot_update(self, container, bootcamp, make_user):
        with pytest.raises(ForbiddenError):
            container.bootcamps.update(
                bootcamp["_id"], BootcampUpdate(housing=False), make_user("publisher")
            )

    def test_admin_can_update(self, container, bootcamp, make_user):
        updated = container.bootcamps.update(
            bootcamp["_id"], BootcampUpdate(housing=False), make_user("admin")
        )

        assert updated["housing"] is False

    def test_delete_cascades(self, container, repositories, bootcamp, publisher, make_user):
        container.courses.add(bootcamp["_id"], course(100), publisher)
        container.reviews.add(bootcamp["_id"], review(5), make_user("user"))

        container.bootcamps.delete(bootcamp["_id"], publisher)

        assert repositories["bootcamps"].documents == {}
        assert repositories["courses"].documents == {}
        assert repositories["reviews"].documents == {}

    def test_duplicate_name_conflicts(self, container, bootcamp, make_user, bootcamp_payload):
        with pytest.raises(ConflictError):
            container.bootcamps.create(BootcampCreate(**bootcamp_payload), make_user("publisher"))

    def test_create_geocodes_address(self, bootcamp):
        assert bootcamp["location"]["type"] == "Point"
        assert bootcamp["location"]["coordinates"] == [-71.1043, 42.3478]
        assert bootcamp["location"]["zipcode"] == "02215"
        assert bootcamp["address"] == "233 Bay State Rd Boston MA 02215"

    def test_unknown_address_is_rejected(self, container, repositories, publisher, bootcamp_payload):
        payload = BootcampCreate(**{**bootcamp_payload, "address": "Nowhere"})

        with pytest.raises(BadRequestError, match="Nowhere"):
            container.bootcamps.create(payload, publisher)

        assert repositories["bootcamps"].documents == {}

    def test_address_change_moves_location(self, container, bootcamp, publisher):
        updated = container.bootcamps.update(
            bootcamp["_id"],
            BootcampUpdate(address="45 W 25th St New York NY 10001"),
            publisher,
        )

        assert updated["location"]["city"] == "New York"
        assert updated["location"]["coordinates"] == [-73.9972, 40.7506]

    def test_other_updates_do_not_geocode(self, container, geocoder, bootcamp, publisher):
        geocoder.lookups.clear()

        container.bootcamps.update(bootcamp["_id"], BootcampUpdate(housing=False), publisher)

        assert geocoder.lookups == []

    def test_radius_search(self, container, bootcamp, make_user, bootcamp_payload):
        container.bootcamps.create(
            BootcampCreate(
                **{
                    **bootcamp_payload,
                    "name": "Gotham Coders",
                    "address": "45 W 25th St New York NY 10001",
                }
            ),
            make_user("publisher"),
        )

        nearby = container.bootcamps.within_radius("02215", 10)
        regional = container.bootcamps.within_radius("02215", 250)

        assert [b["name"] for b in nearby] == ["Devworks Bootcamp"]
        assert sorted(b["name"] for b in regional) == ["Devworks Bootcamp", "Gotham Coders"]

    def test_radius_search_unknown_zipcode(self, container, bootcamp):
        with pytest.raises(NotFoundError, match="99999"):
            container.bootcamps.within_radius("99999", 10)


class TestCourseService:
    def test_average_cost_after_three_courses(self, container, repositories, bootcamp, publisher):
        for tuition in [100, 200, 300]:
            container.courses.add(bootcamp["_id"], course(tuition), publisher)

        assert stored_bootcamp(repositories, bootcamp)["averageCost"] == 200

    def test_add_to_missing_bootcamp_writes_nothing(self, container, repositories, publisher):
        with pytest.raises(NotFoundError):
            container.courses.add("bootcamps-404", course(100), publisher)

        assert repositories["courses"].documents == {}

    def test_add_requires_bootcamp_ownership(self, container, repositories, bootcamp, make_user):
        with pytest.raises(ForbiddenError):
            container.courses.add(bootcamp["_id"], course(100), make_user("publisher"))

        assert repositories["courses"].documents == {}

    def test_update_recomputes(self, container, repositories, bootcamp, publisher):
        first = container.courses.add(bootcamp["_id"], course(100), publisher)
        container.courses.add(bootcamp["_id"], course(300), publisher)
        assert stored_bootcamp(repositories, bootcamp)["averageCost"] == 200

        container.courses.update(first["_id"], CourseUpdate(tuition=1000), publisher)

        assert stored_bootcamp(repositories, bootcamp)["averageCost"] == 650

    def test_deleting_last_course_clears_average(self, container, repositories, bootcamp, publisher):
        only = container.courses.add(bootcamp["_id"], course(450), publisher)
        assert stored_bootcamp(repositories, bootcamp)["averageCost"] == 450

        container.courses.delete(only["_id"], publisher)

        assert "averageCost" not in stored_bootcamp(repositories, bootcamp)

    def test_get_populates_bootcamp_summary(self, container, bootcamp, publisher):
        added = container.courses.add(bootcamp["_id"], course(100), publisher)

        fetched = container.courses.get(added["_id"])

        assert fetched["bootcamp"]["name"] == "Devworks Bootcamp"
        assert set(fetched["bootcamp"]) == {"_id", "name", "description"}

    def test_aggregate_failure_does_not_undo_course(
        self, container, repositories, aggregate_store, bootcamp, publisher
    ):
        aggregate_store.fail_writes = True

        added = container.courses.add(bootcamp["_id"], course(100), publisher)

        assert added["_id"] in repositories["courses"].documents
        assert "averageCost" not in stored_bootcamp(repositories, bootcamp)


class TestReviewService:
    def test_average_rating_of_two_users(self, container, repositories, bootcamp, make_user):
        container.reviews.add(bootcamp["_id"], review(8), make_user("user"))
        container.reviews.add(bootcamp["_id"], review(6), make_user("user"))

        assert stored_bootcamp(repositories, bootcamp)["averageRating"] == 7.00

    def test_one_review_per_user_per_bootcamp(self, container, repositories, bootcamp, make_user):
        reviewer = make_user("user")
        container.reviews.add(bootcamp["_id"], review(8), reviewer)

        with pytest.raises(ConflictError):
            container.reviews.add(bootcamp["_id"], review(2, title="Again"), reviewer)

        assert len(repositories["reviews"].documents) == 1
        assert stored_bootcamp(repositories, bootcamp)["averageRating"] == 8

    def test_missing_bootcamp(self, container, repositories, make_user):
        with pytest.raises(NotFoundError):
            container.reviews.add("bootcamps-404", review(8), make_user("user"))

        assert repositories["reviews"].documents == {}

    def test_only_author_or_admin_may_edit(self, container, repositories, bootcamp, make_user):
        added = container.reviews.add(bootcamp["_id"], review(4), make_user("user"))

        with pytest.raises(ForbiddenError):
            container.reviews.update(added["_id"], ReviewUpdate(rating=10), make_user("user"))

        container.reviews.update(added["_id"], ReviewUpdate(rating=10), make_user("admin"))
        assert stored_bootcamp(repositories, bootcamp)["averageRating"] == 10

    def test_delete_recomputes(self, container, repositories, bootcamp, make_user):
        author = make_user("user")
        first = container.reviews.add(bootcamp["_id"], review(9), author)
        container.reviews.add(bootcamp["_id"], review(4), make_user("user"))

        container.reviews.delete(first["_id"], author)

        assert stored_bootcamp(repositories, bootcamp)["averageRating"] == 4


class TestAuthService:
    def test_register_login_and_resolve(self, container):
        token = container.auth.register(
            RegisterRequest(name="Jane", email="jane@example.com", password="secret1", role="publisher")
        )
        user = container.auth.current_user(token)

        assert user["email"] == "jane@example.com"
        assert user["role"] == "publisher"
        assert "password" not in user

        login_token = container.auth.login(LoginRequest(email="jane@example.com", password="secret1"))
        assert container.auth.current_user(login_token)["_id"] == user["_id"]

    def test_wrong_password(self, container):
        container.auth.register(RegisterRequest(name="Jane", email="jane@example.com", password="secret1"))

        with pytest.raises(UnauthorizedError):
            container.auth.login(LoginRequest(email="jane@example.com", password="wrong!!"))

    def test_duplicate_email(self, container):
        payload = RegisterRequest(name="Jane", email="jane@example.com", password="secret1")
        container.auth.register(payload)

        with pytest.raises(ConflictError):
            container.auth.register(payload)

    def test_update_password_checks_current(self, container):
        token = container.auth.register(
            RegisterRequest(name="Jane", email="jane@example.com", password="secret1")
        )
        user = container.auth.current_user(token)

        with pytest.raises(UnauthorizedError):
            container.auth.update_password(
                user, UpdatePasswordRequest(currentPassword="nope!!", newPassword="secret2")
            )

        container.auth.update_password(
            user, UpdatePasswordRequest(currentPassword="secret1", newPassword="secret2")
        )
        container.auth.login(LoginRequest(email="jane@example.com", password="secret2"))


class TestUserService:
    def test_create_hides_password(self, container, repositories):
        created = container.users.create(
            UserCreate(name="Admin", email="admin@example.com", password="secret1", role="admin")
        )

        assert "password" not in created
        assert repositories["users"].documents[created["_id"]]["password"] != "secret1"

    def test_delete_missing(self, container):
        with pytest.raises(NotFoundError):
            container.users.delete("users-404")
