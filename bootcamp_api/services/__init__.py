"""Service layer: validation, authorization and explicit aggregate refresh."""

from bootcamp_api.services.bootcamps import BootcampService
from bootcamp_api.services.courses import CourseService
from bootcamp_api.services.reviews import ReviewService
from bootcamp_api.services.users import AuthService, UserService

__all__ = [
    "BootcampService",
    "CourseService",
    "ReviewService",
    "AuthService",
    "UserService",
]
