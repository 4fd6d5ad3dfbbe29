"""
Request payload models for bootcamps, courses, reviews and users.

Unknown fields are rejected, so derived fields such as ``averageCost`` cannot
be written by clients.
"""

from typing import Dict, List, Literal, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field


URL_PATTERN = (
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"

Career = Literal[
    "Web Development",
    "Mobile Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
]
SkillLevel = Literal["beginner", "intermediate", "advanced"]


class Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class BootcampCreate(Payload):
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    website: Optional[str] = Field(default=None, pattern=URL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    address: str = Field(min_length=1)
    careers: List[Career] = Field(min_length=1)
    photo: str = "no-photo.jpg"
    housing: bool = False
    jobAssistance: bool = False
    jobGuarantee: bool = False
    acceptGi: bool = False


class BootcampUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    website: Optional[str] = Field(default=None, pattern=URL_PATTERN)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    address: Optional[str] = Field(default=None, min_length=1)
    careers: Optional[List[Career]] = Field(default=None, min_length=1)
    photo: Optional[str] = None
    housing: Optional[bool] = None
    jobAssistance: Optional[bool] = None
    jobGuarantee: Optional[bool] = None
    acceptGi: Optional[bool] = None


class CourseCreate(Payload):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    weeks: int = Field(ge=1)
    tuition: float = Field(ge=0)
    minimumSkill: SkillLevel
    scholarshipAvailable: bool = False


class CourseUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    weeks: Optional[int] = Field(default=None, ge=1)
    tuition: Optional[float] = Field(default=None, ge=0)
    minimumSkill: Optional[SkillLevel] = None
    scholarshipAvailable: Optional[bool] = None


class ReviewCreate(Payload):
    title: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1)
    rating: int = Field(ge=1, le=10)


class ReviewUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    text: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=10)


class RegisterRequest(Payload):
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)
    role: Literal["user", "publisher"] = "user"


class LoginRequest(Payload):
    email: str
    password: str


class UpdateDetailsRequest(Payload):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)


class UpdatePasswordRequest(Payload):
    currentPassword: str
    newPassword: str = Field(min_length=6)


class UserCreate(Payload):
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)
    role: Literal["user", "publisher", "admin"] = "user"


class UserUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    role: Optional[Literal["user", "publisher", "admin"]] = None


def scalar_field_types(*models: Type[BaseModel]) -> Dict[str, type]:
    """
    Map the number and boolean fields of payload models to their type.

    Query-string values are only converted for these fields; everything else
    is compared as a string.
    """
    types: Dict[str, type] = {}
    for model in models:
        for name, info in model.model_fields.items():
            annotation = info.annotation
            if get_origin(annotation) is Union:
                args = [arg for arg in get_args(annotation) if arg is not type(None)]
                if len(args) == 1:
                    annotation = args[0]
            if annotation in (bool, int, float):
                types[name] = annotation
    return types


FILTER_FIELD_TYPES: Dict[str, Dict[str, type]] = {
    "bootcamps": {
        **scalar_field_types(BootcampCreate),
        "averageCost": float,
        "averageRating": float,
    },
    "courses": scalar_field_types(CourseCreate),
    "reviews": scalar_field_types(ReviewCreate),
    "users": scalar_field_types(UserCreate),
}
