"""
Pydantic Schemas - Student record validation

StudentFields holds the four fields a client may set. Student is a stored
record: those fields plus the store-assigned id and creation timestamp.
validate_student() is the only entry point the rest of the app uses to
check untrusted input.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app.core.exceptions import FieldError, ValidationFailed


# ============================================================
# ENUMS & CONSTANTS
# ============================================================

class Course(str, Enum):
    computer_science = "Computer Science"
    electrical_engineering = "Electrical Engineering"
    mechanical_engineering = "Mechanical Engineering"
    civil_engineering = "Civil Engineering"
    business = "Business"


COURSES = [course.value for course in Course]

MIN_AGE = 18
MAX_AGE = 60

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

# Order in which errors are reported, matching form field order
FIELD_ORDER = ["name", "age", "course", "email"]

REQUIRED_MESSAGES = {
    "name": "Name is required",
    "age": "Age is required",
    "course": "Course is required",
    "email": "Email is required",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentFields(BaseModel):
    """Validated, normalized mutable fields of a student."""
    model_config = ConfigDict(extra="ignore")

    name: str
    age: int
    course: Course
    email: str

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> str:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["name"])
        if not isinstance(value, str):
            raise ValueError("Name must be text")
        return value.strip()

    @field_validator("age", mode="before")
    @classmethod
    def check_age(cls, value: Any) -> int:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["age"])
        # bool is an int subclass; True is not an age
        if isinstance(value, bool):
            raise ValueError("Age must be a whole number")
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                raise ValueError("Age must be a whole number")
        elif isinstance(value, float):
            if not value.is_integer():
                raise ValueError("Age must be a whole number")
            value = int(value)
        elif not isinstance(value, int):
            raise ValueError("Age must be a whole number")

        if value < MIN_AGE:
            raise ValueError(f"Age must be at least {MIN_AGE}")
        if value > MAX_AGE:
            raise ValueError(f"Age must be at most {MAX_AGE}")
        return value

    @field_validator("course", mode="before")
    @classmethod
    def check_course(cls, value: Any) -> str:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["course"])
        if isinstance(value, Course):
            return value.value
        if not isinstance(value, str) or value not in COURSES:
            raise ValueError(f"`{value}` is not a valid course")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["email"])
        if not isinstance(value, str):
            raise ValueError("Please enter a valid email")
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email")
        return value

    def to_document(self) -> dict:
        """Mongo representation of the fields (course stored as plain text)."""
        return {
            "name": self.name,
            "age": self.age,
            "course": self.course.value,
            "email": self.email,
        }


class Student(BaseModel):
    """A stored student record."""
    id: str
    name: str
    age: int
    course: Course
    email: str
    created_at: datetime

    @classmethod
    def from_document(cls, doc: dict) -> "Student":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            age=doc["age"],
            course=doc["course"],
            email=doc["email"],
            created_at=doc["createdAt"],
        )


# ============================================================
# VALIDATION ENTRY POINT
# ============================================================

def _field_error(error: dict) -> FieldError:
    field = str(error["loc"][0]) if error["loc"] else "__root__"
    if error["type"] == "missing":
        message = REQUIRED_MESSAGES.get(field, "Field required")
    elif error["type"] == "value_error":
        message = str(error["ctx"]["error"])
    else:
        message = error["msg"]
    return FieldError(field=field, message=message)


def validate_student(candidate: Mapping[str, Any]) -> StudentFields:
    """
    Validate raw student input.

    Each field is checked on its own: presence, then type, then
    range/enum/format, then normalization. Every failing field is reported.

    Raises:
        ValidationFailed: with one FieldError per failing field
    """
    try:
        return StudentFields.model_validate(dict(candidate))
    except ValidationError as exc:
        errors: List[FieldError] = [_field_error(e) for e in exc.errors()]
        errors.sort(key=lambda e: FIELD_ORDER.index(e.field) if e.field in FIELD_ORDER else len(FIELD_ORDER))
        raise ValidationFailed(errors) from exc
