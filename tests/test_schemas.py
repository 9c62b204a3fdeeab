"""Unit tests for student field validation."""

import pytest

from app.core.exceptions import ValidationFailed
from app.schemas.schemas import COURSES, Course, validate_student


def _messages(exc_info) -> dict:
    return {e.field: e.message for e in exc_info.value.errors}


class TestValidStudent:
    def test_normalizes_fields(self, alice):
        fields = validate_student(dict(alice, name="  Alice  ", email="  Alice@X.COM "))

        assert fields.name == "Alice"
        assert fields.age == 22
        assert fields.course is Course.computer_science
        assert fields.email == "alice@x.com"

    @pytest.mark.parametrize("age", [18, 60, "18", " 60 ", 35.0])
    def test_accepts_boundary_and_numeric_text_ages(self, alice, age):
        assert validate_student(dict(alice, age=age)).age == int(float(str(age).strip()))

    @pytest.mark.parametrize("course", COURSES)
    def test_accepts_every_course(self, alice, course):
        assert validate_student(dict(alice, course=course)).course.value == course

    def test_ignores_unknown_and_immutable_keys(self, alice):
        fields = validate_student(dict(alice, id="abc", createdAt="yesterday", role="admin"))

        assert set(fields.model_dump()) == {"name", "age", "course", "email"}

    def test_to_document_stores_course_as_text(self, alice):
        doc = validate_student(alice).to_document()

        assert doc == {
            "name": "Alice",
            "age": 22,
            "course": "Computer Science",
            "email": "alice@x.com",
        }


class TestInvalidStudent:
    @pytest.mark.parametrize("age,message", [
        (17, "Age must be at least 18"),
        (0, "Age must be at least 18"),
        (-5, "Age must be at least 18"),
        (61, "Age must be at most 60"),
        ("200", "Age must be at most 60"),
    ])
    def test_rejects_age_out_of_range(self, alice, age, message):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, age=age))

        assert _messages(exc_info) == {"age": message}

    @pytest.mark.parametrize("age", ["twenty", "22.5", 22.5, True, [22]])
    def test_rejects_non_integer_age(self, alice, age):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, age=age))

        assert _messages(exc_info) == {"age": "Age must be a whole number"}

    @pytest.mark.parametrize("course", ["Physics", "computer science", "Business ", 3])
    def test_rejects_unknown_course(self, alice, course):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, course=course))

        assert _messages(exc_info) == {"course": f"`{course}` is not a valid course"}

    @pytest.mark.parametrize("email", ["alice", "alice@x", "@x.com", "alice@.com", "al ice@x.com", "alice@x."])
    def test_rejects_malformed_email(self, alice, email):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, email=email))

        assert _messages(exc_info) == {"email": "Please enter a valid email"}

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_name_is_missing(self, alice, blank):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, name=blank))

        assert _messages(exc_info) == {"name": "Name is required"}

    def test_reports_every_missing_field_in_form_order(self):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student({})

        assert [(e.field, e.message) for e in exc_info.value.errors] == [
            ("name", "Name is required"),
            ("age", "Age is required"),
            ("course", "Course is required"),
            ("email", "Email is required"),
        ]

    def test_fields_fail_independently(self, alice):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, age=70, email="nope"))

        assert _messages(exc_info) == {
            "age": "Age must be at most 60",
            "email": "Please enter a valid email",
        }

    def test_error_carries_status_and_details(self, alice):
        with pytest.raises(ValidationFailed) as exc_info:
            validate_student(dict(alice, age=10))

        assert exc_info.value.status_code == 422
        assert exc_info.value.code == "VALIDATION_FAILED"
        assert exc_info.value.details == {"age": "Age must be at least 18"}
