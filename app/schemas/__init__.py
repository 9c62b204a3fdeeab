"""
Schemas module - Student record shape and validation rules.

Usage:
    from app.schemas import validate_student
    fields = validate_student(form_data)
"""

from app.schemas.schemas import (
    COURSES,
    Course,
    Student,
    StudentFields,
    validate_student
)

__all__ = ["COURSES", "Course", "Student", "StudentFields", "validate_student"]
