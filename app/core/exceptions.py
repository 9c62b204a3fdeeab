"""
Error kinds raised by the record schema and the persistence gateway.

Each error carries the HTTP status the web layer answers with, so route
handlers never translate errors by hand.
"""

from typing import Any, Dict, List, Optional
from fastapi import status
from pydantic import BaseModel


class FieldError(BaseModel):
    """One failed rule on one field."""
    field: str
    message: str


class StudentRecordError(Exception):
    """Base class for every error the student record layer raises."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationFailed(StudentRecordError):
    """422: one or more fields broke a schema rule."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__(
            message="Student validation failed: " + "; ".join(e.message for e in errors),
            code="VALIDATION_FAILED",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={e.field: e.message for e in errors}
        )


class DuplicateEmail(StudentRecordError):
    """409: another student already uses this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            message=f"A student with email '{email}' already exists",
            code="DUPLICATE_EMAIL",
            status_code=status.HTTP_409_CONFLICT,
            details={"email": f"A student with email '{email}' already exists"}
        )


class NotFound(StudentRecordError):
    """404: no student with this id."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(
            message="Student not found",
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )


class StoreUnavailable(StudentRecordError):
    """500: the document store could not be reached or refused the operation."""

    def __init__(self, message: str):
        super().__init__(
            message=f"Student store unavailable: {message}",
            code="STORE_UNAVAILABLE",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
