"""
Student Service - CRUD operations for the students collection.

Every write goes through validate_student() first, so no document that
breaks a field rule ever reaches the store. Email uniqueness is checked
here before writing and enforced again by the unique index created at
startup (see app.db.mongodb.init_mongo_indexes).

Store failures are reported as StoreUnavailable and never retried here;
retrying is the caller's call.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import DuplicateEmail, NotFound, StoreUnavailable
from app.schemas.schemas import Student, validate_student

logger = logging.getLogger(__name__)


def _now() -> datetime:
    """Naive UTC now, truncated to the millisecond precision BSON stores."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _parse_id(student_id: str) -> ObjectId:
    """An id that cannot be an ObjectId names no stored student."""
    if not isinstance(student_id, str):
        raise NotFound(str(student_id))
    try:
        return ObjectId(student_id)
    except InvalidId:
        raise NotFound(student_id)


class StudentService:
    """
    Persistence gateway for student records.

    Takes the collection explicitly so the app (or a test) decides which
    store it talks to.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def _email_taken(self, email: str, exclude_id: Optional[ObjectId] = None) -> bool:
        query = {"email": email}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return self.collection.find_one(query, projection={"_id": 1}) is not None

    def create(self, fields: Mapping[str, Any]) -> Student:
        """
        Validate and insert a new student.

        Raises:
            ValidationFailed, DuplicateEmail, StoreUnavailable
        """
        validated = validate_student(fields)
        doc = validated.to_document()
        doc["createdAt"] = _now()

        try:
            if self._email_taken(validated.email):
                raise DuplicateEmail(validated.email)
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent create
            raise DuplicateEmail(validated.email)
        except PyMongoError as e:
            logger.error("Failed to create student", exc_info=True)
            raise StoreUnavailable(str(e))

        doc["_id"] = result.inserted_id
        logger.info("Created student %s", result.inserted_id)
        return Student.from_document(doc)

    def list_all(self) -> List[Student]:
        """All students in the store's natural order."""
        try:
            return [Student.from_document(doc) for doc in self.collection.find()]
        except PyMongoError as e:
            logger.error("Failed to list students", exc_info=True)
            raise StoreUnavailable(str(e))

    def get_by_id(self, student_id: str) -> Student:
        """Fetch one student. Raises NotFound or StoreUnavailable."""
        oid = _parse_id(student_id)
        try:
            doc = self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to fetch student %s", student_id, exc_info=True)
            raise StoreUnavailable(str(e))
        if doc is None:
            raise NotFound(student_id)
        return Student.from_document(doc)

    def update(self, student_id: str, fields: Mapping[str, Any]) -> Student:
        """
        Replace name, age, course and email of an existing student.

        id and createdAt never change. The student must exist before its
        new fields are validated.

        Raises:
            NotFound, ValidationFailed, DuplicateEmail, StoreUnavailable
        """
        oid = _parse_id(student_id)
        try:
            exists = self.collection.find_one({"_id": oid}, projection={"_id": 1}) is not None
        except PyMongoError as e:
            logger.error("Failed to fetch student %s", student_id, exc_info=True)
            raise StoreUnavailable(str(e))
        if not exists:
            raise NotFound(student_id)

        validated = validate_student(fields)

        try:
            if self._email_taken(validated.email, exclude_id=oid):
                raise DuplicateEmail(validated.email)
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": validated.to_document()},
                return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            raise DuplicateEmail(validated.email)
        except PyMongoError as e:
            logger.error("Failed to update student %s", student_id, exc_info=True)
            raise StoreUnavailable(str(e))

        # Deleted between the existence check and the write
        if doc is None:
            raise NotFound(student_id)

        logger.info("Updated student %s", student_id)
        return Student.from_document(doc)

    def delete(self, student_id: str) -> None:
        """Remove a student for good. Raises NotFound or StoreUnavailable."""
        oid = _parse_id(student_id)
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to delete student %s", student_id, exc_info=True)
            raise StoreUnavailable(str(e))
        if result.deleted_count == 0:
            raise NotFound(student_id)
        logger.info("Deleted student %s", student_id)
