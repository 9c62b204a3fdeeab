#!/usr/bin/env python3
"""
Student Store Smoke Script

Runs the full student lifecycle against a live MongoDB:
create -> list -> rejected update -> delete -> lookup fails.

Run: python scripts/smoke_students.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.core.exceptions import DuplicateEmail, NotFound, ValidationFailed
from app.db.mongodb import (
    check_mongo_connection,
    create_mongo_client,
    get_collection,
    get_mongo_db,
    init_mongo_indexes
)
from app.services.student_service import StudentService

SMOKE_EMAIL = "smoke.alice@example.com"

ALICE = {
    "name": "  Alice  ",
    "age": "22",
    "course": "Computer Science",
    "email": SMOKE_EMAIL.upper()
}


def step_create(service: StudentService):
    print("\n[1] Creating student...")
    student = service.create(ALICE)
    print(f"    ✅ Created {student.id}: {student.name!r} <{student.email}>")
    return student


def step_list(service: StudentService, student_id: str):
    print("\n[2] Listing students...")
    ids = [s.id for s in service.list_all()]
    assert student_id in ids, "created student missing from list"
    print(f"    ✅ {len(ids)} student(s), new one included")


def step_duplicate(service: StudentService):
    print("\n[3] Creating duplicate email...")
    try:
        service.create(dict(ALICE, name="Alice Again"))
    except DuplicateEmail as e:
        print(f"    ✅ Rejected: {e.message}")
    else:
        raise AssertionError("duplicate email was accepted")


def step_invalid_update(service: StudentService, student_id: str):
    print("\n[4] Updating with age 17...")
    before = service.get_by_id(student_id)
    try:
        service.update(student_id, dict(ALICE, age=17))
    except ValidationFailed as e:
        print(f"    ✅ Rejected: {[err.message for err in e.errors]}")
    else:
        raise AssertionError("age 17 was accepted")
    assert service.get_by_id(student_id) == before, "record changed after rejected update"
    print("    ✅ Record unchanged")


def step_delete(service: StudentService, student_id: str):
    print("\n[5] Deleting student...")
    service.delete(student_id)
    try:
        service.get_by_id(student_id)
    except NotFound:
        print("    ✅ Deleted, lookup now fails")
    else:
        raise AssertionError("student still present after delete")


def main():
    print("=" * 60)
    print("STUDENT STORE SMOKE RUN")
    print("=" * 60)

    settings = get_settings()
    client = create_mongo_client(settings)

    if not check_mongo_connection(client):
        print("❌ MongoDB connection failed!")
        return 1

    print("✅ MongoDB connected!")

    db = get_mongo_db(client, settings)
    init_mongo_indexes(db)
    collection = get_collection(db, "students")
    # Leftovers from an interrupted run
    collection.delete_many({"email": SMOKE_EMAIL})
    service = StudentService(collection)

    try:
        student = step_create(service)
        step_list(service, student.id)
        step_duplicate(service)
        step_invalid_update(service, student.id)
        step_delete(service, student.id)
    finally:
        collection.delete_many({"email": SMOKE_EMAIL})
        client.close()

    print("\n" + "=" * 60)
    print("✅ SMOKE RUN PASSED!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
