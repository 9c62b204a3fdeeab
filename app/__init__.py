"""
Student Records
A server-rendered CRUD app for student records.

Architecture:
- MongoDB: one `students` collection, unique index on email
- FastAPI + Jinja2: HTML pages for list, add, view, edit, delete
"""

__version__ = "1.0.0"
