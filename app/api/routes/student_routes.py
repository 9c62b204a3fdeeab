"""
Student Routes

GET    /                    - List all students
GET    /students/new        - Empty creation form
POST   /students            - Create student, redirect to list
GET    /students/{id}       - Student detail
GET    /students/{id}/edit  - Pre-filled edit form
PUT    /students/{id}       - Update student, redirect to list
DELETE /students/{id}       - Delete student, redirect to list

HTML forms reach PUT and DELETE through POST with ?_method=PUT|DELETE
(see app.core.middleware.MethodOverrideMiddleware).
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from app.api.deps import get_student_service
from app.api.views import templates
from app.core.exceptions import DuplicateEmail, ValidationFailed
from app.services.student_service import StudentService

router = APIRouter(tags=["Students"])


def _redirect_home() -> RedirectResponse:
    # 303 so the browser follows up with GET whatever the original verb was
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


def _render_form_errors(
    request: Request,
    template: str,
    form: dict,
    exc: Union[ValidationFailed, DuplicateEmail],
    student_id: Optional[str] = None
) -> HTMLResponse:
    """Show the submitted form again with the messages next to each field."""
    return templates.TemplateResponse(
        request,
        template,
        {"student": form, "student_id": student_id, "errors": exc.details or {}},
        status_code=exc.status_code
    )


@router.get("/", response_class=HTMLResponse)
def list_students(request: Request, service: StudentService = Depends(get_student_service)):
    """Home page with every student."""
    students = service.list_all()
    return templates.TemplateResponse(request, "home.html", {"students": students})


@router.get("/students/new", response_class=HTMLResponse)
def new_student_form(request: Request):
    """Empty form for adding a student."""
    return templates.TemplateResponse(request, "add.html", {"student": {}, "errors": {}})


@router.post("/students")
def create_student(
    request: Request,
    name: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    course: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    service: StudentService = Depends(get_student_service)
):
    """Create a student. Invalid input re-renders the form (422, or 409 for a taken email)."""
    form = {"name": name, "age": age, "course": course, "email": email}
    try:
        service.create(form)
    except (ValidationFailed, DuplicateEmail) as exc:
        return _render_form_errors(request, "add.html", form, exc)
    return _redirect_home()


@router.get("/students/{student_id}", response_class=HTMLResponse)
def show_student(
    request: Request,
    student_id: str,
    service: StudentService = Depends(get_student_service)
):
    student = service.get_by_id(student_id)
    return templates.TemplateResponse(request, "see.html", {"student": student})


@router.get("/students/{student_id}/edit", response_class=HTMLResponse)
def edit_student_form(
    request: Request,
    student_id: str,
    service: StudentService = Depends(get_student_service)
):
    student = service.get_by_id(student_id)
    return templates.TemplateResponse(
        request,
        "edit.html",
        {"student": student, "student_id": student.id, "errors": {}}
    )


@router.put("/students/{student_id}")
def update_student(
    request: Request,
    student_id: str,
    name: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    course: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    service: StudentService = Depends(get_student_service)
):
    """Replace a student's fields. 404 if the student does not exist."""
    form = {"name": name, "age": age, "course": course, "email": email}
    try:
        service.update(student_id, form)
    except (ValidationFailed, DuplicateEmail) as exc:
        return _render_form_errors(request, "edit.html", form, exc, student_id=student_id)
    return _redirect_home()


@router.delete("/students/{student_id}")
def delete_student(student_id: str, service: StudentService = Depends(get_student_service)):
    service.delete(student_id)
    return _redirect_home()
