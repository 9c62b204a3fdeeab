from fastapi import Request

from app.services.student_service import StudentService


def get_student_service(request: Request) -> StudentService:
    """
    Dependency returning the StudentService built at app creation.

    Usage in endpoints:
        @router.get("/")
        def list_students(service: StudentService = Depends(get_student_service)):
            ...
    """
    return request.app.state.student_service
