"""
Student Records - Main Application

FastAPI app serving server-rendered HTML pages over one MongoDB
collection of student records:
- List, create, view, edit and delete students
- Field validation before every write
- Unique email per student (pre-check + unique index)

Run: uvicorn app.main:app --reload
 or: python -m app.main
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.api.routes import api_router
from app.api.views import templates
from app.core.config import Settings, get_settings
from app.core.exceptions import StudentRecordError
from app.core.logging import setup_logging
from app.core.middleware import MethodOverrideMiddleware
from app.db.mongodb import create_mongo_client, get_collection, get_mongo_db, init_mongo_indexes
from app.services.student_service import StudentService

logger = logging.getLogger(__name__)

# Get the project root directory
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
STATIC_DIR = os.path.join(PROJECT_ROOT, "public")


async def student_record_error_handler(request: Request, exc: StudentRecordError) -> HTMLResponse:
    """Render every student record error as an HTML error page with its status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"code": exc.code, "message": exc.message},
        status_code=exc.status_code
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    logger.critical("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"code": "INTERNAL_SERVER_ERROR", "message": "Something went wrong"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def create_app(settings: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the application.

    The Mongo client is created here once and shared through app.state;
    pass one in to point the app at a different store.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    if client is None:
        client = create_mongo_client(settings)
    db = get_mongo_db(client, settings)

    app = FastAPI(
        title="Student Records",
        description="Create, list, view, edit and delete student records.",
        version="1.0.0",
        debug=settings.debug
    )
    app.state.settings = settings
    app.state.mongo_client = client
    app.state.student_service = StudentService(get_collection(db, "students"))

    # Lets HTML forms send PUT/DELETE via ?_method=
    app.add_middleware(MethodOverrideMiddleware)

    app.add_exception_handler(StudentRecordError, student_record_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    # Serve static files (stylesheets etc.)
    if os.path.exists(STATIC_DIR):
        app.mount("/public", StaticFiles(directory=STATIC_DIR), name="public")

    @app.on_event("startup")
    def startup_event():
        """Create MongoDB indexes on startup."""
        logger.info("Using MongoDB database '%s'", db.name)
        try:
            init_mongo_indexes(db)
        except PyMongoError as e:
            logger.warning("MongoDB index initialization failed: %s", e)

    @app.on_event("shutdown")
    def shutdown_event():
        client.close()

    return app


app = create_app()


def run() -> None:
    """Start the server on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
