"""
Health Routes

GET /health - Store connectivity check
"""

from fastapi import APIRouter, Request

from app.db.mongodb import check_mongo_connection

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request):
    """Report whether MongoDB answers a ping."""
    connected = check_mongo_connection(request.app.state.mongo_client)
    return {
        "status": "healthy" if connected else "degraded",
        "mongodb": "connected" if connected else "disconnected"
    }
