"""
Database module - MongoDB connection helpers.
"""
from app.db.mongodb import (
    create_mongo_client,
    get_mongo_db,
    get_collection,
    init_mongo_indexes,
    check_mongo_connection
)

__all__ = [
    "create_mongo_client",
    "get_mongo_db",
    "get_collection",
    "init_mongo_indexes",
    "check_mongo_connection"
]
