"""
MongoDB Connection Utility

MongoDB stores one collection:
- students: one document per student record

The client is created once by the app factory and handed to whoever needs
it. pymongo pools connections internally, so one client serves every request.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import Settings

logger = logging.getLogger(__name__)

# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students"
}


def create_mongo_client(settings: Settings) -> MongoClient:
    """
    Build a MongoDB client from settings.

    Connecting is lazy: no network traffic happens until the first command.
    Every store call inherits the configured timeout.
    """
    timeout = settings.mongodb_timeout_ms
    return MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        socketTimeoutMS=timeout
    )


def get_mongo_db(client: MongoClient, settings: Settings) -> Database:
    """Database named in the URI, falling back to settings.mongodb_db."""
    return client.get_default_database(default=settings.mongodb_db)


def get_collection(db: Database, name: str) -> Collection:
    """Get a specific collection by its key in COLLECTIONS."""
    return db[COLLECTIONS[name]]


def check_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes. Call this once during app startup.

    The unique email index backs the service's duplicate pre-check, which
    alone cannot stop two concurrent creates with the same address.
    """
    db[COLLECTIONS["students"]].create_index(
        [("email", ASCENDING)],
        unique=True,
        name="email_unique"
    )
    logger.info("MongoDB indexes created successfully")
