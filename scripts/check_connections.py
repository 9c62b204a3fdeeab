#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the MongoDB connection is working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.db.mongodb import check_mongo_connection, create_mongo_client, get_mongo_db


def main():
    settings = get_settings()
    print("=" * 50)
    print("STUDENT RECORDS - CONNECTION CHECK")
    print("=" * 50)

    client = create_mongo_client(settings)
    db = get_mongo_db(client, settings)

    print("\n[1] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {db.name}")
    if check_mongo_connection(client):
        print("    ✅ MongoDB: CONNECTED")
        ok = True
    else:
        print("    ❌ MongoDB: FAILED")
        ok = False

    client.close()
    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
