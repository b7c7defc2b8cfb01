#!/usr/bin/env python
"""
Seed script for creating a demo account.
Run with: cd backend; python scripts/seed_users.py
Requires DATABASE_URL and SECRET_KEY in .env.
"""

import os
import sys

# Add app to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.auth import get_password_hash
from app.database import SessionLocal
from app.exceptions import ValidationError
from app.services import user_service

DEMO_USER = {
    "username": "demo-user",
    "email": "demo@user.io",
    "first_name": "Demo",
    "last_name": "User",
}
DEMO_PASSWORD = os.getenv("DEMO_PASSWORD", "password")


def seed_users():
    db = SessionLocal()
    try:
        existing = user_service.find_by_email_or_username(db, DEMO_USER["email"], DEMO_USER["username"])
        if existing:
            print("Demo user already exists. Skipping seed.")
            return

        user = user_service.create_user(
            db,
            hashed_password=get_password_hash(DEMO_PASSWORD),
            **DEMO_USER,
        )
        print(f"Created demo user id={user.id} username='{user.username}'")
    except ValidationError as e:
        print(f"Demo user rejected: {e.errors}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_users()
