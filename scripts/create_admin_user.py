#!/usr/bin/env python3
"""
Create an admin user interactively.

Admins can call the internal re-scoring endpoint.
"""

import getpass
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pydantic import ValidationError

from sme_assessment import crud
from sme_assessment.core.security import validate_password_strength
from sme_assessment.db.session import SessionLocal
from sme_assessment.schemas.user import UserCreate


def create_admin_user() -> int:
    print("Creating admin user")
    print("=" * 50)

    email = input("Email: ").strip()
    full_name = input("Full name: ").strip()
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm Password: "):
        print("Passwords do not match")
        return 1

    ok, reason = validate_password_strength(password)
    if not ok:
        print(reason)
        return 1

    try:
        user_in = UserCreate(email=email, full_name=full_name, password=password)
    except ValidationError as e:
        print(f"Invalid input: {e}")
        return 1

    db = SessionLocal()
    try:
        if crud.user.get_by_email(db, email=user_in.email):
            print(f"A user with email {user_in.email} already exists")
            return 1
        admin = crud.user.create(db, obj_in=user_in, role="admin")
        print(f"Admin user created with id {admin.id}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(create_admin_user())
