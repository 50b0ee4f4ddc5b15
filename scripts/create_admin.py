#!/usr/bin/env python3
"""Create an admin account, or promote and reactivate an existing one.

Usage:
    # From project root (with the database running):
    python scripts/create_admin.py admin@example.com "Site Admin"

    # The password is read from ADMIN_PASSWORD or prompted for.
"""

import argparse
import getpass
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskboard.database import SessionLocal
from taskboard.models import User
from taskboard.models.enums import UserRole
from taskboard.repositories.users import SqlUserRepository
from taskboard.services.auth import get_password_hash

MIN_PASSWORD_LENGTH = 6


def create_admin(email: str, name: str, password: str) -> User:
    """Create the admin, or promote the existing account with that email."""
    session = SessionLocal()
    users = SqlUserRepository(session)
    try:
        user = users.get_by_email(email)
        if user:
            print(f"User {email} exists, promoting to admin and resetting password...")
            user.role = UserRole.ADMIN
            user.is_active = True
            user.password_hash = get_password_hash(password)
            return users.save(user)

        print(f"Creating admin {email}...")
        return users.add(
            User(
                name=name,
                email=email,
                password_hash=get_password_hash(password),
                role=UserRole.ADMIN,
                is_active=True,
            )
        )
    except Exception as e:
        session.rollback()
        print(f"Error creating admin: {e}")
        raise
    finally:
        session.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("name", nargs="?", default="Administrator")
    args = parser.parse_args()

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        parser.error(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

    user = create_admin(args.email.strip().lower(), args.name, password)
    print(f"Admin ready: id={user.id} email={user.email}")


if __name__ == "__main__":
    main()
