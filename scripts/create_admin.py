#!/usr/bin/env python3
"""Create an admin account, or promote an existing account to admin.

Usage:
    python scripts/create_admin.py admin@example.com --name "Jane Admin" --password s3cret
    python scripts/create_admin.py existing@example.com   # promote only
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import Session  # noqa: E402

from app.auth.schemas import MIN_PASSWORD_LENGTH  # noqa: E402
from app.auth.security import hash_password  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.user.models import UserRole  # noqa: E402
from app.user.repository import UserRepository  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--password", help="Required when the account does not exist")
    args = parser.parse_args()

    configure_logging()

    with Session(engine) as session:
        users = UserRepository(session)
        user = users.get_by_email(args.email)

        if user is not None:
            users.set_role(user, UserRole.admin)
            if args.password:
                users.set_password(user, hash_password(args.password))
            print(f"Promoted {user.email} to admin")
            return 0

        if not args.password or len(args.password) < MIN_PASSWORD_LENGTH:
            print(
                f"--password of at least {MIN_PASSWORD_LENGTH} characters is required",
                file=sys.stderr,
            )
            return 1

        user = users.create(
            email=args.email,
            name=args.name,
            password_hash=hash_password(args.password),
            role=UserRole.admin,
        )
        print(f"Created admin {user.email} ({user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
