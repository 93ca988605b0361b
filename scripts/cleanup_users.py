#!/usr/bin/env python3
"""Delete every verified non-admin user with their applications and media.

Admins are always kept. Without --yes the script only lists what would be
deleted.

Usage:
    python scripts/cleanup_users.py          # preview
    python scripts/cleanup_users.py --yes
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import anyio  # noqa: E402
from sqlmodel import Session  # noqa: E402

from app.core.http import close_cloudinary_client  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.media.storage import StorageProvider, get_storage, remove_stored_files  # noqa: E402
from app.user.repository import UserRepository  # noqa: E402


@dataclass
class CleanupSummary:
    users: int = 0
    applications: int = 0
    files: int = 0
    admins_kept: int = 0


async def cleanup_users(
    session: Session, storage: StorageProvider, *, confirm: bool
) -> CleanupSummary:
    """Delete verified non-admin users when ``confirm`` is set.

    Applications and their media rows go with the user through the
    database cascade; stored binaries are removed best-effort afterwards.
    """
    users = UserRepository(session)
    summary = CleanupSummary()

    for user in users.list_verified():
        if user.is_admin:
            summary.admins_kept += 1
            print(f"  keep    {user.email} ({user.name})")
            continue

        applications = list(user.applications)
        provider_ids = [
            media.provider_id for application in applications for media in application.media
        ]
        print(
            f"  delete  {user.email} ({user.name}), "
            f"{len(applications)} application(s), {len(provider_ids)} file(s)"
        )
        summary.users += 1
        summary.applications += len(applications)
        if not confirm:
            continue

        users.delete(user)
        summary.files += await remove_stored_files(storage, provider_ids)

    return summary


async def run(confirm: bool) -> None:
    with Session(engine) as session:
        try:
            summary = await cleanup_users(session, get_storage(), confirm=confirm)
        finally:
            await close_cloudinary_client()

    if not confirm:
        print(
            f"Would delete {summary.users} user(s) and {summary.applications} "
            f"application(s), keeping {summary.admins_kept} admin(s). "
            "Run again with --yes to proceed."
        )
        return
    print(
        f"Deleted {summary.users} user(s), {summary.applications} application(s) "
        f"and {summary.files} stored file(s); kept {summary.admins_kept} admin(s)"
    )


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("-y", "--yes", action="store_true", help="Actually delete")
    args = parser.parse_args()

    configure_logging()
    anyio.run(run, args.yes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
