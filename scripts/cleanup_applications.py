#!/usr/bin/env python3
"""Delete talent applications together with their stored media files.

Usage:
    python scripts/cleanup_applications.py --status rejected
    python scripts/cleanup_applications.py --status all --dry-run
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import anyio  # noqa: E402
from sqlmodel import Session  # noqa: E402

from app.core.http import close_cloudinary_client  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.core.settings import get_settings  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.media.storage import get_storage  # noqa: E402
from app.talent.models import ApplicationStatus  # noqa: E402
from app.talent.repository import TalentApplicationRepository  # noqa: E402
from app.talent.service import TalentApplicationService  # noqa: E402

STATUS_CHOICES = [s.value for s in ApplicationStatus] + ["all"]


async def cleanup(status: ApplicationStatus | None, dry_run: bool) -> int:
    with Session(engine) as session:
        service = TalentApplicationService(
            TalentApplicationRepository(session), get_settings()
        )
        try:
            affected = await service.purge(get_storage(), status, dry_run=dry_run)
        finally:
            await close_cloudinary_client()

    verb = "Would delete" if dry_run else "Deleted"
    for application in affected:
        print(f"  {application.id}  {application.status.value:<8}  {application.full_name}")
    print(f"{verb} {len(affected)} application(s)")
    return len(affected)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--status", choices=STATUS_CHOICES, default="rejected")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()

    configure_logging()
    status = None if args.status == "all" else ApplicationStatus(args.status)
    anyio.run(cleanup, status, args.dry_run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
