#!/usr/bin/env python3
"""Set the price tier of the single application whose name matches.

The name is matched case-insensitively against the full name and the
nickname. Nothing is written unless exactly one application matches.

Usage:
    python scripts/set_talent_price.py --name "Rossi" --price "€€€"
    python scripts/set_talent_price.py --name "Rossi" --price ""   # clear
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import Session, col, or_, select  # noqa: E402

from app.core.exceptions import AppException  # noqa: E402
from app.core.logging import configure_logging  # noqa: E402
from app.core.settings import get_settings  # noqa: E402
from app.db.engine import engine  # noqa: E402
from app.talent.models import TalentApplication  # noqa: E402
from app.talent.repository import TalentApplicationRepository  # noqa: E402
from app.talent.service import validate_price  # noqa: E402


def describe(application: TalentApplication) -> str:
    nickname = f" ({application.nickname})" if application.nickname else ""
    return f"{application.full_name}{nickname} - price: \"{application.price or '(empty)'}\""


def _print_all(applications: Sequence[TalentApplication]) -> None:
    for index, application in enumerate(applications, start=1):
        print(f"  {index}. {describe(application)}")


def set_price(session: Session, name: str, price: str) -> int:
    """Reprice the one application matching ``name``. Returns an exit code."""
    pattern = f"%{name}%"
    matches = session.exec(
        select(TalentApplication)
        .where(
            or_(
                col(TalentApplication.full_name).ilike(pattern),
                col(TalentApplication.nickname).ilike(pattern),
            )
        )
        .order_by(col(TalentApplication.full_name))
    ).all()

    if not matches:
        print(f"No application matches '{name}'. All talents:", file=sys.stderr)
        _print_all(
            session.exec(
                select(TalentApplication).order_by(col(TalentApplication.full_name))
            ).all()
        )
        return 1
    if len(matches) > 1:
        print(
            f"{len(matches)} applications match '{name}', refine the name:",
            file=sys.stderr,
        )
        _print_all(matches)
        return 1

    application = matches[0]
    print(f"Found {describe(application)}")
    TalentApplicationRepository(session).update(application, price=price)
    print(f"New price: \"{application.price or '(empty)'}\"")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--name", required=True, help="Case-insensitive substring")
    parser.add_argument("--price", required=True)
    args = parser.parse_args()

    configure_logging()
    try:
        price = validate_price(args.price, get_settings().price_symbol)
    except AppException as e:
        print(e.message, file=sys.stderr)
        return 1

    with Session(engine) as session:
        return set_price(session, args.name, price)


if __name__ == "__main__":
    sys.exit(main())
