"""Startup database initialisation.

Creates missing tables and, when SEED_DEMO_USERS is on, inserts the demo
accounts into an empty users table. Errors propagate so a broken database
stops the process at startup.
"""

import logging

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

import app.models  # noqa: F401  (registers every table on SQLModel.metadata)
from app.auth.security import hash_password
from app.core.settings import Settings
from app.user.models import User, UserRole
from app.user.repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"
DEMO_USERS = (
    ("demo@example.com", "Demo User", UserRole.user),
    ("admin@talento.com", "Admin User", UserRole.admin),
)


def seed_demo_users(session: Session) -> int:
    """Insert demo accounts if no user exists yet. Returns rows inserted."""
    if session.exec(select(func.count()).select_from(User)).one() > 0:
        return 0
    users = UserRepository(session)
    password_hash = hash_password(DEMO_PASSWORD)
    for email, name, role in DEMO_USERS:
        users.create(email=email, name=name, password_hash=password_hash, role=role)
    logger.info("Seeded %d demo users", len(DEMO_USERS))
    return len(DEMO_USERS)


def init_db(engine: Engine, settings: Settings) -> None:
    if settings.db_auto_create:
        SQLModel.metadata.create_all(engine)
        logger.info("Database tables ensured")
    if settings.seed_demo_users:
        with Session(engine) as session:
            seed_demo_users(session)
