from collections.abc import Generator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from app.core.settings import get_settings

_settings = get_settings()


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Make SQLite honour ON DELETE clauses (off by default per connection)."""

    @event.listens_for(target, "connect")
    def _set_pragma(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


connect_args: dict[str, object] = {}
if _settings.database_url.startswith("sqlite"):
    # Required for SQLite when used with FastAPI across threads.
    connect_args = {"check_same_thread": False}

engine = create_engine(
    _settings.database_url,
    echo=False,
    connect_args=connect_args,
    pool_pre_ping=True,
)

if _settings.database_url.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
