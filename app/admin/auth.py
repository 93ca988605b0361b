import uuid
from collections.abc import Callable

from sqladmin.authentication import AuthenticationBackend
from sqlmodel import Session
from starlette.requests import Request

from app.auth.security import verify_password
from app.core.settings import get_settings
from app.db.engine import engine
from app.user.repository import UserRepository


def _default_session() -> Session:
    return Session(engine)


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth backed by admin accounts in the users table."""

    def __init__(self, session_factory: Callable[[], Session] = _default_session) -> None:
        # SQLAdmin uses this secret internally (e.g. login form protection).
        # It must be stable and should match the session middleware secret.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)
        self.session_factory = session_factory

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username", form.get("email", ""))).strip()
        password = str(form.get("password", ""))

        with self.session_factory() as session:
            user = UserRepository(session).get_by_email(email)
            ok = (
                user is not None
                and user.is_admin
                and verify_password(password, user.password_hash)
            )
            if ok:
                request.session["admin_user_id"] = str(user.id)
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        """Re-check the stored account so a demoted or deleted admin loses access."""
        raw_id = request.session.get("admin_user_id")
        if not raw_id:
            return False
        try:
            user_id = uuid.UUID(str(raw_id))
        except ValueError:
            request.session.clear()
            return False

        with self.session_factory() as session:
            user = UserRepository(session).get(user_id)
            allowed = user is not None and user.is_admin
        if not allowed:
            request.session.clear()
        return allowed
