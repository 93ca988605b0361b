import inspect
import os

# Settings are read at import time by app.db.engine and app.main.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["RESEND_API_KEY"] = ""
os.environ["DB_AUTO_CREATE"] = "false"

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402, F401
from app.auth.security import create_access_token, hash_password  # noqa: E402
from app.core.settings import Settings, get_settings  # noqa: E402
from app.db.engine import enable_sqlite_foreign_keys, get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.media.exceptions import StorageError  # noqa: E402
from app.media.storage import StoredFile, get_storage  # noqa: E402
from app.talent.models import ApplicationStatus, TalentApplication  # noqa: E402
from app.user.models import User, UserRole  # noqa: E402

TEST_PASSWORD = "secret123"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


class FakeStorage:
    """In-memory storage provider.

    ``fail_on_put`` makes the n-th put (1-based) raise StorageError;
    ``fail_on_delete`` makes every delete raise.
    """

    name = "fake"

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.puts = 0
        self.fail_on_put: int | None = None
        self.fail_on_delete = False

    async def put(
        self, content: bytes, *, filename: str, content_type: str, folder: str
    ) -> StoredFile:
        self.puts += 1
        if self.fail_on_put is not None and self.puts >= self.fail_on_put:
            raise StorageError(f"Upload of {filename} failed")
        provider_id = f"{folder}/{filename}"
        self.files[provider_id] = content
        return StoredFile(
            url=f"https://cdn.test/{provider_id}",
            provider_id=provider_id,
            backend=self.name,
        )

    async def delete(self, provider_id: str) -> bool:
        if self.fail_on_delete:
            raise StorageError(f"Delete of {provider_id} failed")
        return self.files.pop(provider_id, None) is not None


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create an in-memory SQLite database for testing."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(
        _env_file=None,
        env_name="test",
        database_url="sqlite://",
        jwt_secret_key="test-jwt-secret",
        session_secret_key="test-session-secret",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        resend_api_key=None,
    )


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt is slow; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


def _make_user(session: Session, email: str, name: str, role: UserRole, password_hash):
    user = User(email=email, name=name, role=role, password_hash=password_hash)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="user")
def user_fixture(session: Session, password_hash: str) -> User:
    return _make_user(session, "talent@example.com", "Test Talent", UserRole.user, password_hash)


@pytest.fixture(name="other_user")
def other_user_fixture(session: Session, password_hash: str) -> User:
    return _make_user(session, "other@example.com", "Other User", UserRole.user, password_hash)


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session, password_hash: str) -> User:
    return _make_user(session, "admin@example.com", "Admin User", UserRole.admin, password_hash)


def auth_headers(user: User, settings: Settings) -> dict[str, str]:
    token = create_access_token(
        user_id=user.id, email=user.email, role=user.role.value, settings=settings
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for(settings: Settings):
    """Bearer headers for any user created inside a test."""
    return lambda user: auth_headers(user, settings)


@pytest.fixture
def user_headers(user: User, settings: Settings) -> dict[str, str]:
    return auth_headers(user, settings)


@pytest.fixture
def other_headers(other_user: User, settings: Settings) -> dict[str, str]:
    return auth_headers(other_user, settings)


@pytest.fixture
def admin_headers(admin_user: User, settings: Settings) -> dict[str, str]:
    return auth_headers(admin_user, settings)


@pytest.fixture(name="storage")
def storage_fixture() -> FakeStorage:
    return FakeStorage()


@pytest.fixture(name="client")
def client_fixture(session: Session, settings: Settings, storage: FakeStorage):
    """Create a test client with overridden dependencies."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_storage] = lambda: storage

    client = TestClient(app, raise_server_exceptions=False)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_application(session: Session):
    """Insert an application directly, bypassing the submission rules."""

    def _make(
        owner: User | None,
        *,
        status: ApplicationStatus = ApplicationStatus.pending,
        full_name: str = "Giulia Rossi",
        admin_curated: bool = False,
        **fields,
    ) -> TalentApplication:
        application = TalentApplication(
            user_id=owner.id if owner else None,
            email=owner.email if owner else "curated@example.com",
            status=status,
            admin_curated=admin_curated,
            full_name=full_name,
            birth_year=1995,
            city="Milano",
            phone="+39 333 0000000",
            terms_accepted=True,
            **fields,
        )
        session.add(application)
        session.commit()
        session.refresh(application)
        return application

    return _make
