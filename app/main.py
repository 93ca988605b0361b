from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from sqladmin import Admin

from app.admin.auth import AdminAuth
from app.admin.views import ADMIN_VIEWS
from app.core.constants import UPLOADS_MOUNT_PATH
from app.core.cors import add_cors_middleware
from app.core.email import init_resend
from app.core.exception_handlers import register_exception_handlers
from app.core.http import close_cloudinary_client
from app.core.logging import configure_logging
from app.core.request_logging import add_request_logging_middleware
from app.core.settings import get_settings
from app.db.engine import engine
from app.db.init_db import init_db
from app.router import api_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db(engine, get_settings())
    init_resend()
    yield
    # Cleanup HTTP clients
    await close_cloudinary_client()


app = FastAPI(title="Talento", version="0.1.0", lifespan=lifespan)

app.include_router(api_router)

settings = get_settings()
if settings.storage_backend == "local":
    app.mount(
        UPLOADS_MOUNT_PATH,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin (SQLAdmin enables sessions via auth backend secret)
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
for view in ADMIN_VIEWS:
    admin.add_view(view)
