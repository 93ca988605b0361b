"""Centralized dependency type aliases shared by every domain router.

Auth-related aliases (CurrentUserDep, AdminUserDep) live in
``app.auth.dependencies``; storage in ``app.media.storage``.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.settings import Settings, get_settings
from app.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
