"""User domain router.

User management routes. Everything except the mobile update is admin-only.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, Response, status

from app.auth.dependencies import CurrentUserDep, ensure_owner_or_admin, require_admin
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.core.schemas import ApiResponse, ListResponse, MessageResponse
from app.media.storage import StorageDep, remove_stored_files
from app.user.exceptions import InvalidRoleError, UserNotFoundError
from app.user.models import User, UserRole
from app.user.repository import UserRepository
from app.user.schemas import MobileUpdate, RoleUpdate, UserProvision, UserRead, UserStats

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


def _get_user_or_404(users: UserRepository, user_id: uuid.UUID) -> User:
    user = users.get(user_id)
    if user is None:
        raise UserNotFoundError()
    return user


@router.get(
    "", response_model=ListResponse[UserRead], dependencies=[Depends(require_admin)]
)
async def list_users(session: SessionDep):
    """List verified users, newest first. Admin only."""
    users = UserRepository(session).list_verified()
    return ListResponse(
        data=[UserRead.model_validate(user) for user in users], count=len(users)
    )


@router.post(
    "",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def provision_user(payload: UserProvision, session: SessionDep, response: Response):
    """Pre-provision a passwordless, verified account. Admin only.

    The user completes the account later through /auth/register. An
    existing email is updated in place and answered with 200.
    """
    users = UserRepository(session)
    existing = users.get_by_email(payload.email)
    if existing is not None:
        user = users.update(
            existing,
            name=payload.name,
            mobile=payload.mobile or existing.mobile,
            email_verified=True,
        )
        response.status_code = status.HTTP_200_OK
        return ApiResponse(message="User updated", data=UserRead.model_validate(user))

    user = users.create(email=payload.email, name=payload.name, mobile=payload.mobile)
    return ApiResponse(message="User created", data=UserRead.model_validate(user))


@router.get(
    "/stats",
    response_model=ApiResponse[UserStats],
    dependencies=[Depends(require_admin)],
)
async def user_stats(session: SessionDep):
    """Account totals. Admin only."""
    return ApiResponse(data=UserRepository(session).stats())


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserRead],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user(user_id: uuid.UUID, session: SessionDep):
    """Get a user by ID. Admin only."""
    user = _get_user_or_404(UserRepository(session), user_id)
    return ApiResponse(data=UserRead.model_validate(user))


@router.patch(
    "/{user_id}/role",
    response_model=ApiResponse[UserRead],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def update_role(user_id: uuid.UUID, payload: RoleUpdate, session: SessionDep):
    """Promote or demote a user. Admin only."""
    try:
        role = UserRole(payload.role)
    except ValueError as e:
        raise InvalidRoleError() from e

    users = UserRepository(session)
    user = users.set_role(_get_user_or_404(users, user_id), role)
    logger.info("Role of user %s set to %s", user.id, role.value)
    return ApiResponse(
        message="User role updated successfully", data=UserRead.model_validate(user)
    )


@router.patch(
    "/{user_id}/mobile",
    response_model=ApiResponse[UserRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def update_mobile(
    user_id: uuid.UUID,
    payload: MobileUpdate,
    current_user: CurrentUserDep,
    session: SessionDep,
):
    """Update a mobile number. Owner or admin."""
    ensure_owner_or_admin(
        current_user, user_id, "You can only update your own mobile number"
    )
    users = UserRepository(session)
    user = users.update(_get_user_or_404(users, user_id), mobile=payload.mobile)
    return ApiResponse(
        message="Mobile number updated successfully",
        data=UserRead.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_user(user_id: uuid.UUID, session: SessionDep, storage: StorageDep):
    """Delete a user with their applications. Admin only.

    Media rows of the deleted applications cascade; their stored files are
    removed afterwards on a best-effort basis.
    """
    users = UserRepository(session)
    user = _get_user_or_404(users, user_id)
    provider_ids = [
        media.provider_id
        for application in user.applications
        for media in application.media
    ]
    users.delete(user)
    await remove_stored_files(storage, provider_ids)
    return MessageResponse(message="User deleted successfully")
