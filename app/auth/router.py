"""Auth domain router.

Authentication routes for registration, login, password reset and the
current user's profile. Handlers stay thin and delegate storage to
UserRepository and crypto to app.auth.security.
"""

import logging

from fastapi import APIRouter, Response, status

from app.auth.dependencies import CurrentUserDep
from app.auth.exceptions import InvalidCredentialsError, InvalidResetTokenError
from app.auth.schemas import (
    AuthLoginRequest,
    AuthRegister,
    AuthToken,
    ConfirmPasswordResetRequest,
    PasswordResetRequest,
    PasswordResetResponse,
    RegisteredUser,
)
from app.auth.security import create_access_token, hash_password, verify_password
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep, SettingsDep
from app.core.email import build_reset_url, send_password_reset_email
from app.core.schemas import ApiResponse, MessageResponse
from app.user.exceptions import EmailExistsError
from app.user.repository import UserRepository
from app.user.schemas import UserPublicRead

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent"
)


@router.post(
    "/register",
    response_model=ApiResponse[RegisteredUser],
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.CONFLICT},
)
async def register(register_data: AuthRegister, session: SessionDep, response: Response):
    """Register a new user.

    A pre-provisioned account (created by an admin without a password) is
    completed instead: its password is set and 200 is returned.
    """
    users = UserRepository(session)
    existing = users.get_by_email(register_data.email)

    if existing is not None:
        if existing.has_password:
            raise EmailExistsError()
        fields: dict[str, object] = {
            "password_hash": hash_password(register_data.password),
            "name": register_data.name,
        }
        if register_data.mobile:
            fields["mobile"] = register_data.mobile
        user = users.update(existing, **fields)
        logger.info("Password set for pre-provisioned user %s", user.id)
        response.status_code = status.HTTP_200_OK
        return ApiResponse(
            message="Password set successfully",
            data=RegisteredUser(user=UserPublicRead.model_validate(user)),
        )

    user = users.create(
        email=register_data.email,
        name=register_data.name,
        password_hash=hash_password(register_data.password),
        mobile=register_data.mobile or "",
    )
    return ApiResponse(
        message="User registered successfully",
        data=RegisteredUser(user=UserPublicRead.model_validate(user)),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthToken],
    responses={**CommonResponses.UNAUTHORIZED},
)
async def login(credentials: AuthLoginRequest, session: SessionDep, settings: SettingsDep):
    """Exchange email and password for a bearer token.

    Unknown email, wrong password and passwordless accounts all produce the
    same 401 so the endpoint cannot be used to enumerate accounts.
    """
    user = UserRepository(session).get_by_email(credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        raise InvalidCredentialsError()

    token = create_access_token(
        user_id=user.id, email=user.email, role=user.role.value, settings=settings
    )
    logger.info("User %s logged in", user.id)
    return ApiResponse(
        message="Login successful",
        data=AuthToken(token=token, user=UserPublicRead.model_validate(user)),
    )


@router.post(
    "/forgot-password",
    response_model=PasswordResetResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request_data: PasswordResetRequest, session: SessionDep, settings: SettingsDep
):
    """Issue a password reset token and email it.

    Always answers with the same message. When email delivery is not
    configured the token and link are returned for local development.
    """
    users = UserRepository(session)
    token = users.issue_reset_token(
        request_data.email, expires_in=settings.password_reset_expires_in
    )
    if token is None:
        return PasswordResetResponse(message=RESET_REQUESTED_MESSAGE)

    user = users.get_by_email(request_data.email)
    sent = send_password_reset_email(
        request_data.email, token, user.name if user else ""
    )
    if not sent and not settings.email_configured:
        logger.warning("Email not configured, returning reset token in response")
        return PasswordResetResponse(
            message="Password reset token generated (email delivery is not configured)",
            reset_token=token,
            reset_url=build_reset_url(token),
        )
    return PasswordResetResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(request_data: ConfirmPasswordResetRequest, session: SessionDep):
    """Set a new password using a reset token; the token is single-use."""
    users = UserRepository(session)
    user = users.get_by_reset_token(request_data.token)
    if user is None:
        raise InvalidResetTokenError()

    users.update(
        user,
        password_hash=hash_password(request_data.new_password),
        reset_token=None,
        reset_token_expiry=None,
    )
    logger.info("Password reset for user %s", user.id)
    return MessageResponse(message="Password reset successfully")


@router.get(
    "/me",
    response_model=ApiResponse[UserPublicRead],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def me(user: CurrentUserDep):
    """Return the authenticated user's profile."""
    return ApiResponse(data=UserPublicRead.model_validate(user))
