"""Talent domain routers.

``/talent`` hosts the application workflow (submit, review, update);
``/talents`` is the public catalogue of verified talents.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status

from app.auth.dependencies import AdminUserDep, CurrentUserDep, require_admin
from app.core.constants import CommonResponses, Routes
from app.core.schemas import ApiResponse, ListResponse, MessageResponse
from app.media.storage import StorageDep
from app.talent.exceptions import ApplicationNotFoundError
from app.talent.models import ApplicationStatus
from app.talent.schemas import (
    ApplicationStats,
    CelebrityUpdate,
    ClickCount,
    ClickEvent,
    StatusUpdate,
    TalentApplicationCreate,
    TalentApplicationList,
    TalentApplicationRead,
    TalentApplicationUpdate,
)
from app.talent.service import TalentServiceDep

router = APIRouter(
    prefix=Routes.TALENT.prefix,
    tags=[Routes.TALENT.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

talents_router = APIRouter(prefix=Routes.TALENTS.prefix, tags=[Routes.TALENTS.tag])


@router.post(
    "/applications",
    response_model=ApiResponse[TalentApplicationRead],
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.CONFLICT},
)
async def submit_application(
    payload: TalentApplicationCreate, user: CurrentUserDep, service: TalentServiceDep
):
    """Submit a talent application for the current user."""
    application = service.submit(user, payload)
    return ApiResponse(
        message="Application submitted successfully",
        data=TalentApplicationRead.model_validate(application),
    )


@router.get("/applications", response_model=TalentApplicationList)
async def list_applications(
    service: TalentServiceDep,
    status_filter: Annotated[ApplicationStatus | None, Query(alias="status")] = None,
):
    """List applications newest first, optionally by status, with totals."""
    applications = service.repository.list_by_status(status_filter)
    return TalentApplicationList(
        data=[TalentApplicationRead.model_validate(a) for a in applications],
        count=len(applications),
        stats=service.repository.counts(),
    )


@router.get(
    "/applications/me",
    response_model=ApiResponse[TalentApplicationRead],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.NOT_FOUND},
)
async def my_application(user: CurrentUserDep, service: TalentServiceDep):
    """The current user's most recent application."""
    application = service.repository.latest_for_owner(user.id)
    if application is None:
        raise ApplicationNotFoundError("No application found")
    return ApiResponse(data=TalentApplicationRead.model_validate(application))


@router.get(
    "/applications/{application_id}",
    response_model=ApiResponse[TalentApplicationRead],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_application(application_id: uuid.UUID, service: TalentServiceDep):
    """Get one application. Admin only."""
    application = service.get(application_id)
    return ApiResponse(data=TalentApplicationRead.model_validate(application))


@router.patch(
    "/applications/{application_id}",
    response_model=ApiResponse[TalentApplicationRead],
    responses={**CommonResponses.FORBIDDEN, **CommonResponses.NOT_FOUND},
)
async def update_application(
    application_id: uuid.UUID,
    payload: TalentApplicationUpdate,
    user: CurrentUserDep,
    service: TalentServiceDep,
):
    """Update an application's profile fields. Owner or admin; price is admin-only."""
    application = service.update(user, application_id, payload)
    return ApiResponse(
        message="Application updated successfully",
        data=TalentApplicationRead.model_validate(application),
    )


@router.patch(
    "/applications/{application_id}/status",
    response_model=ApiResponse[TalentApplicationRead],
    responses={**CommonResponses.FORBIDDEN, **CommonResponses.NOT_FOUND},
)
async def review_application(
    application_id: uuid.UUID,
    payload: StatusUpdate,
    reviewer: AdminUserDep,
    service: TalentServiceDep,
):
    """Verify or reject an application. Admin only."""
    application = service.review(
        reviewer, application_id, payload.status, payload.review_notes
    )
    return ApiResponse(
        message=f"Application {application.status.value} successfully",
        data=TalentApplicationRead.model_validate(application),
    )


@router.delete(
    "/applications/{application_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_application(
    application_id: uuid.UUID, service: TalentServiceDep, storage: StorageDep
):
    """Delete an application and its media. Admin only."""
    await service.delete(application_id, storage)
    return MessageResponse(message="Application deleted successfully")


@router.get(
    "/stats",
    response_model=ApiResponse[ApplicationStats],
    dependencies=[Depends(require_admin)],
)
async def application_stats(service: TalentServiceDep):
    """Totals per status plus the five most recent applications. Admin only."""
    return ApiResponse(data=service.repository.stats())


@talents_router.get("", response_model=ListResponse[TalentApplicationRead])
async def list_verified_talents(service: TalentServiceDep):
    """Public catalogue of verified talents."""
    talents = service.repository.list_by_status(ApplicationStatus.verified)
    return ListResponse(
        data=[TalentApplicationRead.model_validate(t) for t in talents],
        count=len(talents),
    )


@talents_router.patch(
    "/{talent_id}/celebrity-status",
    response_model=ApiResponse[TalentApplicationRead],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND},
)
async def set_celebrity_status(
    talent_id: uuid.UUID, payload: CelebrityUpdate, service: TalentServiceDep
):
    """Flag or unflag a talent as celebrity. Admin only."""
    application = service.set_celebrity(talent_id, payload.is_celebrity)
    return ApiResponse(
        message="Celebrity status updated",
        data=TalentApplicationRead.model_validate(application),
    )


@talents_router.post(
    "/{talent_id}/track-click",
    response_model=ApiResponse[ClickCount],
    responses={**CommonResponses.NOT_FOUND},
)
async def track_click(
    talent_id: uuid.UUID,
    service: TalentServiceDep,
    _event: Annotated[ClickEvent | None, Body()] = None,
):
    """Count a profile click. Public, no body required."""
    application = service.track_click(talent_id)
    return ApiResponse(
        message="Click tracked",
        data=ClickCount(id=application.id, click_count=application.click_count),
    )
