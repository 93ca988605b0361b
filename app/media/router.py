"""Media domain routers.

Upload and delete of media-kit files (/upload), per-user and per-talent
listings (/media) and the admin overview (/admin).
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.auth.dependencies import CurrentUserDep, ensure_owner_or_admin, require_admin
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep, SettingsDep
from app.core.schemas import ApiResponse, ListResponse, MessageResponse
from app.media.exceptions import (
    FileTooLargeError,
    MediaNotFoundError,
    NoFilesUploadedError,
    StorageError,
    TooManyFilesError,
    UnsupportedFileTypeError,
)
from app.media.models import MediaUpload
from app.media.repository import MediaRepository
from app.media.schemas import (
    MediaList,
    MediaRead,
    MediaStatsDetail,
    MediaUploadResult,
    UploadedFile,
)
from app.media.storage import (
    StorageDep,
    StorageProvider,
    StoredFile,
    generate_stored_name,
    is_allowed_media,
    remove_stored_files,
)
from app.talent.exceptions import ApplicationNotFoundError
from app.talent.repository import TalentApplicationRepository
from app.user.models import User

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

upload_router = APIRouter(
    prefix=Routes.UPLOAD.prefix,
    tags=[Routes.UPLOAD.tag],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
media_router = APIRouter(prefix=Routes.MEDIA.prefix, tags=[Routes.MEDIA.tag])
admin_router = APIRouter(
    prefix=Routes.ADMIN.prefix,
    tags=[Routes.ADMIN.tag],
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)


async def _read_uploads(
    files: list[UploadFile], *, max_files: int, max_bytes: int, max_mb: int
) -> list[tuple[UploadFile, bytes]]:
    """Validate the whole batch before anything is stored."""
    if not files:
        raise NoFilesUploadedError()
    if len(files) > max_files:
        raise TooManyFilesError(max_files)

    for upload in files:
        if not is_allowed_media(upload.filename or ""):
            raise UnsupportedFileTypeError(upload.filename or "file")
        if upload.size is not None and upload.size > max_bytes:
            raise FileTooLargeError(upload.filename or "file", max_mb)

    contents = []
    for upload in files:
        content = await upload.read()
        if len(content) > max_bytes:
            raise FileTooLargeError(upload.filename or "file", max_mb)
        contents.append((upload, content))
    return contents


async def _store_batch(
    storage: StorageProvider,
    contents: list[tuple[UploadFile, bytes]],
    folder: str,
) -> list[tuple[UploadFile, bytes, str, StoredFile]]:
    """Store every file or none: earlier files are removed if one fails."""
    stored: list[tuple[UploadFile, bytes, str, StoredFile]] = []
    try:
        for upload, content in contents:
            filename = generate_stored_name(upload.filename or "file")
            result = await storage.put(
                content,
                filename=filename,
                content_type=upload.content_type or DEFAULT_CONTENT_TYPE,
                folder=folder,
            )
            stored.append((upload, content, filename, result))
    except StorageError:
        await remove_stored_files(storage, [item[3].provider_id for item in stored])
        raise
    return stored


@upload_router.post(
    "/media-kit",
    response_model=MediaUploadResult,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.NOT_FOUND},
)
async def upload_media_kit(
    user: CurrentUserDep,
    session: SessionDep,
    settings: SettingsDep,
    storage: StorageDep,
    media_kit: Annotated[list[UploadFile] | None, File(alias="mediaKit")] = None,
    talent_id: Annotated[uuid.UUID | None, Form(alias="talentId")] = None,
):
    """Upload media-kit files.

    Up to MAX_UPLOAD_FILES files of at most MAX_UPLOAD_SIZE_MB each. The
    request succeeds or fails as a whole.
    """
    if talent_id is not None:
        application = TalentApplicationRepository(session).get(talent_id)
        if application is None:
            raise ApplicationNotFoundError()
        ensure_owner_or_admin(user, application.user_id)

    contents = await _read_uploads(
        media_kit or [],
        max_files=settings.max_upload_files,
        max_bytes=settings.max_upload_size_bytes,
        max_mb=settings.max_upload_size_mb,
    )
    stored = await _store_batch(storage, contents, settings.media_folder)

    records = [
        MediaUpload(
            user_id=user.id,
            talent_id=talent_id,
            filename=filename,
            original_name=upload.filename or filename,
            url=result.url,
            provider_id=result.provider_id,
            storage_backend=result.backend,
            file_size=len(content),
            mime_type=upload.content_type or DEFAULT_CONTENT_TYPE,
        )
        for upload, content, filename, result in stored
    ]
    MediaRepository(session).add_all(records)
    logger.info("User %s uploaded %d media files", user.id, len(records))

    return MediaUploadResult(
        message=f"{len(records)} file(s) uploaded successfully",
        files=[
            UploadedFile(
                id=record.id,
                filename=record.filename,
                original_name=record.original_name,
                size=record.file_size,
                url=record.url,
                provider_id=record.provider_id,
            )
            for record in records
        ],
        urls=[record.url for record in records],
    )


async def _delete_media(
    media: MediaUpload | None,
    user: User,
    repository: MediaRepository,
    storage: StorageProvider,
) -> MessageResponse:
    if media is None:
        raise MediaNotFoundError()
    ensure_owner_or_admin(user, media.user_id, "You can only delete your own files")

    provider_id = media.provider_id
    repository.delete(media)
    await remove_stored_files(storage, [provider_id])
    logger.info("Media %s deleted by %s", provider_id, user.id)
    return MessageResponse(message="File deleted successfully")


@upload_router.delete(
    "/media-kit/provider/{provider_id:path}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_media_by_provider_id(
    provider_id: str, user: CurrentUserDep, session: SessionDep, storage: StorageDep
):
    """Delete a file by its storage provider identifier. Uploader or admin."""
    repository = MediaRepository(session)
    return await _delete_media(
        repository.get_by_provider_id(provider_id), user, repository, storage
    )


@upload_router.delete(
    "/media-kit/{media_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_media(
    media_id: uuid.UUID, user: CurrentUserDep, session: SessionDep, storage: StorageDep
):
    """Delete a file by id. Uploader or admin."""
    repository = MediaRepository(session)
    return await _delete_media(repository.get(media_id), user, repository, storage)


@admin_router.get("/media-kits", response_model=MediaList)
async def list_media_kits(
    session: SessionDep, limit: Annotated[int, Query(ge=1, le=1000)] = 100
):
    """Most recent uploads with storage totals. Admin only."""
    repository = MediaRepository(session)
    records = repository.list_recent(limit)
    return MediaList(
        data=[MediaRead.model_validate(record) for record in records],
        count=len(records),
        stats=repository.summary(),
    )


@media_router.get(
    "/user/{user_id}",
    response_model=ListResponse[MediaRead],
    dependencies=[Depends(require_admin)],
)
async def list_user_media(user_id: uuid.UUID, session: SessionDep):
    """Files uploaded by one user. Admin only."""
    records = MediaRepository(session).list_for_user(user_id)
    return ListResponse(
        data=[MediaRead.model_validate(record) for record in records],
        count=len(records),
    )


@media_router.get("/talent/{talent_id}", response_model=ListResponse[MediaRead])
async def list_talent_media(talent_id: uuid.UUID, session: SessionDep):
    """Files attached to a talent application."""
    records = MediaRepository(session).list_for_talent(talent_id)
    return ListResponse(
        data=[MediaRead.model_validate(record) for record in records],
        count=len(records),
    )


@media_router.get(
    "/stats",
    response_model=ApiResponse[MediaStatsDetail],
    dependencies=[Depends(require_admin)],
)
async def media_stats(session: SessionDep):
    """Storage totals. Admin only."""
    return ApiResponse(data=MediaRepository(session).stats())
