"""Talent application lifecycle.

Business rules around submission, ownership-gated updates, admin pricing
and review transitions. Routers call TalentApplicationService; storage
stays in TalentApplicationRepository.
"""

import logging
import re
import uuid
from typing import Annotated

from fastapi import Depends

from app.auth.dependencies import ensure_owner_or_admin
from app.core.deps import SessionDep, SettingsDep
from app.core.settings import Settings
from app.media.storage import StorageProvider, remove_stored_files
from app.talent.exceptions import (
    ActiveApplicationExistsError,
    ApplicationNotFoundError,
    EmptyUpdateError,
    InvalidPriceError,
    InvalidStatusTransitionError,
    PriceAdminOnlyError,
    TermsNotAcceptedError,
)
from app.talent.models import REVIEW_STATUSES, ApplicationStatus, TalentApplication
from app.talent.repository import TalentApplicationRepository, describe_existing
from app.talent.schemas import (
    RecentApplication,
    TalentApplicationCreate,
    TalentApplicationUpdate,
)
from app.user.models import User

logger = logging.getLogger(__name__)


def validate_price(value: str, symbol: str) -> str:
    """Accept an empty price or a run of the currency glyph (e.g. "€€€")."""
    if re.fullmatch(f"{re.escape(symbol)}*", value) is None:
        raise InvalidPriceError(f"Price must contain only {symbol} symbols")
    return value


def parse_review_status(value: str) -> ApplicationStatus:
    """Only verified and rejected are reachable through review."""
    for status in REVIEW_STATUSES:
        if value == status.value:
            return status
    raise InvalidStatusTransitionError()


class TalentApplicationService:
    def __init__(self, repository: TalentApplicationRepository, settings: Settings):
        self.repository = repository
        self.settings = settings

    def get(self, application_id: uuid.UUID) -> TalentApplication:
        application = self.repository.get(application_id)
        if application is None:
            raise ApplicationNotFoundError()
        return application

    def submit(
        self, submitter: User, payload: TalentApplicationCreate
    ) -> TalentApplication:
        """Create an application owned by the submitter.

        Non-admins may hold one active application at a time; a rejected
        one does not count. Admin submissions are curated entries exempt
        from that rule.
        """
        if not payload.terms_accepted:
            raise TermsNotAcceptedError()

        if not submitter.is_admin:
            existing = self.repository.find_active_for_owner(submitter.id)
            if existing is not None:
                raise ActiveApplicationExistsError(existing=describe_existing(existing))

        application = TalentApplication(
            **payload.model_dump(),
            user_id=submitter.id,
            email=submitter.email,
            status=ApplicationStatus.pending,
            admin_curated=submitter.is_admin,
        )
        application = self.repository.create(application)
        logger.info(
            "Talent application %s submitted by %s", application.id, submitter.id
        )
        return application

    def update(
        self, actor: User, application_id: uuid.UUID, payload: TalentApplicationUpdate
    ) -> TalentApplication:
        """Apply a partial profile update.

        Checks run in order: existence, ownership, admin-only price, price
        format, then that something is left to update.
        """
        application = self.get(application_id)
        ensure_owner_or_admin(
            actor, application.user_id, "You can only update your own applications"
        )

        fields = payload.model_dump(exclude_unset=True)
        if "price" in fields:
            if not actor.is_admin:
                raise PriceAdminOnlyError()
            if fields["price"] is None:
                fields["price"] = ""
            validate_price(fields["price"], self.settings.price_symbol)

        fields = {
            key: value
            for key, value in fields.items()
            if value is not None or key == "price"
        }
        if not fields:
            raise EmptyUpdateError()

        application = self.repository.update(application, **fields)
        logger.info("Talent application %s updated by %s", application.id, actor.id)
        return application

    def review(
        self,
        reviewer: User,
        application_id: uuid.UUID,
        status: str,
        notes: str | None = None,
    ) -> TalentApplication:
        target = parse_review_status(status)
        application = self.repository.set_review(
            application_id, status=target, reviewer_id=reviewer.id, notes=notes
        )
        if application is None:
            raise ApplicationNotFoundError()
        logger.info(
            "Talent application %s %s by %s", application_id, target.value, reviewer.id
        )
        return application

    def set_celebrity(
        self, application_id: uuid.UUID, is_celebrity: bool
    ) -> TalentApplication:
        application = self.repository.update(
            self.get(application_id), is_celebrity=is_celebrity
        )
        logger.info("Celebrity flag of %s set to %s", application_id, is_celebrity)
        return application

    def track_click(self, application_id: uuid.UUID) -> TalentApplication:
        application = self.repository.increment_clicks(application_id)
        if application is None:
            raise ApplicationNotFoundError("Talent not found")
        return application

    async def delete(
        self, application_id: uuid.UUID, storage: StorageProvider
    ) -> int:
        """Delete an application and, best-effort, its stored media files.

        Returns:
            Number of stored files removed
        """
        application = self.get(application_id)
        provider_ids = [media.provider_id for media in application.media]
        self.repository.delete(application)
        logger.info("Talent application %s deleted", application_id)
        return await remove_stored_files(storage, provider_ids)

    async def purge(
        self,
        storage: StorageProvider,
        status: ApplicationStatus | None = None,
        *,
        dry_run: bool = False,
    ) -> list[RecentApplication]:
        """Delete every application (optionally of one status) with its media.

        Returns a snapshot of the affected applications, taken before deletion.
        """
        applications = [
            RecentApplication.model_validate(application)
            for application in self.repository.list_by_status(status)
        ]
        if dry_run:
            return applications
        for application in applications:
            await self.delete(application.id, storage)
        return applications


def get_talent_service(
    session: SessionDep, settings: SettingsDep
) -> TalentApplicationService:
    return TalentApplicationService(TalentApplicationRepository(session), settings)


TalentServiceDep = Annotated[TalentApplicationService, Depends(get_talent_service)]
