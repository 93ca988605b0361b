"""Talent application store."""

import logging
import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.core.mixins import utc_now
from app.talent.exceptions import ActiveApplicationExistsError
from app.talent.models import ACTIVE_STATUSES, ApplicationStatus, TalentApplication
from app.talent.schemas import ApplicationCounts, ApplicationStats, RecentApplication

logger = logging.getLogger(__name__)

RECENT_APPLICATIONS_LIMIT = 5


def describe_existing(application: TalentApplication) -> dict[str, Any]:
    """Summary of a blocking application, returned with the conflict error."""
    return {
        "id": str(application.id),
        "status": application.status.value,
        "submittedAt": application.created_at.isoformat(),
    }


class TalentApplicationRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, application_id: uuid.UUID) -> TalentApplication | None:
        return self.session.get(TalentApplication, application_id)

    def list_by_status(
        self, status: ApplicationStatus | None = None
    ) -> Sequence[TalentApplication]:
        """Applications newest first, optionally filtered by status."""
        statement = select(TalentApplication)
        if status is not None:
            statement = statement.where(TalentApplication.status == status)
        statement = statement.order_by(col(TalentApplication.created_at).desc())
        return self.session.exec(statement).all()

    def find_active_for_owner(self, user_id: uuid.UUID) -> TalentApplication | None:
        statement = (
            select(TalentApplication)
            .where(TalentApplication.user_id == user_id)
            .where(col(TalentApplication.status).in_(ACTIVE_STATUSES))
            .where(TalentApplication.admin_curated == False)  # noqa: E712
            .order_by(col(TalentApplication.created_at).desc())
        )
        return self.session.exec(statement).first()

    def latest_for_owner(self, user_id: uuid.UUID) -> TalentApplication | None:
        statement = (
            select(TalentApplication)
            .where(TalentApplication.user_id == user_id)
            .order_by(col(TalentApplication.created_at).desc())
        )
        return self.session.exec(statement).first()

    def create(self, application: TalentApplication) -> TalentApplication:
        """Insert an application.

        Raises:
            ActiveApplicationExistsError: If the active-owner unique index
                rejects the row (a concurrent submission won the race).
        """
        self.session.add(application)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if application.user_id is not None:
                existing = self.find_active_for_owner(application.user_id)
                if existing is not None:
                    raise ActiveApplicationExistsError(
                        existing=describe_existing(existing)
                    ) from e
            raise
        self.session.refresh(application)
        return application

    def update(self, application: TalentApplication, **fields: Any) -> TalentApplication:
        for key, value in fields.items():
            setattr(application, key, value)
        self.session.add(application)
        self.session.commit()
        self.session.refresh(application)
        return application

    def set_review(
        self,
        application_id: uuid.UUID,
        *,
        status: ApplicationStatus,
        reviewer_id: uuid.UUID,
        notes: str | None,
    ) -> TalentApplication | None:
        """Record a review decision in a single UPDATE."""
        now = utc_now()
        result = self.session.exec(
            update(TalentApplication)
            .where(col(TalentApplication.id) == application_id)
            .values(
                status=status,
                reviewed_by=reviewer_id,
                reviewed_at=now,
                review_notes=notes,
                updated_at=now,
            )
        )
        self.session.commit()
        if result.rowcount == 0:
            return None
        return self.get(application_id)

    def increment_clicks(self, application_id: uuid.UUID) -> TalentApplication | None:
        """Atomically add one to the click counter."""
        result = self.session.exec(
            update(TalentApplication)
            .where(col(TalentApplication.id) == application_id)
            .values(click_count=TalentApplication.click_count + 1)
        )
        self.session.commit()
        if result.rowcount == 0:
            return None
        return self.get(application_id)

    def delete(self, application: TalentApplication) -> None:
        self.session.delete(application)
        self.session.commit()

    def counts(self) -> ApplicationCounts:
        rows = self.session.exec(
            select(TalentApplication.status, func.count()).group_by(
                TalentApplication.status
            )
        ).all()
        by_status = {status: count for status, count in rows}
        return ApplicationCounts(
            total=sum(by_status.values()),
            pending=by_status.get(ApplicationStatus.pending, 0),
            verified=by_status.get(ApplicationStatus.verified, 0),
            rejected=by_status.get(ApplicationStatus.rejected, 0),
        )

    def stats(self) -> ApplicationStats:
        recent = self.session.exec(
            select(TalentApplication)
            .order_by(col(TalentApplication.created_at).desc())
            .limit(RECENT_APPLICATIONS_LIMIT)
        ).all()
        return ApplicationStats(
            **self.counts().model_dump(),
            recent_applications=[RecentApplication.model_validate(a) for a in recent],
        )
