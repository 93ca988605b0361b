"""Media metadata store."""

import uuid
from collections.abc import Sequence

from sqlalchemy import distinct, func
from sqlmodel import Session, col, select

from app.media.models import MediaUpload
from app.media.schemas import MediaStats, MediaStatsDetail

BYTES_PER_MB = 1024 * 1024


class MediaRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, media_id: uuid.UUID) -> MediaUpload | None:
        return self.session.get(MediaUpload, media_id)

    def get_by_provider_id(self, provider_id: str) -> MediaUpload | None:
        return self.session.exec(
            select(MediaUpload).where(MediaUpload.provider_id == provider_id)
        ).first()

    def list_recent(self, limit: int = 100) -> Sequence[MediaUpload]:
        return self.session.exec(
            select(MediaUpload)
            .order_by(col(MediaUpload.uploaded_at).desc())
            .limit(limit)
        ).all()

    def list_for_user(self, user_id: uuid.UUID) -> Sequence[MediaUpload]:
        return self.session.exec(
            select(MediaUpload)
            .where(MediaUpload.user_id == user_id)
            .order_by(col(MediaUpload.uploaded_at).desc())
        ).all()

    def list_for_talent(self, talent_id: uuid.UUID) -> Sequence[MediaUpload]:
        return self.session.exec(
            select(MediaUpload)
            .where(MediaUpload.talent_id == talent_id)
            .order_by(col(MediaUpload.uploaded_at).desc())
        ).all()

    def add_all(self, records: Sequence[MediaUpload]) -> Sequence[MediaUpload]:
        """Persist a batch in one commit."""
        self.session.add_all(records)
        self.session.commit()
        for record in records:
            self.session.refresh(record)
        return records

    def delete(self, media: MediaUpload) -> None:
        self.session.delete(media)
        self.session.commit()

    def stats(self) -> MediaStatsDetail:
        total_files, total_size, unique_users, talents = self.session.exec(
            select(
                func.count(col(MediaUpload.id)),
                func.coalesce(func.sum(MediaUpload.file_size), 0),
                func.count(distinct(MediaUpload.user_id)),
                func.count(distinct(MediaUpload.talent_id)),
            )
        ).one()
        total_size = int(total_size)
        return MediaStatsDetail(
            total_files=total_files,
            total_size=total_size,
            total_size_mb=f"{total_size / BYTES_PER_MB:.2f}",
            total_size_gb=f"{total_size / BYTES_PER_MB / 1024:.2f}",
            unique_users=unique_users,
            talents_with_media=talents,
        )

    def summary(self) -> MediaStats:
        detail = self.stats()
        return MediaStats.model_validate(detail.model_dump())
