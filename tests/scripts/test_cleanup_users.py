"""Tests for scripts/cleanup_users.py."""

import pytest
from sqlmodel import Session, select

from app.media.models import MediaUpload
from app.talent.models import TalentApplication
from app.user.models import User
from scripts.cleanup_users import cleanup_users


@pytest.fixture
def populated(session: Session, storage, user, other_user, admin_user, make_application):
    application = make_application(user)
    make_application(admin_user, admin_curated=True, full_name="Curated Talent")
    storage.files["kits/a.png"] = b"img"
    session.add(
        MediaUpload(
            user_id=user.id,
            talent_id=application.id,
            filename="a.png",
            original_name="a.png",
            url="https://cdn.test/kits/a.png",
            provider_id="kits/a.png",
            file_size=3,
            mime_type="image/png",
        )
    )
    unverified = User(email="new@example.com", name="New", email_verified=False)
    session.add(unverified)
    session.commit()
    return application


def _emails(session: Session) -> set[str]:
    session.expire_all()
    return {u.email for u in session.exec(select(User)).all()}


@pytest.mark.asyncio
async def test_preview_deletes_nothing(session: Session, storage, populated, capsys):
    summary = await cleanup_users(session, storage, confirm=False)

    assert (summary.users, summary.applications, summary.admins_kept) == (2, 1, 1)
    assert summary.files == 0
    assert len(_emails(session)) == 4
    assert "kits/a.png" in storage.files
    assert "delete  talent@example.com" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_confirm_deletes_non_admin_verified_users(session: Session, storage, populated):
    summary = await cleanup_users(session, storage, confirm=True)

    assert (summary.users, summary.applications, summary.files) == (2, 1, 1)
    assert _emails(session) == {"admin@example.com", "new@example.com"}
    names = {a.full_name for a in session.exec(select(TalentApplication)).all()}
    assert names == {"Curated Talent"}
    assert session.exec(select(MediaUpload)).all() == []
    assert storage.files == {}
