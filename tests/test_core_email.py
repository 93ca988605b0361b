"""Tests for app/core/email.py - password reset email."""

from unittest.mock import patch

import pytest

from app.core import email as email_module
from app.core.settings import Settings

CONFIGURED = Settings(
    _env_file=None,
    database_url="sqlite://",
    jwt_secret_key="jwt",
    session_secret_key="session",
    resend_api_key="re_test",
    app_domain="talento.example.com",
    client_url="https://app.example.com",
)


@pytest.fixture
def configured():
    with patch.object(email_module, "get_settings", return_value=CONFIGURED):
        yield


def test_init_resend_sets_api_key(configured):
    with patch("app.core.email.resend") as mock_resend:
        email_module.init_resend()

    assert mock_resend.api_key == "re_test"


def test_build_reset_url(configured):
    assert (
        email_module.build_reset_url("tok")
        == "https://app.example.com/reset-password?token=tok"
    )


def test_send_password_reset_email(configured):
    with patch("app.core.email.resend.Emails.send") as mock_send:
        sent = email_module.send_password_reset_email("user@example.com", "tok", "Giulia")

    assert sent is True
    message = mock_send.call_args[0][0]
    assert message["from"] == "noreply@talento.example.com"
    assert message["to"] == "user@example.com"
    assert message["subject"] == "Talento - Reset Your Password"
    assert "https://app.example.com/reset-password?token=tok" in message["html"]
    assert "Giulia" in message["html"]


def test_send_failure_is_reported_not_raised(configured):
    with patch("app.core.email.resend.Emails.send", side_effect=RuntimeError("down")):
        assert email_module.send_password_reset_email("u@example.com", "tok", "") is False


def test_send_skipped_without_api_key():
    with patch("app.core.email.resend.Emails.send") as mock_send:
        assert email_module.send_password_reset_email("u@example.com", "tok", "") is False

    mock_send.assert_not_called()
