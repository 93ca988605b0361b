import logging

import resend

from app.core.constants import JinjaEmailTemplatesEnv
from app.core.settings import get_settings

logger = logging.getLogger(__name__)


def _render_template(template_name: str, **context: str) -> str:
    """Render an email template from app/templates/emails.

    Args:
        template_name: Name of the template file
        **context: Template variables

    Returns:
        Rendered HTML
    """
    template = JinjaEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set, password reset emails are disabled")
        return
    resend.api_key = settings.resend_api_key


def build_reset_url(reset_token: str) -> str:
    settings = get_settings()
    return f"{settings.client_url}/reset-password?token={reset_token}"


def send_password_reset_email(to_email: str, reset_token: str, user_name: str) -> bool:
    """Send password reset email via Resend.

    Delivery is best-effort: failures are logged and reported as False so
    the caller can answer the client without leaking delivery details.

    Args:
        to_email: Recipient email address
        reset_token: Single-use reset token
        user_name: Recipient display name

    Returns:
        True when the email was handed to Resend
    """
    settings = get_settings()
    if not settings.email_configured:
        return False

    from_email = f"noreply@{settings.app_domain}"
    reset_url = build_reset_url(reset_token)
    logger.debug("Sending password reset email to %s", to_email)

    html_content = _render_template(
        "password-reset.html",
        reset_url=reset_url,
        user_name=user_name or "there",
    )

    try:
        resend.Emails.send(
            {
                "from": from_email,
                "to": to_email,
                "subject": "Talento - Reset Your Password",
                "html": html_content,
            }
        )
    except Exception as e:
        logger.error("Password reset email to %s failed: %s", to_email, e)
        return False
    return True
