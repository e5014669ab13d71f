"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.phasetracker.core.config import get_settings
from src.phasetracker.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_CARD_STYLE = (
    "font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; "
    "padding: 20px; border: 1px solid #eee; border-radius: 5px;"
)
_HIGHLIGHT_STYLE = (
    "background-color: #f5f5f5; padding: 10px 20px; border-radius: 4px; "
    "margin: 20px 0; text-align: center;"
)


def _send_email(to: str, subject: str, body_html: str, email_type: str) -> bool:
    """Send one email, bounded by the configured timeout.

    Returns:
        True if the email was sent (or logged in dev mode), False on error
    """
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - email not sent", to=to, email_type=email_type)
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": body_html,
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Email sent", to=to, email_type=email_type)
        return True
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out",
            to=to,
            email_type=email_type,
            timeout=settings.email_send_timeout_seconds,
        )
        return False
    except Exception as e:
        logger.error("Failed to send email", to=to, email_type=email_type, error=str(e))
        return False


def send_verification_code_email(to: str, code: str) -> bool:
    """Send a one-time verification code.

    Used for both admin signup verification and client login.
    """
    settings = get_settings()
    return _send_email(
        to,
        f"{settings.app_name}: Your Verification Code",
        _get_verification_code_html(code, settings.app_name),
        email_type="verification_code",
    )


def send_project_assignment_email(to: str, project_name: str) -> bool:
    """Tell a client they have been assigned to a project."""
    settings = get_settings()
    return _send_email(
        to,
        f"{settings.app_name}: You have been assigned to a project",
        _get_project_assignment_html(project_name, settings.app_name),
        email_type="project_assignment",
    )


def _get_verification_code_html(code: str, app_name: str) -> str:
    """Generate HTML content for the verification code email."""
    settings = get_settings()
    return f"""<!DOCTYPE html>
<html>
<body>
<div style="{_CARD_STYLE}">
    <h2 style="color: #333;">{app_name} Verification Code</h2>
    <p>Hello,</p>
    <p>Your verification code for {app_name} is:</p>
    <div style="{_HIGHLIGHT_STYLE}">
        <h2 style="color: #4a6ee0; letter-spacing: 2px;">{html.escape(code)}</h2>
    </div>
    <p>This code will expire in {settings.verification_code_expire_minutes} minutes.</p>
    <p>If you didn't request this code, please ignore this email.</p>
    <p>Thank you,<br>The {app_name} Team</p>
</div>
</body>
</html>"""


def _get_project_assignment_html(project_name: str, app_name: str) -> str:
    """Generate HTML content for the project assignment email."""
    safe_project_name = html.escape(project_name)
    return f"""<!DOCTYPE html>
<html>
<body>
<div style="{_CARD_STYLE}">
    <h2 style="color: #333;">Project Assignment Notification</h2>
    <p>Hello,</p>
    <p>You have been assigned to the following project in {app_name}:</p>
    <div style="{_HIGHLIGHT_STYLE}">
        <h3 style="color: #4a6ee0;">{safe_project_name}</h3>
    </div>
    <p>You can now log in to your client dashboard to track the project's progress.</p>
    <p>Thank you,<br>The {app_name} Team</p>
</div>
</body>
</html>"""
