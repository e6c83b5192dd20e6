from __future__ import annotations

import logging
from email.message import EmailMessage

from aiosmtplib import SMTP, SMTPException

from settings.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return bool(settings.SMTP_HOST and settings.SMTP_PORT and settings.ALERTS_FROM_EMAIL)


async def send_alert_email(to_email: str, subject: str, body: str) -> bool:
    """
    Send a plaintext alert. Returns False when SMTP is not configured or the
    delivery fails; callers treat email as best effort.
    """
    if not smtp_configured():
        logger.debug("SMTP not configured, not emailing %s", to_email)
        return False
    msg = EmailMessage()
    msg["From"] = settings.ALERTS_FROM_EMAIL
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body)
    try:
        # The context manager closes the connection even when sending fails
        async with SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
            if settings.SMTP_USER and settings.SMTP_PASS:
                await smtp.login(settings.SMTP_USER, settings.SMTP_PASS)
            await smtp.send_message(msg)
        return True
    except (SMTPException, OSError) as e:
        logger.warning("Failed to send alert email to %s: %s", to_email, e)
        return False
