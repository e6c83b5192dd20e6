from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Awaitable, Callable, Protocol

from alerts.email_sender import send_alert_email
from alerts.notification_model import BudgetWarning
from services.clock import Clock

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], Awaitable[bool]]


class NotificationRecorder(Protocol):
    async def create_notification(
        self, user_id: uuid.UUID, budget_id: uuid.UUID, message: str, sent_at: datetime
    ) -> uuid.UUID: ...


class NotificationService:
    """Stores a notification for each budget warning and emails it to the user."""

    def __init__(self, repo: NotificationRecorder, clock: Clock, send_email: EmailSender = send_alert_email) -> None:
        self._repo = repo
        self._clock = clock
        self._send_email = send_email

    async def dispatch_warning(self, warning: BudgetWarning) -> None:
        message = warning.render_message()
        await self._repo.create_notification(
            user_id=warning.user.id,
            budget_id=warning.budget.id,
            message=message,
            sent_at=self._clock.now(),
        )
        if not warning.user.email:
            logger.info("User %s has no email; notification stored only", warning.user.id)
            return
        sent = await self._send_email(warning.user.email, warning.subject, message)
        if not sent:
            logger.info("Budget alert for %s stored but not emailed", warning.budget.id)
