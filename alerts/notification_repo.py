from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.models import NotificationRow


class NotificationRepositoryPg:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_notification(
        self,
        user_id: uuid.UUID,
        budget_id: uuid.UUID,
        message: str,
        sent_at: datetime,
    ) -> uuid.UUID:
        row = NotificationRow(user_id=user_id, budget_id=budget_id, message=message, sent_at=sent_at, is_read=False)
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            return row.id
