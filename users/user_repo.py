from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.models import UserRow
from db.rows import validate_rows
from users.user_model import User


class UserRepositoryPg:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def all_users(self) -> List[User]:
        stmt = select(UserRow).order_by(UserRow.email)
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return validate_rows(User, res.scalars().all(), "user")

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        stmt = select(UserRow).where(UserRow.id == user_id)
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            users = validate_rows(User, res.scalars().all(), "user")
            return users[0] if users else None
