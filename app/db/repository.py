"""Key-value storage helpers."""
from datetime import datetime
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.db.models import KeyValueEntry


class KeyValueRepository:
    """Repository for key-value slot database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, key: str) -> Optional[str]:
        """Get the raw value stored under key, or None if the slot is empty."""
        stmt = select(KeyValueEntry).where(KeyValueEntry.key == key)
        result = await self.db.execute(stmt)
        entry = result.scalar_one_or_none()
        return entry.value if entry else None

    async def put(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        entry = await self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
            entry.updated_at = datetime.utcnow()
        await self.db.commit()


class KeyValueSlot:
    """
    A single named slot bound to a session factory.

    Each read/write opens its own short-lived session, so the slot can be
    owned by long-lived objects outside the request scope.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession], key: str):
        self.session_factory = session_factory
        self.key = key

    async def read(self) -> Optional[str]:
        async with self.session_factory() as db:
            return await KeyValueRepository(db).get(self.key)

    async def write(self, value: str) -> None:
        async with self.session_factory() as db:
            await KeyValueRepository(db).put(self.key, value)
