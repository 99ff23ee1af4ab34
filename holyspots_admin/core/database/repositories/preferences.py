"""
UI preference repository.

Data access for the ``ui_preferences`` key-value table.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..base import utc_now
from ..entities.preferences import UIPreference
from .base import AsyncBaseRepository


class PreferenceRepository(AsyncBaseRepository[UIPreference]):
    """Repository for UI preference entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, UIPreference)

    async def get_by_id(self, key: str | int) -> Optional[UIPreference]:
        return await self.session.get(UIPreference, str(key))

    async def get_value(self, key: str) -> Optional[str]:
        """Return the raw stored value of ``key`` or None."""
        entry = await self.get_by_id(key)
        return entry.value if entry else None

    async def upsert(self, key: str, value: str) -> UIPreference:
        """Insert or overwrite the value stored under ``key``.

        Args:
            key: Namespaced preference key
            value: JSON-encoded value

        Returns:
            The persisted entry
        """
        entry = await self.get_by_id(key)
        if entry is None:
            entry = UIPreference(key=key, value=value)
        else:
            entry.value = value
            entry.updated_at = utc_now()
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def delete(self, key: str | int) -> bool:
        entry = await self.get_by_id(key)
        if entry:
            await self.session.delete(entry)
            await self.session.commit()
            return True
        return False

    async def list_by_prefix(self, prefix: str) -> List[UIPreference]:
        """List entries whose key starts with ``prefix``, ordered by key."""
        stmt = select(UIPreference).where(col(UIPreference.key).startswith(prefix, autoescape=True)).order_by(UIPreference.key)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
