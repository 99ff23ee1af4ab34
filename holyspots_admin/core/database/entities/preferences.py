"""
UI preference entity.

Each row holds one JSON-encoded preference value under a namespaced key of
the form ``holyspots_admin:<client_id>:<name>``.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field

from ..base import Base, utc_now


class UIPreference(Base, table=True):
    """Persistent key-value entry of the preference store.

    Table: ui_preferences
    """

    __tablename__ = "ui_preferences"
    __table_args__ = ({"extend_existing": True},)

    key: str = Field(primary_key=True, max_length=255, description="Namespaced preference key")
    value: str = Field(description="JSON-encoded preference value")
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"UIPreference(key={self.key})"
