"""Tray message model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TrayMessage(BaseModel):
    """A notification-worthy item surfaced outside the main window."""

    model_config = ConfigDict(frozen=True)

    id: str
    """Unique within the owning service."""
    service_id: str
    text: str
    extended_text: str | None = None
    timestamp: datetime | None = None
