"""Sleep transition models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from pyaccounts.models.service import BaseService


class SleepTransitionMetrics(BaseModel):
    """Resource usage captured when a service was put to sleep."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    slept_at: datetime
    memory_bytes: int | None = None
    cpu_percent: float | None = None


class SleepingNotificationInfo(BaseModel):
    """Everything needed to explain to the user why a service went to sleep."""

    model_config = ConfigDict(frozen=True)

    service: BaseService
    close_metrics: SleepTransitionMetrics
