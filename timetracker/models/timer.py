"""Timer model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from timetracker.models.base import CamelModel


class TimerStatus(str, Enum):
    """Timer states. STOPPED is terminal."""

    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class Timer(BaseModel):
    """Timer record as stored."""

    id: Optional[str] = None
    work_log_id: str
    owner_id: str
    started_at: datetime
    stopped_at: Optional[datetime] = None
    duration_in_seconds: Optional[int] = None
    status: TimerStatus = TimerStatus.RUNNING
    note: Optional[str] = None


class TimerStart(BaseModel):
    """Optional body for starting a timer."""

    note: Optional[str] = None


class TimerResponse(CamelModel):
    """Timer as returned to the client."""

    id: str
    work_log_id: str
    started_at: datetime
    stopped_at: Optional[datetime] = None
    duration_in_seconds: Optional[int] = None
    status: TimerStatus
    note: Optional[str] = None


class DailyTotal(CamelModel):
    """Tracked time of one work log on one calendar day."""

    day: date
    total_seconds: int
    amount: Optional[float] = None
