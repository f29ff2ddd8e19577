"""Work log model definitions."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from timetracker.models.base import CamelModel


class WorkLogCreate(CamelModel):
    """Work log creation / replacement data."""

    work_log_name: str
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class WorkLog(BaseModel):
    """
    Work log record as stored.

    ``hourly_rate`` is kept as a JSON/BSON double; billing math converts it
    to ``Decimal`` before rounding (see ``billable_amount``).
    """

    id: Optional[str] = None
    owner_id: str
    work_log_name: str
    hourly_rate: Optional[float] = None
    activated: bool = True
    created_at: datetime


class WorkLogResponse(CamelModel):
    """Work log as returned to the client."""

    id: str
    work_log_name: str
    hourly_rate: Optional[float] = None
    activated: bool
    created_at: datetime
