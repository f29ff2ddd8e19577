"""Timer endpoints - time tracking operations."""
from datetime import datetime
from typing import Callable, Optional

from fastapi import APIRouter, Body, Depends, status

from timetracker.database import get_database
from timetracker.mappers import timer_to_response
from timetracker.models.timer import DailyTotal, TimerResponse, TimerStart
from timetracker.models.user import User
from timetracker.routers.auth import get_current_user
from timetracker.services.timer_service import TimerService
from timetracker.utils.day_split import local_now


router = APIRouter(prefix="/api", tags=["timers"])


def get_clock() -> Callable[[], datetime]:
    """Dependency providing the current-time source for timers."""
    return local_now


def get_timer_service(
    db=Depends(get_database),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> TimerService:
    return TimerService(db, clock=clock)


@router.post(
    "/worklogs/{work_log_id}/startTimer",
    response_model=TimerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_timer(
    work_log_id: str,
    timer_start: Optional[TimerStart] = Body(None),
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """
    Start a timer on a work log.

    - Requires authentication
    - Only one timer can run per work log (409)
    """
    note = timer_start.note if timer_start else None
    timer = await service.start_timer(work_log_id, user, note=note)
    return timer_to_response(timer)


@router.post("/worklogs/{work_log_id}/stopTimer", response_model=TimerResponse)
async def stop_timer(
    work_log_id: str,
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """
    Stop the running timer of a work log.

    - 409 if no timer is running
    - If the timer crossed midnight it is split; the part after midnight is returned
    """
    return timer_to_response(await service.stop_timer(work_log_id, user))


@router.get("/worklogs/{work_log_id}/active-timer", response_model=TimerResponse)
async def get_active_timer(
    work_log_id: str,
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """Get the running timer of a work log (404 if none)."""
    return timer_to_response(await service.get_active_timer(work_log_id, user))


@router.get("/worklogs/{work_log_id}/timers", response_model=list[TimerResponse])
@router.get("/worklogs/{work_log_id}/summary", response_model=list[TimerResponse])
async def list_timers(
    work_log_id: str,
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """List all timers of a work log, most recent first."""
    return [timer_to_response(t) for t in await service.list_timers(work_log_id, user)]


@router.get("/worklogs/{work_log_id}/daily-totals", response_model=list[DailyTotal])
async def daily_totals(
    work_log_id: str,
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """Tracked seconds (and earnings, if the work log has a rate) per day."""
    return await service.daily_totals(work_log_id, user)


@router.post("/timers/{timer_id}/stop", response_model=TimerResponse)
async def stop_active_timer(
    timer_id: str,
    user: User = Depends(get_current_user),
    service: TimerService = Depends(get_timer_service),
):
    """Stop a specific running timer (409 if it is already stopped)."""
    return timer_to_response(await service.stop_active_timer(timer_id, user))
