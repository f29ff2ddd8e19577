"""Explicit mappings from stored records to client-facing models."""
from timetracker.models.timer import Timer, TimerResponse
from timetracker.models.user import User, UserResponse
from timetracker.models.work_log import WorkLog, WorkLogResponse


def timer_to_response(timer: Timer) -> TimerResponse:
    return TimerResponse(
        id=timer.id,
        work_log_id=timer.work_log_id,
        started_at=timer.started_at,
        stopped_at=timer.stopped_at,
        duration_in_seconds=timer.duration_in_seconds,
        status=timer.status,
        note=timer.note,
    )


def work_log_to_response(work_log: WorkLog) -> WorkLogResponse:
    return WorkLogResponse(
        id=work_log.id,
        work_log_name=work_log.work_log_name,
        hourly_rate=work_log.hourly_rate,
        activated=work_log.activated,
        created_at=work_log.created_at,
    )


def user_to_response(user: User) -> UserResponse:
    """Map a user record; the password hash is never part of the result."""
    return UserResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        created_at=user.created_at,
    )
