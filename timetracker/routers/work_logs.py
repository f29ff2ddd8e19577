"""Work log router - API endpoints for work log management."""
from fastapi import APIRouter, Depends, Response, status

from timetracker.database import get_database
from timetracker.mappers import work_log_to_response
from timetracker.models.user import User
from timetracker.models.work_log import WorkLogCreate, WorkLogResponse
from timetracker.routers.auth import get_current_user
from timetracker.services.work_log_service import WorkLogService


router = APIRouter(prefix="/api/worklogs", tags=["worklogs"])


@router.post("", response_model=WorkLogResponse, status_code=status.HTTP_201_CREATED)
async def create_work_log(
    work_log: WorkLogCreate,
    user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Create a new work log.

    - Requires authentication
    - Name must not be blank (400)
    """
    service = WorkLogService(db)
    created = await service.create_work_log(work_log, user)
    return work_log_to_response(created)


@router.get("", response_model=list[WorkLogResponse])
async def list_work_logs(
    user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """List the current user's work logs, including deactivated versions."""
    service = WorkLogService(db)
    return [work_log_to_response(w) for w in await service.list_work_logs(user)]


@router.get("/{work_log_id}", response_model=WorkLogResponse)
async def get_work_log(
    work_log_id: str,
    user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Get a work log by ID (404 if missing or not yours)."""
    service = WorkLogService(db)
    return work_log_to_response(await service.get_work_log(work_log_id, user))


@router.put("/{work_log_id}", response_model=WorkLogResponse)
async def replace_work_log(
    work_log_id: str,
    work_log: WorkLogCreate,
    user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """
    Replace a work log.

    - The old work log is deactivated and kept
    - The returned work log is a new record with a new ID
    """
    service = WorkLogService(db)
    replaced = await service.replace_work_log(work_log, work_log_id, user)
    return work_log_to_response(replaced)


@router.delete("/{work_log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_work_log(
    work_log_id: str,
    user: User = Depends(get_current_user),
    db=Depends(get_database),
):
    """Delete a work log and all of its timers."""
    service = WorkLogService(db)
    await service.delete_work_log(work_log_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
