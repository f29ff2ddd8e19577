"""Work log service - business logic for work log management."""
import logging

from timetracker.database import transaction
from timetracker.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from timetracker.models.user import User
from timetracker.models.work_log import WorkLog, WorkLogCreate
from timetracker.repositories.timer_repository import TimerRepository
from timetracker.repositories.work_log_repository import WorkLogRepository
from timetracker.utils.day_split import local_now

logger = logging.getLogger(__name__)


class WorkLogService:
    """Service for handling work log operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.work_logs = WorkLogRepository(db)
        self.timers = TimerRepository(db)

    def _new_work_log(self, data: WorkLogCreate, owner: User) -> WorkLog:
        """Validate incoming data and build an unsaved, active work log."""
        name = data.work_log_name.strip() if data.work_log_name else ""
        if not name:
            raise InvalidInputError("workLogName: must not be blank")
        if data.hourly_rate is not None and data.hourly_rate < 0:
            raise InvalidInputError("hourlyRate: must not be negative")

        return WorkLog(
            owner_id=owner.id,
            work_log_name=name,
            hourly_rate=data.hourly_rate,
            activated=True,
            created_at=local_now(),
        )

    async def _existing(self, work_log_id: str, acting_user: User) -> WorkLog:
        """
        Load a work log that belongs to the acting user.

        Raises:
            ForbiddenError: If not found within the user's work logs
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise ForbiddenError(f"Work log not found: {work_log_id}")
        return work_log

    async def create_work_log(self, data: WorkLogCreate, acting_user: User) -> WorkLog:
        """
        Create a new work log owned by the acting user.

        Raises:
            InvalidInputError: If the name is blank
        """
        saved = await self.work_logs.save(self._new_work_log(data, acting_user))
        logger.info("Created work log %s for user %s", saved.id, acting_user.id)
        return saved

    async def list_work_logs(self, acting_user: User) -> list[WorkLog]:
        """List the acting user's work logs, oldest first."""
        return await self.work_logs.find_all_by_owner(acting_user.id)

    async def get_work_log(self, work_log_id: str, acting_user: User) -> WorkLog:
        """
        Get one of the acting user's work logs.

        Raises:
            NotFoundError: If missing or owned by someone else
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise NotFoundError(f"Work log not found: {work_log_id}")
        return work_log

    async def replace_work_log(
        self,
        data: WorkLogCreate,
        work_log_id: str,
        acting_user: User,
    ) -> WorkLog:
        """
        Replace a work log with a new version.

        The old record is deactivated, not deleted, and the new data is
        stored as a separate work log with its own ID. The two records are
        not linked.

        Returns:
            The newly created work log

        Raises:
            ForbiddenError: If the work log isn't owned by the user
            InvalidInputError: If the new name is blank
        """
        replacement = self._new_work_log(data, acting_user)
        old = await self._existing(work_log_id, acting_user)

        async with transaction(self.db) as session:
            await self.work_logs.save(old.model_copy(update={"activated": False}), session=session)
            saved = await self.work_logs.save(replacement, session=session)

        logger.info("Replaced work log %s with %s", old.id, saved.id)
        return saved

    async def delete_work_log(self, work_log_id: str, acting_user: User) -> None:
        """
        Delete a work log together with all its timers.

        Raises:
            ForbiddenError: If the work log isn't owned by the user
        """
        work_log = await self._existing(work_log_id, acting_user)

        async with transaction(self.db) as session:
            removed = await self.timers.delete_all_by_work_log(work_log.id, session=session)
            await self.work_logs.delete(work_log, session=session)

        logger.info("Deleted work log %s and %d timers", work_log.id, removed)
