"""Timer service - business logic for time tracking."""
import logging
from collections import defaultdict
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from pymongo.errors import DuplicateKeyError, OperationFailure

from timetracker.database import transaction
from timetracker.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    TimerAlreadyRunningError,
)
from timetracker.models.timer import DailyTotal, Timer, TimerStatus
from timetracker.models.user import User
from timetracker.repositories.timer_repository import TimerRepository
from timetracker.repositories.work_log_repository import WorkLogRepository
from timetracker.utils.day_split import Segment, local_now, split_at_midnight

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class TimerService:
    """
    Service for starting and stopping timers on work logs.

    A work log has at most one RUNNING timer. Stopping a timer that crossed
    midnight splits it into two STOPPED timers, one per calendar day.
    """

    def __init__(self, db, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize service with database connection.

        Args:
            db: Database connection
            clock: Returns the current local time (defaults to wall clock)
        """
        self.db = db
        self.timers = TimerRepository(db)
        self.work_logs = WorkLogRepository(db)
        self.clock = clock or local_now

    async def start_timer(
        self,
        work_log_id: str,
        acting_user: User,
        note: Optional[str] = None,
    ) -> Timer:
        """
        Start a new timer on a work log.

        Args:
            work_log_id: Work log ID
            acting_user: Authenticated user
            note: Optional free-text note

        Returns:
            Created RUNNING timer

        Raises:
            NotFoundError: If the work log doesn't exist or isn't owned by the user
            TimerAlreadyRunningError: If a timer is already running on the work log
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise NotFoundError(f"Work log not found: {work_log_id}")

        if await self.timers.exists_running_for_work_log(work_log.id):
            raise TimerAlreadyRunningError("Timer already running for this work log")

        timer = Timer(
            work_log_id=work_log.id,
            owner_id=acting_user.id,
            started_at=self.clock(),
            status=TimerStatus.RUNNING,
            note=note,
        )

        # The partial unique index catches a concurrent start that passed the check above
        try:
            saved = await self.timers.save(timer)
        except DuplicateKeyError:
            raise TimerAlreadyRunningError("Timer already running for this work log") from None

        logger.info("Started timer %s on work log %s", saved.id, work_log.id)
        return saved

    async def stop_timer(self, work_log_id: str, acting_user: User) -> Timer:
        """
        Stop the running timer of a work log.

        Returns:
            The last stored segment; after a midnight split this is the part
            after midnight

        Raises:
            NotFoundError: If the work log doesn't exist or isn't owned by the user
            ConflictError: If no timer is running on the work log
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise NotFoundError(f"Work log not found: {work_log_id}")

        running_timer = await self.timers.find_latest_running_for_work_log(
            work_log.id, acting_user.id
        )
        if running_timer is None:
            raise ConflictError(f"Timer is not running for work log {work_log_id}")

        saved = await self.stop_and_split(running_timer, self.clock())
        return saved[-1]

    async def stop_active_timer(self, timer_id: str, acting_user: User) -> Timer:
        """
        Stop a specific timer.

        Raises:
            NotFoundError: If the timer doesn't exist or isn't owned by the user
            ConflictError: If the timer is already stopped
        """
        running_timer = await self.timers.find_by_id_and_work_log_owner(timer_id, acting_user.id)
        if running_timer is None:
            raise NotFoundError(f"Timer with ID {timer_id} not found")

        if running_timer.status != TimerStatus.RUNNING:
            raise ConflictError(f"Timer is not running: {timer_id}")

        saved = await self.stop_and_split(running_timer, self.clock())
        return saved[-1]

    async def stop_and_split(self, running_timer: Timer, stopped_at: datetime) -> list[Timer]:
        """
        Stop a RUNNING timer, splitting it at midnight when needed.

        The existing timer becomes the first segment. When the timer crossed
        midnight a second timer is inserted for the part after midnight.
        Both writes happen in one transaction.

        Args:
            running_timer: Timer in RUNNING status
            stopped_at: Stop timestamp

        Returns:
            Saved timers in chronological order (one or two)

        Raises:
            ConflictError: If the timer was stopped by a concurrent request
        """
        first, *rest = split_at_midnight(running_timer.started_at, stopped_at)
        stopped = running_timer.model_copy(update={
            "stopped_at": first.stopped_at,
            "duration_in_seconds": first.duration_in_seconds,
            "status": TimerStatus.STOPPED,
        })

        try:
            saved = await self._write_segments(stopped, rest)
        except OperationFailure as e:
            # Losing side of two concurrent stops inside transactions
            if e.has_error_label("TransientTransactionError"):
                raise ConflictError(f"Timer is not running: {running_timer.id}") from None
            raise

        if rest:
            logger.info(
                "Stopped timer %s on work log %s, split at %s",
                running_timer.id, running_timer.work_log_id, first.stopped_at,
            )
        else:
            logger.info("Stopped timer %s on work log %s", running_timer.id, running_timer.work_log_id)

        return saved

    async def _write_segments(self, stopped: Timer, rest: list[Segment]) -> list[Timer]:
        async with transaction(self.db) as session:
            if not await self.timers.save_if_running(stopped, session=session):
                raise ConflictError(f"Timer is not running: {stopped.id}")

            saved = [stopped]
            for segment in rest:
                overflow = Timer(
                    work_log_id=stopped.work_log_id,
                    owner_id=stopped.owner_id,
                    started_at=segment.started_at,
                    stopped_at=segment.stopped_at,
                    duration_in_seconds=segment.duration_in_seconds,
                    status=TimerStatus.STOPPED,
                )
                saved.append(await self.timers.save(overflow, session=session))

        return saved

    async def get_active_timer(self, work_log_id: str, acting_user: User) -> Timer:
        """
        Get the running timer of a work log.

        Raises:
            NotFoundError: If no timer is running (or the work log isn't the user's)
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise NotFoundError(f"No active timer for work log {work_log_id}")

        running_timer = await self.timers.find_latest_running_for_work_log(
            work_log.id, acting_user.id
        )
        if running_timer is None:
            raise NotFoundError(f"No active timer for work log {work_log_id}")

        return running_timer

    async def list_timers(self, work_log_id: str, acting_user: User) -> list[Timer]:
        """
        List all timers of a work log, newest first.

        An owned work log without timers yields an empty list.

        Raises:
            ForbiddenError: If the work log doesn't exist or isn't owned by the user
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise ForbiddenError("No access to work log")

        return await self.timers.find_all_by_work_log_order_by_start_desc(work_log.id)

    async def daily_totals(self, work_log_id: str, acting_user: User) -> list[DailyTotal]:
        """
        Sum stopped time per calendar day, newest day first.

        Each stopped timer lies within one day, so grouping by its start
        date is exact. ``amount`` is filled in when the work log has an
        hourly rate.

        Raises:
            ForbiddenError: If the work log doesn't exist or isn't owned by the user
        """
        work_log = await self.work_logs.find_by_id_and_owner(work_log_id, acting_user.id)
        if work_log is None:
            raise ForbiddenError("No access to work log")

        totals: dict = defaultdict(int)
        for timer in await self.timers.find_all_by_work_log_order_by_start_desc(work_log.id):
            if timer.status == TimerStatus.STOPPED:
                totals[timer.started_at.date()] += timer.duration_in_seconds or 0

        return [
            DailyTotal(
                day=day,
                total_seconds=seconds,
                amount=billable_amount(seconds, work_log.hourly_rate),
            )
            for day, seconds in sorted(totals.items(), reverse=True)
        ]


def billable_amount(seconds: int, hourly_rate: Optional[float]) -> Optional[float]:
    """
    Money earned for ``seconds`` of work, rounded half-up to cents.

    The rate is converted through its decimal string so that e.g. 10.05
    is used as written rather than as the nearest binary float.
    """
    if hourly_rate is None:
        return None
    amount = Decimal(str(hourly_rate)) * seconds / 3600
    return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))
