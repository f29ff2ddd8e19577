"""Timer store backed by the ``timers`` collection."""
from typing import Optional

from bson import ObjectId

from timetracker.models.timer import Timer, TimerStatus
from timetracker.utils.object_id import parse_object_id


class TimerRepository:
    """Persistence operations for timers, scoped by work log and owner."""

    def __init__(self, db):
        self.timers = db["timers"]

    def _doc_to_timer(self, doc: dict) -> Timer:
        return Timer(
            id=str(doc["_id"]),
            work_log_id=doc["work_log_id"],
            owner_id=doc["owner_id"],
            started_at=doc["started_at"],
            stopped_at=doc.get("stopped_at"),
            duration_in_seconds=doc.get("duration_in_seconds"),
            status=doc["status"],
            note=doc.get("note"),
        )

    def _timer_to_doc(self, timer: Timer) -> dict:
        return {
            "work_log_id": timer.work_log_id,
            "owner_id": timer.owner_id,
            "started_at": timer.started_at,
            "stopped_at": timer.stopped_at,
            "duration_in_seconds": timer.duration_in_seconds,
            "status": timer.status.value,
            "note": timer.note,
        }

    async def save(self, timer: Timer, session=None) -> Timer:
        """
        Insert the timer when it has no ID yet, otherwise overwrite it.

        Raises:
            DuplicateKeyError: If inserting a second RUNNING timer for the
                same work log
        """
        doc = self._timer_to_doc(timer)

        if timer.id is None:
            result = await self.timers.insert_one(doc, session=session)
            return timer.model_copy(update={"id": str(result.inserted_id)})

        await self.timers.replace_one({"_id": ObjectId(timer.id)}, doc, session=session)
        return timer

    async def save_if_running(self, timer: Timer, session=None) -> bool:
        """
        Overwrite a stored timer only while it is still RUNNING.

        Returns:
            False if the timer was stopped (or removed) in the meantime
        """
        result = await self.timers.replace_one(
            {"_id": ObjectId(timer.id), "status": TimerStatus.RUNNING.value},
            self._timer_to_doc(timer),
            session=session,
        )
        return result.matched_count == 1

    async def find_by_id(self, timer_id: str, session=None) -> Optional[Timer]:
        object_id = parse_object_id(timer_id)
        if object_id is None:
            return None
        doc = await self.timers.find_one({"_id": object_id}, session=session)
        return self._doc_to_timer(doc) if doc else None

    async def find_latest_running_for_work_log(
        self, work_log_id: str, owner_id: str, session=None
    ) -> Optional[Timer]:
        """Newest RUNNING timer of the work log, if the work log belongs to ``owner_id``."""
        doc = await self.timers.find_one(
            {
                "work_log_id": work_log_id,
                "owner_id": owner_id,
                "status": TimerStatus.RUNNING.value,
            },
            sort=[("started_at", -1)],
            session=session,
        )
        return self._doc_to_timer(doc) if doc else None

    async def find_by_id_and_work_log_owner(
        self, timer_id: str, owner_id: str, session=None
    ) -> Optional[Timer]:
        object_id = parse_object_id(timer_id)
        if object_id is None:
            return None
        doc = await self.timers.find_one(
            {"_id": object_id, "owner_id": owner_id}, session=session
        )
        return self._doc_to_timer(doc) if doc else None

    async def find_all_by_work_log_order_by_start_desc(
        self, work_log_id: str, session=None
    ) -> list[Timer]:
        cursor = self.timers.find({"work_log_id": work_log_id}, session=session).sort("started_at", -1)
        docs = await cursor.to_list(length=None)
        return [self._doc_to_timer(doc) for doc in docs]

    async def exists_running_for_work_log(self, work_log_id: str, session=None) -> bool:
        doc = await self.timers.find_one(
            {"work_log_id": work_log_id, "status": TimerStatus.RUNNING.value},
            {"_id": 1},
            session=session,
        )
        return doc is not None

    async def delete_all_by_work_log(self, work_log_id: str, session=None) -> int:
        result = await self.timers.delete_many({"work_log_id": work_log_id}, session=session)
        return result.deleted_count
