"""Work log store backed by the ``work_logs`` collection."""
from typing import Optional

from bson import ObjectId

from timetracker.models.work_log import WorkLog
from timetracker.utils.object_id import parse_object_id


class WorkLogRepository:
    """Persistence operations for work logs, including owner-scoped lookups."""

    def __init__(self, db):
        self.work_logs = db["work_logs"]

    def _doc_to_work_log(self, doc: dict) -> WorkLog:
        return WorkLog(
            id=str(doc["_id"]),
            owner_id=doc["owner_id"],
            work_log_name=doc["work_log_name"],
            hourly_rate=doc.get("hourly_rate"),
            activated=doc.get("activated", True),
            created_at=doc["created_at"],
        )

    def _work_log_to_doc(self, work_log: WorkLog) -> dict:
        return {
            "owner_id": work_log.owner_id,
            "work_log_name": work_log.work_log_name,
            "hourly_rate": work_log.hourly_rate,
            "activated": work_log.activated,
            "created_at": work_log.created_at,
        }

    async def save(self, work_log: WorkLog, session=None) -> WorkLog:
        """
        Insert the work log when it has no ID yet, otherwise overwrite it.

        Returns:
            The stored work log (with its assigned ID after an insert)
        """
        doc = self._work_log_to_doc(work_log)

        if work_log.id is None:
            result = await self.work_logs.insert_one(doc, session=session)
            return work_log.model_copy(update={"id": str(result.inserted_id)})

        await self.work_logs.replace_one(
            {"_id": ObjectId(work_log.id)}, doc, session=session
        )
        return work_log

    async def find_by_id(self, work_log_id: str, session=None) -> Optional[WorkLog]:
        object_id = parse_object_id(work_log_id)
        if object_id is None:
            return None
        doc = await self.work_logs.find_one({"_id": object_id}, session=session)
        return self._doc_to_work_log(doc) if doc else None

    async def find_by_id_and_owner(
        self, work_log_id: str, owner_id: str, session=None
    ) -> Optional[WorkLog]:
        """Load a work log only if it belongs to ``owner_id``."""
        object_id = parse_object_id(work_log_id)
        if object_id is None:
            return None
        doc = await self.work_logs.find_one(
            {"_id": object_id, "owner_id": owner_id}, session=session
        )
        return self._doc_to_work_log(doc) if doc else None

    async def find_all_by_owner(self, owner_id: str, session=None) -> list[WorkLog]:
        cursor = self.work_logs.find({"owner_id": owner_id}, session=session).sort("created_at", 1)
        docs = await cursor.to_list(length=None)
        return [self._doc_to_work_log(doc) for doc in docs]

    async def delete(self, work_log: WorkLog, session=None) -> int:
        result = await self.work_logs.delete_one(
            {"_id": ObjectId(work_log.id)}, session=session
        )
        return result.deleted_count
