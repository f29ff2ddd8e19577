"""User store backed by the ``users`` collection."""
from typing import Optional

from timetracker.models.user import UserInDB
from timetracker.utils.object_id import parse_object_id


class UserRepository:
    """Persistence operations for users."""

    def __init__(self, db):
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> UserInDB:
        return UserInDB(
            id=str(doc["_id"]),
            username=doc["username"],
            name=doc["name"],
            hashed_password=doc["hashed_password"],
            created_at=doc["created_at"],
        )

    async def save(self, user: UserInDB, session=None) -> UserInDB:
        """Insert a new user and return it with its assigned ID."""
        doc = {
            "username": user.username,
            "name": user.name,
            "hashed_password": user.hashed_password,
            "created_at": user.created_at,
        }
        result = await self.users.insert_one(doc, session=session)
        return user.model_copy(update={"id": str(result.inserted_id)})

    async def find_by_id(self, user_id: str, session=None) -> Optional[UserInDB]:
        object_id = parse_object_id(user_id)
        if object_id is None:
            return None
        doc = await self.users.find_one({"_id": object_id}, session=session)
        return self._doc_to_user(doc) if doc else None

    async def find_by_username(self, username: str, session=None) -> Optional[UserInDB]:
        doc = await self.users.find_one({"username": username}, session=session)
        return self._doc_to_user(doc) if doc else None

    async def exists_by_username(self, username: str, session=None) -> bool:
        doc = await self.users.find_one({"username": username}, {"_id": 1}, session=session)
        return doc is not None
