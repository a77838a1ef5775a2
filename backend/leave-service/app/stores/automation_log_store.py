from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from app.models.automation_log import AutomationLogEntry
from app.models.common import parse_object_id, utc_now


class MongoAutomationLogStore:
    """
    motor 기반 AutomationLogStore 구현.
    createdAt은 insert 시점에만 기록하고 update에서는 건드리지 않는다.
    """

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def get(self, log_id: str) -> Optional[AutomationLogEntry]:
        object_id = parse_object_id(log_id)
        if object_id is None:
            return None
        doc = await self.collection.find_one({"_id": object_id})
        return AutomationLogEntry(**doc) if doc else None

    async def list(self) -> List[AutomationLogEntry]:
        cursor = self.collection.find({}).sort("createdAt", DESCENDING)
        docs = await cursor.to_list(length=None)
        return [AutomationLogEntry(**doc) for doc in docs]

    async def create(self, data: Dict[str, Any]) -> AutomationLogEntry:
        now = utc_now()
        doc = {**data, "createdAt": now, "updatedAt": now}
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return AutomationLogEntry(**doc)

    async def update(
        self, log_id: str, changes: Dict[str, Any]
    ) -> Optional[AutomationLogEntry]:
        object_id = parse_object_id(log_id)
        if object_id is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": {**changes, "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        return AutomationLogEntry(**doc) if doc else None

    async def delete(self, log_id: str) -> bool:
        object_id = parse_object_id(log_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0

    async def delete_created_after(
        self, timestamp: datetime, session: Any = None
    ) -> int:
        result = await self.collection.delete_many(
            {"createdAt": {"$gt": timestamp}},
            session=session,
        )
        return result.deleted_count
