from datetime import date, datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.errors import DuplicateLeave
from app.models.common import date_to_datetime, parse_object_id, utc_now
from app.models.leave import LeaveRecord

_DATE_FIELDS = ("startDate", "endDate")


def _to_document(data: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(data)
    for field in _DATE_FIELDS:
        if isinstance(doc.get(field), date) and not isinstance(doc[field], datetime):
            doc[field] = date_to_datetime(doc[field])
    return doc


class MongoLeaveRecordStore:
    """
    motor 기반 LeaveRecordStore 구현.
    """

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def get(self, leave_id: str) -> Optional[LeaveRecord]:
        object_id = parse_object_id(leave_id)
        if object_id is None:
            return None
        doc = await self.collection.find_one({"_id": object_id})
        return LeaveRecord(**doc) if doc else None

    async def list(self) -> List[LeaveRecord]:
        cursor = self.collection.find({}).sort("createdAt", DESCENDING)
        docs = await cursor.to_list(length=None)
        return [LeaveRecord(**doc) for doc in docs]

    async def find_duplicate(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> Optional[LeaveRecord]:
        query: Dict[str, Any] = {
            "employeeId": employee_id,
            "startDate": date_to_datetime(start_date),
            "endDate": date_to_datetime(end_date),
        }
        exclude = parse_object_id(exclude_id)
        if exclude is not None:
            query["_id"] = {"$ne": exclude}
        doc = await self.collection.find_one(query)
        return LeaveRecord(**doc) if doc else None

    async def create(self, data: Dict[str, Any]) -> LeaveRecord:
        now = utc_now()
        doc = _to_document(data)
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            # find_duplicate 검사와 insert 사이에 같은 기간이 들어온 경우
            raise DuplicateLeave() from exc
        doc["_id"] = result.inserted_id
        return LeaveRecord(**doc)

    async def update(
        self, leave_id: str, changes: Dict[str, Any]
    ) -> Optional[LeaveRecord]:
        object_id = parse_object_id(leave_id)
        if object_id is None:
            return None
        update = _to_document(changes)
        update["updatedAt"] = utc_now()
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise DuplicateLeave() from exc
        return LeaveRecord(**doc) if doc else None

    async def delete(self, leave_id: str) -> bool:
        object_id = parse_object_id(leave_id)
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
