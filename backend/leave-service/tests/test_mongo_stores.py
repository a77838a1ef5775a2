import asyncio
from datetime import date, datetime, timedelta

import pytest
from mongomock_motor import AsyncMongoMockClient

from app.core.db import ensure_indexes
from app.core.errors import DuplicateLeave
from app.services.restore import RestoreCoordinator
from app.stores.automation_log_store import MongoAutomationLogStore
from app.stores.leave_store import MongoLeaveRecordStore

pytestmark = pytest.mark.anyio


@pytest.fixture
async def collections():
    db = AsyncMongoMockClient()["lms_test"]
    leaves, logs = db["leaves"], db["automation_logs"]
    await ensure_indexes(leaves, logs)
    return leaves, logs


@pytest.fixture
def leave_data():
    return {
        "employeeId": "E001",
        "employeeName": "Alex Tan",
        "leaveType": "Annual",
        "startDate": date(2025, 6, 2),
        "endDate": date(2025, 6, 6),
        "status": "Pending",
        "isAutomated": False,
        "createdBy": "u-1",
    }


async def test_leave_round_trip(collections, leave_data):
    store = MongoLeaveRecordStore(collections[0])

    created = await store.create(leave_data)
    fetched = await store.get(created.id)

    assert fetched.startDate == date(2025, 6, 2)
    assert fetched.createdAt == created.createdAt
    assert created.createdAt.microsecond % 1000 == 0
    raw = await collections[0].find_one({})
    assert raw["startDate"] == datetime(2025, 6, 2)


async def test_find_duplicate_and_unique_index(collections, leave_data):
    store = MongoLeaveRecordStore(collections[0])
    created = await store.create(leave_data)

    duplicate = await store.find_duplicate("E001", date(2025, 6, 2), date(2025, 6, 6))
    assert duplicate.id == created.id
    assert (
        await store.find_duplicate(
            "E001", date(2025, 6, 2), date(2025, 6, 6), exclude_id=created.id
        )
        is None
    )

    with pytest.raises(DuplicateLeave):
        await store.create(dict(leave_data, employeeName="Other"))


async def test_update_and_delete_leave(collections, leave_data):
    store = MongoLeaveRecordStore(collections[0])
    created = await store.create(leave_data)

    updated = await store.update(created.id, {"status": "Approved"})
    assert updated.status == "Approved"
    assert updated.createdAt == created.createdAt

    assert await store.delete(created.id) is True
    assert await store.get(created.id) is None
    assert await store.delete(created.id) is False


async def test_unparseable_id_is_treated_as_missing(collections):
    store = MongoAutomationLogStore(collections[1])
    entry = await store.create({"timeStart": "09:00", "timeEnd": "09:01", "totalRows": 0})

    assert await store.get("does-not-exist") is None
    assert await store.update("does-not-exist", {"remarks": "x"}) is None
    assert await store.delete("does-not-exist") is False
    assert (await store.get(entry.id)).remarks is None


async def test_log_list_is_newest_first(collections):
    store = MongoAutomationLogStore(collections[1])
    first = await store.create({"timeStart": "09:00", "timeEnd": "09:01", "totalRows": 0})
    await asyncio.sleep(0.002)
    second = await store.create({"timeStart": "10:00", "timeEnd": "10:01", "totalRows": 0})

    assert [e.id for e in await store.list()] == [second.id, first.id]


async def test_restore_against_mongo_stores(collections):
    leaves, logs = collections
    t = datetime(2025, 3, 1, 10, 5)
    anchor = await logs.insert_one(
        {"status": "complete", "timeStart": "a", "timeEnd": "b",
         "createdAt": t, "updatedAt": t}
    )
    await logs.insert_one(
        {"status": "complete", "timeStart": "a", "timeEnd": "b",
         "createdAt": t + timedelta(minutes=5), "updatedAt": t}
    )
    for offset, employee in ((timedelta(0), "E1"), (timedelta(milliseconds=1), "E2")):
        await leaves.insert_one(
            {"employeeId": employee, "employeeName": "n", "leaveType": "Other",
             "startDate": datetime(2025, 1, 1), "endDate": datetime(2025, 1, 1),
             "createdBy": "u", "createdAt": t + offset, "updatedAt": t + offset}
        )

    coordinator = RestoreCoordinator(
        MongoLeaveRecordStore(leaves),
        MongoAutomationLogStore(logs),
        lock=asyncio.Lock(),
    )
    result = await coordinator.restore_to_log(str(anchor.inserted_id))

    assert (result.deleted_leave_count, result.deleted_log_count) == (1, 1)
    assert await leaves.count_documents({}) == 1
    assert (await leaves.find_one({}))["employeeId"] == "E1"
    assert await logs.count_documents({}) == 1
