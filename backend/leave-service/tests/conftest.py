from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.deps import get_leave_store, get_log_store
from app.main import app
from app.models.automation_log import AutomationLogEntry
from app.models.common import utc_now
from app.models.leave import LeaveRecord


class _InMemoryStore:
    """
    MongoDB 없이 테스트하기 위한 in-memory 저장소 공통 부분.
    clock으로 createdAt을 직접 지정할 수 있다.
    """
    model: Any = None

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.clock: Callable[[], datetime] = utc_now
        self.delete_error: Optional[Exception] = None
        self.sessions: List[Any] = []

    def add(self, created_at: datetime, **fields: Any):
        doc_id = str(ObjectId())
        doc = {"_id": doc_id, **fields, "createdAt": created_at, "updatedAt": created_at}
        self.docs[doc_id] = doc
        return self.model(**doc)

    async def get(self, doc_id: str):
        doc = self.docs.get(doc_id)
        return self.model(**doc) if doc else None

    async def list(self):
        docs = sorted(self.docs.values(), key=lambda d: d["createdAt"], reverse=True)
        return [self.model(**doc) for doc in docs]

    async def create(self, data: Dict[str, Any]):
        return self.add(self.clock(), **data)

    async def update(self, doc_id: str, changes: Dict[str, Any]):
        doc = self.docs.get(doc_id)
        if doc is None:
            return None
        doc.update(changes)
        doc["updatedAt"] = self.clock()
        return self.model(**doc)

    async def delete(self, doc_id: str) -> bool:
        return self.docs.pop(doc_id, None) is not None

    async def delete_created_after(self, timestamp: datetime, session: Any = None) -> int:
        self.sessions.append(session)
        if self.delete_error is not None:
            raise self.delete_error
        doomed = [k for k, d in self.docs.items() if d["createdAt"] > timestamp]
        for key in doomed:
            del self.docs[key]
        return len(doomed)


class InMemoryLeaveStore(_InMemoryStore):
    model = LeaveRecord

    async def find_duplicate(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ):
        for doc_id, doc in self.docs.items():
            if doc_id == exclude_id:
                continue
            if (
                doc["employeeId"] == employee_id
                and doc["startDate"] == start_date
                and doc["endDate"] == end_date
            ):
                return self.model(**doc)
        return None


class InMemoryLogStore(_InMemoryStore):
    model = AutomationLogEntry


def make_leave(store: InMemoryLeaveStore, created_at: datetime, **overrides) -> LeaveRecord:
    fields = {
        "employeeId": "E001",
        "employeeName": "Alex Tan",
        "leaveType": "Annual",
        "startDate": date(2025, 3, 3),
        "endDate": date(2025, 3, 4),
        "status": "Pending",
        "isAutomated": True,
        "createdBy": "system",
    }
    fields.update(overrides)
    # 기간이 겹치지 않게 생성 시각을 employeeId에 섞는다
    if "employeeId" not in overrides:
        fields["employeeId"] = f"E{created_at:%H%M%S%f}"
    return store.add(created_at, **fields)


def make_log(store: InMemoryLogStore, created_at: datetime, **overrides) -> AutomationLogEntry:
    fields = {
        "status": "complete",
        "timeStart": "09:00",
        "timeEnd": "09:05",
        "successfulRows": 10,
        "failedRows": 0,
        "totalRows": 10,
    }
    fields.update(overrides)
    return store.add(created_at, **fields)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def leave_store() -> InMemoryLeaveStore:
    return InMemoryLeaveStore()


@pytest.fixture
def log_store() -> InMemoryLogStore:
    return InMemoryLogStore()


@pytest.fixture
def client(leave_store, log_store):
    app.dependency_overrides[get_leave_store] = lambda: leave_store
    app.dependency_overrides[get_log_store] = lambda: log_store
    # with 블록 없이 생성해서 startup(MongoDB 인덱스 생성)은 실행되지 않는다
    yield TestClient(app)
    app.dependency_overrides.clear()
