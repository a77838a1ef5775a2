from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol

from app.models.automation_log import AutomationLogEntry
from app.models.leave import LeaveRecord


class LeaveRecordStore(Protocol):
    """
    leave 레코드 저장소 계약. RestoreCoordinator와 leaves 라우터가 사용.
    """

    async def get(self, leave_id: str) -> Optional[LeaveRecord]: ...

    async def list(self) -> List[LeaveRecord]: ...

    async def find_duplicate(
        self,
        employee_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> Optional[LeaveRecord]: ...

    async def create(self, data: Dict[str, Any]) -> LeaveRecord: ...

    async def update(
        self, leave_id: str, changes: Dict[str, Any]
    ) -> Optional[LeaveRecord]: ...

    async def delete(self, leave_id: str) -> bool: ...

    async def delete_created_after(
        self, timestamp: datetime, session: Any = None
    ) -> int:
        """createdAt > timestamp 인 레코드를 한 번에 삭제하고 삭제 건수 반환."""
        ...


class AutomationLogStore(Protocol):

    async def get(self, log_id: str) -> Optional[AutomationLogEntry]: ...

    async def list(self) -> List[AutomationLogEntry]: ...

    async def create(self, data: Dict[str, Any]) -> AutomationLogEntry: ...

    async def update(
        self, log_id: str, changes: Dict[str, Any]
    ) -> Optional[AutomationLogEntry]: ...

    async def delete(self, log_id: str) -> bool: ...

    async def delete_created_after(
        self, timestamp: datetime, session: Any = None
    ) -> int: ...
