from fastapi import Depends

from app.core.config import settings
from app.core.db import (
    get_automation_logs_collection,
    get_leaves_collection,
    mongo_transaction,
)
from app.services.restore import RestoreCoordinator
from app.stores.automation_log_store import MongoAutomationLogStore
from app.stores.base import AutomationLogStore, LeaveRecordStore
from app.stores.leave_store import MongoLeaveRecordStore


def get_leave_store() -> LeaveRecordStore:
    """
    FastAPI 의존성 주입용. 테스트에서는 dependency_overrides로 in-memory 구현을 넣는다.
    """
    return MongoLeaveRecordStore(get_leaves_collection())


def get_log_store() -> AutomationLogStore:
    return MongoAutomationLogStore(get_automation_logs_collection())


def get_restore_coordinator(
    leave_store: LeaveRecordStore = Depends(get_leave_store),
    log_store: AutomationLogStore = Depends(get_log_store),
) -> RestoreCoordinator:
    transaction_factory = (
        mongo_transaction if settings.MONGODB_USE_TRANSACTIONS else None
    )
    return RestoreCoordinator(
        leave_store,
        log_store,
        transaction_factory=transaction_factory,
    )
