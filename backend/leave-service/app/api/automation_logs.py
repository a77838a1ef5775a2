from fastapi import APIRouter, Depends, status

from app.core.deps import get_log_store, get_restore_coordinator
from app.core.errors import LogNotFound
from app.schemas.automation_log import (
    AutomationLogCreate,
    AutomationLogListResponse,
    AutomationLogResponse,
    AutomationLogUpdate,
    RestoreResponse,
)
from app.services.restore import RestoreCoordinator
from app.stores.base import AutomationLogStore

router = APIRouter(
    prefix="/api/automation-logs",
    tags=["automation-logs"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AutomationLogResponse,
)
async def create_automation_log(
    payload: AutomationLogCreate,
    store: AutomationLogStore = Depends(get_log_store),
):
    """
    UiPath 봇이 배치 실행 후 호출하는 로그 생성 API.
    """
    entry = await store.create(payload.model_dump())
    return AutomationLogResponse(data=entry)


@router.get(
    "",
    response_model=AutomationLogListResponse,
)
async def list_automation_logs(
    store: AutomationLogStore = Depends(get_log_store),
):
    entries = await store.list()
    return AutomationLogListResponse(count=len(entries), data=entries)


@router.get(
    "/{log_id}",
    response_model=AutomationLogResponse,
)
async def get_automation_log(
    log_id: str,
    store: AutomationLogStore = Depends(get_log_store),
):
    entry = await store.get(log_id)
    if entry is None:
        raise LogNotFound()
    return AutomationLogResponse(data=entry)


@router.put(
    "/{log_id}",
    response_model=AutomationLogResponse,
)
async def update_automation_log(
    log_id: str,
    payload: AutomationLogUpdate,
    store: AutomationLogStore = Depends(get_log_store),
):
    """
    로그 수정. successfulRows / failedRows가 바뀌고 totalRows가 함께 오지 않으면
    totalRows를 두 값의 합으로 다시 계산한다.
    """
    current = await store.get(log_id)
    if current is None:
        raise LogNotFound()

    changes = payload.model_dump(exclude_unset=True)
    if {"successfulRows", "failedRows"} & changes.keys() and "totalRows" not in changes:
        changes["totalRows"] = changes.get(
            "successfulRows", current.successfulRows
        ) + changes.get("failedRows", current.failedRows)

    entry = await store.update(log_id, changes)
    if entry is None:
        raise LogNotFound()
    return AutomationLogResponse(data=entry)


@router.delete("/{log_id}")
async def delete_automation_log(
    log_id: str,
    store: AutomationLogStore = Depends(get_log_store),
):
    deleted = await store.delete(log_id)
    if not deleted:
        raise LogNotFound()
    return {"success": True, "data": {}}


@router.post(
    "/{log_id}/restore",
    response_model=RestoreResponse,
)
async def restore_to_log(
    log_id: str,
    coordinator: RestoreCoordinator = Depends(get_restore_coordinator),
):
    """
    선택한 로그 시점으로 되돌리기.

    - 해당 로그의 createdAt 이후에 생성된 leave 레코드와 로그를 모두 삭제
    - 선택한 로그 자신과 그 이전 데이터는 그대로 유지
    - 되돌릴 수 없는 삭제이며 수동으로 지운 데이터는 복구되지 않는다
    """
    result = await coordinator.restore_to_log(log_id)
    return RestoreResponse(
        message=(
            f"System restored. {result.deleted_leave_count} leave records and "
            f"{result.deleted_log_count} automation logs deleted."
        ),
        deletedLeaveCount=result.deleted_leave_count,
        deletedLogCount=result.deleted_log_count,
        restorePoint=result.restore_point,
    )
