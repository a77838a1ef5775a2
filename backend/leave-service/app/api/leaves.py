from fastapi import APIRouter, Depends, status

from app.core.config import settings
from app.core.deps import get_leave_store
from app.core.errors import DuplicateLeave, InvalidLeavePeriod, LeaveNotFound
from app.schemas.leave import (
    LeaveCreate,
    LeaveListResponse,
    LeaveResponse,
    LeaveUpdate,
)
from app.stores.base import LeaveRecordStore

router = APIRouter(
    prefix="/api/leaves",
    tags=["leaves"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=LeaveResponse,
)
async def create_leave(
    payload: LeaveCreate,
    store: LeaveRecordStore = Depends(get_leave_store),
):
    """
    휴가 신청 생성.
    같은 employeeId + startDate + endDate 조합이 이미 있으면 409.
    """
    duplicate = await store.find_duplicate(
        payload.employeeId, payload.startDate, payload.endDate
    )
    if duplicate is not None:
        raise DuplicateLeave()

    data = payload.model_dump()
    data["createdBy"] = payload.createdBy or settings.DEFAULT_CREATOR_ID
    leave = await store.create(data)
    return LeaveResponse(data=leave)


@router.get(
    "",
    response_model=LeaveListResponse,
)
async def list_leaves(
    store: LeaveRecordStore = Depends(get_leave_store),
):
    """
    전체 휴가 신청 목록 (최신 createdAt 순)
    """
    leaves = await store.list()
    return LeaveListResponse(count=len(leaves), data=leaves)


@router.get(
    "/{leave_id}",
    response_model=LeaveResponse,
)
async def get_leave(
    leave_id: str,
    store: LeaveRecordStore = Depends(get_leave_store),
):
    leave = await store.get(leave_id)
    if leave is None:
        raise LeaveNotFound()
    return LeaveResponse(data=leave)


@router.put(
    "/{leave_id}",
    response_model=LeaveResponse,
)
async def update_leave(
    leave_id: str,
    payload: LeaveUpdate,
    store: LeaveRecordStore = Depends(get_leave_store),
):
    """
    휴가 신청 수정. 넘어온 필드만 반영하고,
    기간이 바뀌면 날짜 순서와 중복 여부를 다시 확인한다.
    """
    current = await store.get(leave_id)
    if current is None:
        raise LeaveNotFound()

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    employee_id = changes.get("employeeId", current.employeeId)
    start_date = changes.get("startDate", current.startDate)
    end_date = changes.get("endDate", current.endDate)

    if start_date > end_date:
        raise InvalidLeavePeriod()

    if {"employeeId", "startDate", "endDate"} & changes.keys():
        duplicate = await store.find_duplicate(
            employee_id, start_date, end_date, exclude_id=leave_id
        )
        if duplicate is not None:
            raise DuplicateLeave()

    leave = await store.update(leave_id, changes)
    if leave is None:
        raise LeaveNotFound()
    return LeaveResponse(data=leave)


@router.delete("/{leave_id}")
async def delete_leave(
    leave_id: str,
    store: LeaveRecordStore = Depends(get_leave_store),
):
    deleted = await store.delete(leave_id)
    if not deleted:
        raise LeaveNotFound()
    return {"success": True, "data": {}}
