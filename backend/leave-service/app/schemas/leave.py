from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.leave import LeaveRecord, LeaveStatus, LeaveType


class LeaveCreate(BaseModel):
    """
    POST /api/leaves 요청 바디
    """
    employeeId: str = Field(..., min_length=1)
    employeeName: str = Field(..., min_length=1)
    leaveType: LeaveType
    startDate: date
    endDate: date
    status: LeaveStatus = "Pending"
    isAutomated: bool = False
    # 인증이 없으므로 호출자가 직접 넘긴다. 없으면 DEFAULT_CREATOR_ID
    createdBy: Optional[str] = None

    @field_validator("employeeId", "employeeName", mode="before")
    @classmethod
    def trim(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @model_validator(mode="after")
    def check_period(self):
        if self.startDate > self.endDate:
            raise ValueError("startDate must be on or before endDate")
        return self


class LeaveUpdate(BaseModel):
    """
    PUT /api/leaves/{id} 요청 바디. 넘어온 필드만 변경.
    createdAt / createdBy 같은 시스템 필드는 받지 않는다.
    """
    employeeId: Optional[str] = Field(None, min_length=1)
    employeeName: Optional[str] = Field(None, min_length=1)
    leaveType: Optional[LeaveType] = None
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    status: Optional[LeaveStatus] = None
    isAutomated: Optional[bool] = None

    class Config:
        extra = "forbid"

    @field_validator("employeeId", "employeeName", mode="before")
    @classmethod
    def trim(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class LeaveResponse(BaseModel):
    success: bool = True
    data: LeaveRecord


class LeaveListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[LeaveRecord]
