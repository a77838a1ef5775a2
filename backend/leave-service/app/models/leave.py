from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.models.common import datetime_to_date

LeaveType = Literal["Annual", "Medical", "Emergency", "Other"]
LeaveStatus = Literal["Pending", "Approved", "Rejected"]


class LeaveRecord(BaseModel):
    """
    leaves 컬렉션 Document. _id는 문자열로 노출한다.
    """
    id: str = Field(..., alias="_id")
    employeeId: str
    employeeName: str
    leaveType: LeaveType
    startDate: date
    endDate: date
    status: LeaveStatus = "Pending"
    isAutomated: bool = False
    createdBy: str
    createdAt: datetime
    updatedAt: datetime

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v)

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def strip_time(cls, v):
        return datetime_to_date(v)
