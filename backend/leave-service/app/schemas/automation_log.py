from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.automation_log import AutomationLogEntry, RunStatus


class AutomationLogCreate(BaseModel):
    """
    POST /api/automation-logs 요청 바디 (UiPath 봇 또는 수동 입력).
    totalRows를 생략하면 successfulRows + failedRows로 채운다.
    """
    status: RunStatus = "failed"
    timeStart: str = Field(..., min_length=1)
    timeEnd: str = Field(..., min_length=1)
    successfulRows: int = Field(0, ge=0)
    failedRows: int = Field(0, ge=0)
    totalRows: Optional[int] = Field(None, ge=0)
    remarks: Optional[str] = None
    spreadsheetLink: Optional[str] = None

    @model_validator(mode="after")
    def fill_total(self):
        if self.totalRows is None:
            self.totalRows = self.successfulRows + self.failedRows
        return self


class AutomationLogUpdate(BaseModel):
    """
    PUT /api/automation-logs/{id} 요청 바디. 넘어온 필드만 변경.
    remarks / spreadsheetLink만 null로 비울 수 있다.
    """
    status: Optional[RunStatus] = None
    timeStart: Optional[str] = Field(None, min_length=1)
    timeEnd: Optional[str] = Field(None, min_length=1)
    successfulRows: Optional[int] = Field(None, ge=0)
    failedRows: Optional[int] = Field(None, ge=0)
    totalRows: Optional[int] = Field(None, ge=0)
    remarks: Optional[str] = None
    spreadsheetLink: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator(
        "status", "timeStart", "timeEnd", "successfulRows", "failedRows", "totalRows"
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class AutomationLogResponse(BaseModel):
    success: bool = True
    data: AutomationLogEntry


class AutomationLogListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[AutomationLogEntry]


class RestoreResponse(BaseModel):
    success: bool = True
    message: str
    deletedLeaveCount: int
    deletedLogCount: int
    restorePoint: datetime
