from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

RunStatus = Literal["complete", "partial", "failed"]


class AutomationLogEntry(BaseModel):
    """
    automation_logs 컬렉션 Document.
    UiPath 봇이 배치 실행 후 남기는 실행 통계.
    createdAt은 저장소가 insert 시점에 부여하며 restore 기준 시각이 된다.
    """
    id: str = Field(..., alias="_id")
    status: RunStatus = "failed"
    timeStart: str
    timeEnd: str
    successfulRows: int = 0
    failedRows: int = 0
    totalRows: int = 0
    remarks: Optional[str] = None
    spreadsheetLink: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v)
