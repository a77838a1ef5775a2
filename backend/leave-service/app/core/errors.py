from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class LeaveServiceError(Exception):
    """
    도메인 예외의 공통 부모. status_code와 message로 HTTP 응답이 만들어진다.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def extra(self) -> Dict[str, Any]:
        return {}


class InvalidIdentifier(LeaveServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Malformed identifier"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Malformed identifier: {value!r}")


class LeaveNotFound(LeaveServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Leave application not found"


class LogNotFound(LeaveServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Automation log not found"


class DuplicateLeave(LeaveServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = (
        "Duplicate leave entry: This employee already has a leave for the same period."
    )


class InvalidLeavePeriod(LeaveServiceError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "startDate must be on or before endDate"


class StoreFailure(LeaveServiceError):
    """
    restore 도중 bulk delete 실패.

    step: 실패한 단계 ("leaves" | "logs")
    partial: leaves 삭제는 이미 반영됐는데 logs 삭제가 실패한 상태인지 여부
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        step: str,
        cause: BaseException,
        deleted_leave_count: int = 0,
        deleted_log_count: int = 0,
        partial: bool = False,
    ) -> None:
        self.step = step
        self.cause = cause
        self.deleted_leave_count = deleted_leave_count
        self.deleted_log_count = deleted_log_count
        self.partial = partial
        message = f"Restore failed while deleting {step}: {cause}"
        if partial:
            message += " (partial restore: leave records already deleted)"
        super().__init__(message)

    def extra(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "partial": self.partial,
            "deletedLeaveCount": self.deleted_leave_count,
            "deletedLogCount": self.deleted_log_count,
        }


class AutomationNotFound(LeaveServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "LeaveAutomation directory not found"

    def __init__(self, message: str | None = None, searched_paths=None) -> None:
        self.searched_paths = [str(p) for p in (searched_paths or [])]
        super().__init__(message)

    def extra(self) -> Dict[str, Any]:
        if not self.searched_paths:
            return {}
        return {"searchedPaths": self.searched_paths}


class AutomationLaunchFailed(LeaveServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "All attempts to execute automation failed"

    def __init__(self, attempts: Dict[str, str]) -> None:
        self.attempts = attempts
        super().__init__()

    def extra(self) -> Dict[str, Any]:
        return {"error": self.attempts}


async def leave_service_error_handler(
    request: Request, exc: LeaveServiceError
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, **exc.extra()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LeaveServiceError, leave_service_error_handler)
