from fastapi import APIRouter

from app.schemas.automation import AutomationTriggerResponse
from app.services.automation import trigger_automation

router = APIRouter(
    prefix="/api/automation",
    tags=["automation"],
)


@router.post(
    "/trigger",
    response_model=AutomationTriggerResponse,
)
async def trigger():
    """
    UiPath 자동화 실행 (LeaveAutomation/Main.xaml을 기본 프로그램으로 연다).
    """
    result = await trigger_automation()
    return AutomationTriggerResponse(**result)
