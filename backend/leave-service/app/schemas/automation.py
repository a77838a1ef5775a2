from pydantic import BaseModel


class AutomationTriggerResponse(BaseModel):
    success: bool = True
    message: str
    output: str
