from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class CallLogCreate(BaseModel):
    # required fields are checked by the handler to keep the original message
    lead_id: Optional[int] = None
    account_id: Optional[int] = None
    telecaller_user_id: Optional[int] = None
    call_outcome: Optional[str] = None
    notes: Optional[str] = None
    followup_required: Optional[bool] = None
    followup_datetime: Optional[datetime] = None
    call_duration_seconds: Optional[int] = 0
    stage_id: Optional[int] = None
    status_id: Optional[int] = None

class CallLogRead(BaseModel):
    call_id: int
    lead_id: int
    account_id: int
    telecaller_user_id: int
    telecaller_name: Optional[str] = None
    call_datetime: Optional[datetime] = None
    call_duration_seconds: Optional[int] = None
    call_outcome: str
    notes: Optional[str] = None
    followup_required: Optional[bool] = None
    followup_datetime: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
