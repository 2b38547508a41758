from pydantic import BaseModel
from typing import Literal, Optional
from datetime import date, datetime, time

MeetingStatus = Literal["Scheduled", "Completed", "Cancelled"]

class MeetingCreate(BaseModel):
    lead_id: Optional[int] = None
    account_id: Optional[int] = None
    meeting_type: Optional[str] = None
    meeting_mode: Optional[str] = None
    meeting_date: Optional[date] = None
    meeting_time: Optional[time] = None
    meeting_city: Optional[int] = None
    meeting_address: Optional[str] = None
    internal_attendees: Optional[str] = None
    customer_attendees: Optional[str] = None
    meeting_notes: Optional[str] = None
    meeting_status: Optional[MeetingStatus] = None

class MeetingStatusUpdate(BaseModel):
    status: Optional[str] = None

class MeetingReschedule(BaseModel):
    meeting_date: Optional[date] = None
    meeting_time: Optional[time] = None

class MeetingRead(BaseModel):
    meeting_id: int
    lead_id: int
    account_id: int
    meeting_type: Optional[str] = None
    meeting_mode: str
    meeting_date: date
    meeting_time: time
    meeting_city: Optional[int] = None
    city_name: Optional[str] = None
    account_name: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    meeting_address: Optional[str] = None
    internal_attendees: Optional[str] = None
    customer_attendees: Optional[str] = None
    meeting_notes: Optional[str] = None
    meeting_status: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PeriodCounts(BaseModel):
    today: int
    yesterday: int
    thisWeek: int
    thisMonth: int
