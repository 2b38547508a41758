from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel

class LeadCreate(BaseModel):
    # account_name and company_website are checked by the handler so a
    # missing value can be reported with its field name
    account_name: Optional[str] = None
    company_website: Optional[str] = None
    industry: Optional[str] = None
    primary_lob: Optional[str] = None
    head_office: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    primary_contact_name: Optional[str] = None
    contact_person_role: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    company_phone: Optional[str] = None
    lead_source: Optional[str] = None
    lead_generated_by: Optional[int] = None
    assigned_telecaller: Optional[int] = None
    bd_assigned_to: Optional[int] = None
    de_assigned_to: Optional[int] = None
    stage_id: Optional[int] = None
    status_id: Optional[int] = None
    expected_value: Optional[float] = None
    product_mapped: Optional[str] = None
    remarks: Optional[str] = None

class LeadUpdate(LeadCreate):
    pass

class LeadStageUpdate(BaseModel):
    stage_id: int
    status_id: Optional[int] = None

class LeadDEAssignment(BaseModel):
    de_assigned_to: Optional[int] = None

class LeadListItem(BaseModel):
    lead_id: int
    account_id: int
    lead_date: Optional[datetime] = None
    account_name: Optional[str] = None
    generated_by: Optional[str] = None
    lead_generated_by: Optional[int] = None
    de_assigned_to: Optional[int] = None
    de_assigned_to_name: Optional[str] = None
    lead_source: Optional[str] = None
    stage_id: Optional[int] = None
    stage_name: Optional[str] = None
    status_id: Optional[int] = None
    status_name: Optional[str] = None
    industry: Optional[str] = None
    primary_lob: Optional[str] = None
    hq_city: Optional[str] = None
    data_completion_score: Optional[int] = None
    expected_value: Optional[float] = None
    last_contacted_at: Optional[datetime] = None
    next_followup_at: Optional[datetime] = None
    product_mapped: Optional[str] = None
    last_call_outcome: Optional[str] = None
    created_date: Optional[datetime] = None

class LeadCreated(BaseModel):
    success: bool = True
    lead_id: int
    account_id: int
    message: str

class LeadStats(BaseModel):
    today: int
    yesterday: int
    thisWeek: int
    thisMonth: int
    callsToday: int
    outcomes: Dict[str, int]

class Followups(BaseModel):
    followups: List[Dict[str, Any]]
    todayCount: int
