from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

AccountStatus = Literal["Prospect", "Active", "Dormant"]

class AccountBase(BaseModel):
    account_name: str
    industry: Optional[str] = None
    primary_lob: Optional[str] = None
    head_office: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    company_website: Optional[str] = None
    primary_contact_name: Optional[str] = None
    contact_person_role: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    company_phone: Optional[str] = None
    account_status: Optional[AccountStatus] = "Prospect"
    account_owner: Optional[str] = None
    remarks: Optional[str] = None
    total_revenue: Optional[float] = 0
    employee_count: Optional[int] = 0
    data_completion_score: Optional[int] = 0

class AccountCreate(AccountBase):
    pass

class AccountUpdate(BaseModel):
    account_name: Optional[str] = None
    industry: Optional[str] = None
    primary_lob: Optional[str] = None
    head_office: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    company_website: Optional[str] = None
    primary_contact_name: Optional[str] = None
    contact_person_role: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    company_phone: Optional[str] = None
    account_status: Optional[AccountStatus] = None
    account_owner: Optional[str] = None
    remarks: Optional[str] = None
    total_revenue: Optional[float] = None
    employee_count: Optional[int] = None
    data_completion_score: Optional[int] = None

class AccountRead(AccountBase):
    account_id: int
    account_status: Optional[str] = None
    created_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True

class AccountListItem(BaseModel):
    account_id: int
    created_date: Optional[datetime] = None
    account_name: str
    industry: Optional[str] = None
    primary_lob: Optional[str] = None
    hq_city: Optional[str] = None
    data_completion_score: Optional[int] = None
    lead_id: Optional[int] = None
    stage_id: Optional[int] = None
    stage_name: Optional[str] = None
    account_status: Optional[str] = None
    account_owner: Optional[str] = None
    total_revenue: Optional[float] = None
    last_updated: Optional[datetime] = None

class AccountResponse(BaseModel):
    success: bool
    account: AccountRead

class DuplicateCheck(BaseModel):
    account_name_exists: bool = False
    company_website_exists: bool = False
    existing_account_name: Optional[str] = None
    existing_website_account: Optional[str] = None

class AccountOption(BaseModel):
    account_id: int
    account_name: str
