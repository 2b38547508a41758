from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from workbooster.schemas.accounts import AccountRead

class ContactBase(BaseModel):
    name: str
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

class ContactRead(ContactBase):
    id: int
    account_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LineOfBusinessBase(BaseModel):
    business_type: str
    description: Optional[str] = None

class LineOfBusinessRead(LineOfBusinessBase):
    id: int
    account_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DepartmentBase(BaseModel):
    department_name: str
    head_name: Optional[str] = None

class DepartmentRead(DepartmentBase):
    id: int
    account_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UseCaseBase(BaseModel):
    use_case_title: str
    description: Optional[str] = None
    status: Optional[str] = "Identified"

class UseCaseRead(UseCaseBase):
    id: int
    account_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PainPointBase(BaseModel):
    pain_point: str
    severity: Optional[str] = "Medium"
    notes: Optional[str] = None

class PainPointRead(PainPointBase):
    id: int
    department_id: int
    department_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class AccountFull(AccountRead):
    contacts: List[ContactRead] = []
    lineOfBusiness: List[LineOfBusinessRead] = []
    departments: List[DepartmentRead] = []
    useCases: List[UseCaseRead] = []
    painPoints: List[PainPointRead] = []
