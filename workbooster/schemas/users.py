from pydantic import BaseModel, EmailStr
from typing import Literal, Optional
from datetime import datetime

Role = Literal["Admin", "BD", "Sales", "Telecaller", "Intern"]
UserStatus = Literal["Active", "Inactive"]

class UserBase(BaseModel):
    full_name: str
    email: EmailStr
    role: Optional[Role] = "Intern"
    phone: Optional[str] = None
    status: Optional[UserStatus] = "Active"

class UserCreate(UserBase):
    password: str

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    phone: Optional[str] = None
    status: Optional[UserStatus] = None
    password: Optional[str] = None

class UserRead(BaseModel):
    user_id: int
    full_name: str
    email: str
    role: str
    phone: Optional[str] = None
    status: str
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: str
    password: str

class LoginResponse(BaseModel):
    success: bool
    user: UserRead
    access_token: str
    token_type: str = "bearer"
