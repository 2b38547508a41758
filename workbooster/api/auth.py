import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.users import User
from workbooster.schemas.users import LoginRequest, LoginResponse, UserRead
from workbooster.utils.auth import create_access_token, get_current_user
from workbooster.utils.password import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if not user or not verify_password(payload.password, user.password):
        logger.info(f"Failed login for {email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if user.status != "Active":
        raise HTTPException(status_code=403, detail="User account is inactive")

    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return {
        "success": True,
        "user": UserRead.model_validate(user),
        "access_token": access_token,
        "token_type": "bearer",
    }


@router.get("/me", response_model=UserRead)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)
