import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.users import User
from workbooster.schemas.users import UserCreate, UserRead, UserUpdate
from workbooster.utils.auth import require_admin
from workbooster.utils.password import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def _email_taken(db: Session, email: str, exclude_user_id: int = None) -> bool:
    query = db.query(User).filter(func.lower(User.email) == email.strip().lower())
    if exclude_user_id is not None:
        query = query.filter(User.user_id != exclude_user_id)
    return query.first() is not None


@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return db.query(User).order_by(User.full_name).all()


@router.post("")
def create_user(user_data: UserCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        if _email_taken(db, user_data.email):
            raise HTTPException(status_code=400, detail="Email already exists")
        user = User(
            full_name=user_data.full_name,
            email=user_data.email,
            password=hash_password(user_data.password),
            role=user_data.role or "Intern",
            phone=user_data.phone,
            status=user_data.status or "Active",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.email} created by {admin.email}")
        return {"success": True, "message": "User created", "user": UserRead.model_validate(user)}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Create user error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create user")


@router.put("/{user_id}")
def update_user(user_id: int, user_data: UserUpdate, db: Session = Depends(get_db),
                admin: User = Depends(require_admin)):
    try:
        user = db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        update_data = {k: v for k, v in user_data.model_dump().items() if v is not None}
        if "email" in update_data and _email_taken(db, update_data["email"], exclude_user_id=user_id):
            raise HTTPException(status_code=400, detail="Email already exists")
        if update_data.get("password"):
            update_data["password"] = hash_password(update_data["password"])
        else:
            update_data.pop("password", None)
        for field, value in update_data.items():
            setattr(user, field, value)
        db.commit()
        return {"success": True, "message": "User updated"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Update user error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update user")


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    try:
        user = db.get(User, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        if user.user_id == admin.user_id:
            raise HTTPException(status_code=400, detail="You cannot delete your own account")
        db.delete(user)
        db.commit()
        return {"success": True, "message": "User deleted"}
    except HTTPException:
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User is still referenced by leads or call logs")
    except Exception as e:
        db.rollback()
        logger.error(f"Delete user error: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete user")
