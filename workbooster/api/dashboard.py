import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.services import dashboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"], redirect_slashes=False)


@router.get("")
def get_dashboard(db: Session = Depends(get_db)):
    try:
        return dashboard.dashboard_summary(db)
    except Exception as e:
        logger.error(f"Error fetching dashboard stats: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/user-stats")
def get_user_stats(db: Session = Depends(get_db)):
    try:
        return dashboard.user_stats(db)
    except Exception as e:
        logger.error(f"Error fetching user stats: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
