import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.call_logs import LeadCallLog
from workbooster.models.leads import Lead
from workbooster.models.users import User
from workbooster.schemas.call_logs import CallLogCreate, CallLogRead
from workbooster.services import pipeline
from workbooster.services.exceptions import PipelineError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calls"], redirect_slashes=False)


def _call_rows(db: Session, condition):
    rows = db.execute(
        select(LeadCallLog, User.full_name.label("telecaller_name"))
        .outerjoin(User, LeadCallLog.telecaller_user_id == User.user_id)
        .where(condition)
        .order_by(LeadCallLog.call_datetime.desc(), LeadCallLog.call_id.desc())
    ).all()
    logs = []
    for log, telecaller_name in rows:
        item = CallLogRead.model_validate(log)
        item.telecaller_name = telecaller_name
        logs.append(item)
    return logs


def log_call(db: Session, data: CallLogCreate) -> LeadCallLog:
    """Append a call log and refresh the lead's contact summary in one transaction."""
    lead = db.get(Lead, data.lead_id)
    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")

    log = LeadCallLog(
        lead_id=data.lead_id,
        account_id=data.account_id,
        telecaller_user_id=data.telecaller_user_id,
        call_outcome=data.call_outcome,
        notes=data.notes,
        followup_required=bool(data.followup_required),
        followup_datetime=data.followup_datetime,
        call_duration_seconds=data.call_duration_seconds or 0,
    )
    db.add(log)

    lead.last_contacted_at = datetime.now()
    if data.followup_datetime:
        lead.next_followup_at = data.followup_datetime
    elif data.followup_required is False:
        lead.next_followup_at = None

    if data.stage_id:
        lead.status_id = pipeline.resolve_status(db, data.stage_id, data.status_id, lead.status_id)
        lead.stage_id = data.stage_id

    db.commit()
    db.refresh(log)
    return log


@router.post("/lead-call-logs", status_code=201, response_model=CallLogRead)
def create_call_log(data: CallLogCreate, db: Session = Depends(get_db)):
    if not (data.lead_id and data.account_id and data.telecaller_user_id and data.call_outcome):
        raise HTTPException(status_code=400, detail="Missing required fields")
    try:
        return log_call(db, data)
    except HTTPException:
        db.rollback()
        raise
    except PipelineError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating lead call log: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/calls")
def create_call(data: CallLogCreate, db: Session = Depends(get_db)):
    if not (data.lead_id and data.account_id and data.telecaller_user_id and data.call_outcome):
        raise HTTPException(status_code=400, detail="Missing required fields")
    try:
        # the legacy endpoint always overwrites the follow-up
        if not data.followup_datetime:
            data.followup_required = False
        log = log_call(db, data)
        return {
            "success": True,
            "message": "Call logged successfully",
            "call_log": CallLogRead.model_validate(log),
        }
    except HTTPException:
        db.rollback()
        raise
    except PipelineError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error logging call: {e}")
        raise HTTPException(status_code=500, detail="Failed to log call")


@router.get("/leads/{lead_id}/call-logs", response_model=List[CallLogRead])
def get_lead_call_logs(lead_id: int, db: Session = Depends(get_db)):
    try:
        return _call_rows(db, LeadCallLog.lead_id == lead_id)
    except Exception as e:
        logger.error(f"Error fetching lead call logs: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/leads/{lead_id}/calls", response_model=List[CallLogRead])
def get_lead_calls(lead_id: int, db: Session = Depends(get_db)):
    try:
        return _call_rows(db, LeadCallLog.lead_id == lead_id)
    except Exception as e:
        logger.error(f"Error fetching call history: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch call history")


@router.get("/accounts/{account_id}/call-logs", response_model=List[CallLogRead])
def get_account_call_logs(account_id: int, db: Session = Depends(get_db)):
    try:
        return _call_rows(db, LeadCallLog.account_id == account_id)
    except Exception as e:
        logger.error(f"Error fetching account call logs: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
