import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.accounts import Account
from workbooster.models.leads import Lead
from workbooster.models.masters import City
from workbooster.models.meetings import AccountMeeting, MEETING_STATUSES
from workbooster.schemas.meetings import (
    MeetingCreate,
    MeetingRead,
    MeetingReschedule,
    MeetingStatusUpdate,
    PeriodCounts,
)
from workbooster.services import dashboard

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meetings"], redirect_slashes=False)


def _meeting_rows(db: Session, condition=None):
    stmt = (
        select(
            AccountMeeting,
            City.city_name,
            Account.account_name,
            Account.primary_contact_name.label("contact_name"),
            Account.contact_phone,
            Account.contact_email,
        )
        .outerjoin(City, AccountMeeting.meeting_city == City.city_id)
        .outerjoin(Account, AccountMeeting.account_id == Account.account_id)
        .order_by(AccountMeeting.meeting_date.desc(), AccountMeeting.meeting_time.desc())
    )
    if condition is not None:
        stmt = stmt.where(condition)
    meetings = []
    for row in db.execute(stmt).all():
        item = MeetingRead.model_validate(row[0])
        for key in ("city_name", "account_name", "contact_name", "contact_phone", "contact_email"):
            setattr(item, key, row._mapping[key])
        meetings.append(item)
    return meetings


@router.post("/meetings", status_code=201, response_model=MeetingRead)
def create_meeting(data: MeetingCreate, db: Session = Depends(get_db)):
    if not (data.lead_id and data.account_id and data.meeting_mode and data.meeting_date and data.meeting_time):
        raise HTTPException(status_code=400, detail="Missing required meeting fields")
    try:
        lead = db.get(Lead, data.lead_id)
        if lead is None:
            raise HTTPException(status_code=404, detail="Lead not found")
        values = data.model_dump()
        values["meeting_type"] = values["meeting_type"] or "Initial Connect"
        values["meeting_status"] = values["meeting_status"] or "Scheduled"
        meeting = AccountMeeting(**values)
        db.add(meeting)
        lead.last_contacted_at = datetime.now()
        db.commit()
        db.refresh(meeting)
        return meeting
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating meeting: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/meetings/stats", response_model=PeriodCounts)
def get_meeting_stats(db: Session = Depends(get_db)):
    try:
        return dashboard.meeting_stats(db)
    except Exception as e:
        logger.error(f"Error fetching meeting stats: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/meetings", response_model=List[MeetingRead])
def get_meetings(db: Session = Depends(get_db)):
    try:
        return _meeting_rows(db)
    except Exception as e:
        logger.error(f"Error fetching all meetings: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/leads/{lead_id}/meetings", response_model=List[MeetingRead])
def get_lead_meetings(lead_id: int, db: Session = Depends(get_db)):
    try:
        return _meeting_rows(db, AccountMeeting.lead_id == lead_id)
    except Exception as e:
        logger.error(f"Error fetching lead meetings: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/meetings/{meeting_id}/status", response_model=MeetingRead)
def update_meeting_status(meeting_id: int, data: MeetingStatusUpdate, db: Session = Depends(get_db)):
    if data.status not in MEETING_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid meeting status")
    try:
        meeting = db.get(AccountMeeting, meeting_id)
        if meeting is None:
            raise HTTPException(status_code=404, detail="Meeting not found")
        meeting.meeting_status = data.status
        db.commit()
        db.refresh(meeting)
        return meeting
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating meeting status: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/meetings/{meeting_id}/reschedule", response_model=MeetingRead)
def reschedule_meeting(meeting_id: int, data: MeetingReschedule, db: Session = Depends(get_db)):
    if not data.meeting_date or not data.meeting_time:
        raise HTTPException(status_code=400, detail="Meeting date and time are required")
    try:
        meeting = db.get(AccountMeeting, meeting_id)
        if meeting is None:
            raise HTTPException(status_code=404, detail="Meeting not found")
        meeting.meeting_date = data.meeting_date
        meeting.meeting_time = data.meeting_time
        meeting.meeting_status = "Scheduled"
        db.commit()
        db.refresh(meeting)
        return meeting
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error rescheduling meeting: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
