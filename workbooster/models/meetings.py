from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Integer, Text, Time
from sqlalchemy.sql import func
from workbooster.db import Base

MEETING_STATUSES = ['Scheduled', 'Completed', 'Cancelled']

class AccountMeeting(Base):
    __tablename__ = 'account_meetings'
    meeting_id = Column(Integer, primary_key=True, index=True)
    lead_id = Column(Integer, ForeignKey('leads.lead_id', ondelete='CASCADE'), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), nullable=False, index=True)
    meeting_type = Column(String(50), default='Initial Connect')
    meeting_mode = Column(String(20), nullable=False)
    meeting_date = Column(Date, nullable=False)
    meeting_time = Column(Time, nullable=False)
    meeting_city = Column(Integer, ForeignKey('city_master.city_id'))
    meeting_address = Column(Text)
    internal_attendees = Column(Text)
    customer_attendees = Column(Text)
    meeting_notes = Column(Text)
    meeting_status = Column(String(20), default='Scheduled')
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())
