from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Boolean, Text
from sqlalchemy.sql import func
from workbooster.db import Base

class LeadCallLog(Base):
    __tablename__ = 'lead_call_logs'
    call_id = Column(Integer, primary_key=True, index=True)
    lead_id = Column(Integer, ForeignKey('leads.lead_id', ondelete='CASCADE'), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), nullable=False, index=True)
    telecaller_user_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    call_datetime = Column(DateTime, nullable=False, default=datetime.now, server_default=func.now())
    call_duration_seconds = Column(Integer, default=0)
    call_outcome = Column(String(50), nullable=False)
    notes = Column(Text)
    followup_required = Column(Boolean, default=False)
    followup_datetime = Column(DateTime)
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())
