from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.sql import func
from workbooster.db import Base

class Lead(Base):
    __tablename__ = 'leads'
    lead_id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id'), nullable=False, index=True)
    lead_date = Column(DateTime, default=datetime.now, server_default=func.now())
    lead_source = Column(String(255))
    lead_generated_by = Column(Integer, ForeignKey('users.user_id'))
    assigned_telecaller = Column(Integer, ForeignKey('users.user_id'))
    bd_assigned_to = Column(Integer, ForeignKey('users.user_id'))
    de_assigned_to = Column(Integer, ForeignKey('users.user_id'))
    stage_id = Column(Integer, ForeignKey('lead_stages.stage_id'), index=True)
    status_id = Column(Integer, ForeignKey('lead_stage_status.status_id'))
    expected_value = Column(Numeric(15, 2, asdecimal=False), default=0)
    product_mapped = Column(String(255))
    remarks = Column(Text)
    call_status = Column(Text)
    follow_up_status_1 = Column(Text)
    follow_up_status_2 = Column(Text)
    last_contacted_at = Column(DateTime)
    next_followup_at = Column(DateTime, index=True)
    created_date = Column(DateTime, default=datetime.now, server_default=func.now(), index=True)
