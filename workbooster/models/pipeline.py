from sqlalchemy import Column, String, Integer, ForeignKey
from workbooster.db import Base

class LeadStage(Base):
    __tablename__ = 'lead_stages'
    stage_id = Column(Integer, primary_key=True)
    stage_name = Column(String(100), nullable=False)

class LeadStatus(Base):
    __tablename__ = 'lead_stage_status'
    status_id = Column(Integer, primary_key=True)
    status_name = Column(String(100), nullable=False)
    stage_id = Column(Integer, ForeignKey('lead_stages.stage_id', ondelete='CASCADE'), nullable=False, index=True)
