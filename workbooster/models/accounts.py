from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Numeric, Text, ForeignKey
from sqlalchemy.sql import func
from workbooster.db import Base

class Account(Base):
    __tablename__ = 'accounts'
    account_id = Column(Integer, primary_key=True, index=True)
    account_name = Column(String(255), nullable=False, index=True)
    industry = Column(String(255))
    primary_lob = Column(String(255))
    head_office = Column(String(255))
    location = Column(String(500))
    country = Column(String(100))
    company_website = Column(Text)
    primary_contact_name = Column(String(255))
    contact_person_role = Column(String(255))
    contact_phone = Column(String(50))
    contact_email = Column(String(255))
    company_phone = Column(String(50))
    account_status = Column(String(20), nullable=False, default='Prospect')
    account_owner = Column(String(255))
    remarks = Column(Text)
    total_revenue = Column(Numeric(15, 2, asdecimal=False), default=0)
    employee_count = Column(Integer, default=0)
    data_completion_score = Column(Integer, default=0)
    created_date = Column(DateTime, default=datetime.now, server_default=func.now())
    last_updated = Column(DateTime, default=datetime.now, onupdate=datetime.now, server_default=func.now())

class AccountContact(Base):
    __tablename__ = 'account_contacts'
    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), index=True)
    name = Column(String(255), nullable=False)
    role = Column(String(255))
    phone = Column(String(50))
    email = Column(String(255))
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())

class AccountLineOfBusiness(Base):
    __tablename__ = 'account_line_of_business'
    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), index=True)
    business_type = Column(String(255), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())

class AccountDepartment(Base):
    __tablename__ = 'account_departments'
    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), index=True)
    department_name = Column(String(255), nullable=False)
    head_name = Column(String(255))
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())

class AccountUseCase(Base):
    __tablename__ = 'account_use_cases'
    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey('accounts.account_id', ondelete='CASCADE'), index=True)
    use_case_title = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(50), default='Identified')
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())

class DepartmentPainPoint(Base):
    __tablename__ = 'department_pain_points'
    id = Column(Integer, primary_key=True)
    department_id = Column(Integer, ForeignKey('account_departments.id', ondelete='CASCADE'), index=True)
    pain_point = Column(Text, nullable=False)
    severity = Column(String(50), default='Medium')
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now, server_default=func.now())
