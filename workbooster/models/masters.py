from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Boolean, Text
from sqlalchemy.sql import func, true
from workbooster.db import Base

class Industry(Base):
    __tablename__ = 'industry_master'
    industry_id = Column(Integer, primary_key=True)
    industry_name = Column(String(255), nullable=False, unique=True)

class LeadSource(Base):
    __tablename__ = 'lead_source_master'
    lead_source_id = Column(Integer, primary_key=True)
    lead_source_name = Column(String(255), nullable=False, unique=True)

class City(Base):
    __tablename__ = 'city_master'
    city_id = Column(Integer, primary_key=True)
    city_name = Column(String(255), nullable=False)

class Country(Base):
    __tablename__ = 'country_master'
    country_id = Column(Integer, primary_key=True)
    country_name = Column(String(255), nullable=False)

class DepartmentMaster(Base):
    __tablename__ = 'department_master'
    department_master_id = Column(Integer, primary_key=True)
    department_name = Column(String(255), nullable=False)

class Product(Base):
    __tablename__ = 'product_master'
    product_id = Column(Integer, primary_key=True)
    product_name = Column(String(255), nullable=False, unique=True)
    product_description = Column(Text)
    is_active = Column(Boolean, default=True, server_default=true())
    created_date = Column(DateTime, default=datetime.now, server_default=func.now())

class IndustryLineOfBusiness(Base):
    __tablename__ = 'industry_line_of_business'
    lob_id = Column(Integer, primary_key=True)
    lob_name = Column(String(255), nullable=False)
    industry_id = Column(Integer, ForeignKey('industry_master.industry_id'))

class UseCaseMaster(Base):
    __tablename__ = 'lob_use_case_master'
    use_case_id = Column(Integer, primary_key=True)
    use_case_name = Column(String(255), nullable=False)
    lob_id = Column(Integer, ForeignKey('industry_line_of_business.lob_id'))
