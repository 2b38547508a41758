from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.sql import func
from workbooster.db import Base

class User(Base):
    __tablename__ = 'users'
    user_id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default='Intern')
    phone = Column(String(50))
    status = Column(String(20), nullable=False, default='Active')
    created_date = Column(DateTime, default=datetime.now, server_default=func.now())
