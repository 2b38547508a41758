import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.accounts import Account
from workbooster.models.masters import (
    City,
    Country,
    DepartmentMaster,
    Industry,
    IndustryLineOfBusiness,
    LeadSource,
    Product,
    UseCaseMaster,
)
from workbooster.models.pipeline import LeadStage, LeadStatus
from workbooster.models.users import User
from workbooster.schemas.accounts import AccountOption

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["lookups"], redirect_slashes=False)


def _rows(db: Session, stmt):
    return [dict(row._mapping) for row in db.execute(stmt).fetchall()]


def _lookup(db: Session, stmt, what: str):
    try:
        return _rows(db, stmt)
    except Exception as e:
        logger.error(f"Error fetching {what}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/industries")
def get_industries(db: Session = Depends(get_db)):
    stmt = select(Industry.industry_id, Industry.industry_name).order_by(Industry.industry_name)
    return _lookup(db, stmt, "industries")


@router.get("/lead-sources")
def get_lead_sources(db: Session = Depends(get_db)):
    stmt = select(
        LeadSource.lead_source_id.label("source_id"),
        LeadSource.lead_source_name.label("source_name"),
    ).order_by(LeadSource.lead_source_name)
    return _lookup(db, stmt, "lead sources")


@router.get("/cities")
def get_cities(db: Session = Depends(get_db)):
    return _lookup(db, select(City.city_id, City.city_name).order_by(City.city_name), "cities")


@router.get("/countries")
def get_countries(db: Session = Depends(get_db)):
    stmt = select(Country.country_id, Country.country_name).order_by(Country.country_name)
    return _lookup(db, stmt, "countries")


@router.get("/departments-master")
def get_departments_master(db: Session = Depends(get_db)):
    stmt = select(
        DepartmentMaster.department_master_id.label("id"),
        DepartmentMaster.department_name.label("name"),
    ).order_by(DepartmentMaster.department_name)
    return _lookup(db, stmt, "departments")


@router.get("/products-master")
def get_products_master(db: Session = Depends(get_db)):
    stmt = (
        select(Product.product_id.label("id"), Product.product_name.label("name"))
        .where(Product.is_active.is_(True))
        .order_by(Product.product_name)
    )
    return _lookup(db, stmt, "products")


@router.get("/use-cases-master")
def get_use_cases_master(db: Session = Depends(get_db)):
    stmt = select(
        UseCaseMaster.use_case_id.label("id"),
        UseCaseMaster.use_case_name.label("name"),
        UseCaseMaster.lob_id,
    ).order_by(UseCaseMaster.use_case_name)
    return _lookup(db, stmt, "use cases")


@router.get("/industry-lobs")
def get_industry_lobs(db: Session = Depends(get_db)):
    stmt = (
        select(IndustryLineOfBusiness.lob_id, IndustryLineOfBusiness.lob_name, Industry.industry_name)
        .select_from(IndustryLineOfBusiness)
        .outerjoin(Industry, IndustryLineOfBusiness.industry_id == Industry.industry_id)
        .order_by(IndustryLineOfBusiness.lob_name)
    )
    return _lookup(db, stmt, "industry lines of business")


@router.get("/users")
def get_users(db: Session = Depends(get_db)):
    stmt = (
        select(User.user_id, User.full_name, User.role)
        .where(User.status == "Active")
        .order_by(User.full_name)
    )
    return _lookup(db, stmt, "users")


@router.get("/stages")
def get_stages(db: Session = Depends(get_db)):
    stmt = select(LeadStage.stage_id, LeadStage.stage_name).order_by(LeadStage.stage_id)
    return _lookup(db, stmt, "stages")


@router.get("/statuses")
def get_statuses(db: Session = Depends(get_db)):
    stmt = select(LeadStatus.status_id, LeadStatus.status_name, LeadStatus.stage_id).order_by(
        LeadStatus.stage_id, LeadStatus.status_id
    )
    return _lookup(db, stmt, "statuses")


@router.get("/accounts", response_model=List[AccountOption])
def get_account_options(db: Session = Depends(get_db)):
    stmt = select(Account.account_id, Account.account_name).order_by(Account.account_name)
    return _lookup(db, stmt, "accounts")
