import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.accounts import (
    Account,
    AccountContact,
    AccountDepartment,
    AccountLineOfBusiness,
    AccountUseCase,
    DepartmentPainPoint,
)
from workbooster.schemas.account_details import (
    AccountFull,
    ContactBase,
    ContactRead,
    DepartmentBase,
    DepartmentRead,
    LineOfBusinessBase,
    LineOfBusinessRead,
    PainPointBase,
    PainPointRead,
    UseCaseBase,
    UseCaseRead,
)
from workbooster.schemas.accounts import AccountRead

logger = logging.getLogger(__name__)

router = APIRouter(tags=["account details"], redirect_slashes=False)


def _get_account(db: Session, account_id: int) -> Account:
    account = db.get(Account, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")
    return account


def _list(db: Session, model, account_id: int):
    return db.execute(
        select(model).where(model.account_id == account_id).order_by(model.id)
    ).scalars().all()


def _pain_points_for_account(db: Session, account_id: int):
    rows = db.execute(
        select(DepartmentPainPoint, AccountDepartment.department_name)
        .join(AccountDepartment, DepartmentPainPoint.department_id == AccountDepartment.id)
        .where(AccountDepartment.account_id == account_id)
        .order_by(DepartmentPainPoint.id)
    ).all()
    points = []
    for point, department_name in rows:
        item = PainPointRead.model_validate(point)
        item.department_name = department_name
        points.append(item)
    return points


def _create(db: Session, model, values: dict, what: str):
    try:
        row = model(**values)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except Exception as e:
        db.rollback()
        logger.error(f"Create {what} error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create {what}")


def _update(db: Session, row, values: dict, what: str):
    if row is None:
        raise HTTPException(status_code=404, detail=f"{what.capitalize()} not found")
    try:
        for field, value in values.items():
            setattr(row, field, value)
        db.commit()
        db.refresh(row)
        return row
    except Exception as e:
        db.rollback()
        logger.error(f"Update {what} error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update {what}")


def _delete(db: Session, row, what: str):
    if row is None:
        raise HTTPException(status_code=404, detail=f"{what.capitalize()} not found")
    try:
        db.delete(row)
        db.commit()
        return {"success": True, "message": f"{what.capitalize()} deleted"}
    except Exception as e:
        db.rollback()
        logger.error(f"Delete {what} error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete {what}")


def _owned(db: Session, model, row_id: int, account_id: int):
    return db.execute(
        select(model).where(model.id == row_id, model.account_id == account_id)
    ).scalars().first()


@router.get("/accounts/{account_id}/full", response_model=AccountFull)
def get_account_full(account_id: int, db: Session = Depends(get_db)):
    try:
        account = _get_account(db, account_id)
        full = AccountFull(**AccountRead.model_validate(account).model_dump())
        full.contacts = [ContactRead.model_validate(c) for c in _list(db, AccountContact, account_id)]
        full.lineOfBusiness = [LineOfBusinessRead.model_validate(l) for l in _list(db, AccountLineOfBusiness, account_id)]
        full.departments = [DepartmentRead.model_validate(d) for d in _list(db, AccountDepartment, account_id)]
        full.useCases = [UseCaseRead.model_validate(u) for u in _list(db, AccountUseCase, account_id)]
        full.painPoints = _pain_points_for_account(db, account_id)
        return full
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get account full error: {e}")
        raise HTTPException(status_code=500, detail="Failed to get account details")


# Contacts

@router.get("/accounts/{account_id}/contacts", response_model=List[ContactRead])
def get_contacts(account_id: int, db: Session = Depends(get_db)):
    return _list(db, AccountContact, account_id)


@router.post("/accounts/{account_id}/contacts")
def create_contact(account_id: int, data: ContactBase, db: Session = Depends(get_db)):
    _get_account(db, account_id)
    row = _create(db, AccountContact, {"account_id": account_id, **data.model_dump()}, "contact")
    return {"success": True, "contact": ContactRead.model_validate(row)}


@router.put("/accounts/{account_id}/contacts/{contact_id}")
def update_contact(account_id: int, contact_id: int, data: ContactBase, db: Session = Depends(get_db)):
    row = _update(db, _owned(db, AccountContact, contact_id, account_id), data.model_dump(), "contact")
    return {"success": True, "contact": ContactRead.model_validate(row)}


@router.delete("/accounts/{account_id}/contacts/{contact_id}")
def delete_contact(account_id: int, contact_id: int, db: Session = Depends(get_db)):
    return _delete(db, _owned(db, AccountContact, contact_id, account_id), "contact")


# Line of business

@router.get("/accounts/{account_id}/line-of-business", response_model=List[LineOfBusinessRead])
def get_line_of_business(account_id: int, db: Session = Depends(get_db)):
    return _list(db, AccountLineOfBusiness, account_id)


@router.post("/accounts/{account_id}/line-of-business")
def create_line_of_business(account_id: int, data: LineOfBusinessBase, db: Session = Depends(get_db)):
    _get_account(db, account_id)
    row = _create(db, AccountLineOfBusiness, {"account_id": account_id, **data.model_dump()}, "line of business")
    return {"success": True, "lineOfBusiness": LineOfBusinessRead.model_validate(row)}


@router.put("/accounts/{account_id}/line-of-business/{lob_id}")
def update_line_of_business(account_id: int, lob_id: int, data: LineOfBusinessBase, db: Session = Depends(get_db)):
    row = _update(db, _owned(db, AccountLineOfBusiness, lob_id, account_id), data.model_dump(), "line of business")
    return {"success": True, "lineOfBusiness": LineOfBusinessRead.model_validate(row)}


@router.delete("/accounts/{account_id}/line-of-business/{lob_id}")
def delete_line_of_business(account_id: int, lob_id: int, db: Session = Depends(get_db)):
    return _delete(db, _owned(db, AccountLineOfBusiness, lob_id, account_id), "line of business")


# Departments

@router.get("/accounts/{account_id}/departments", response_model=List[DepartmentRead])
def get_departments(account_id: int, db: Session = Depends(get_db)):
    return _list(db, AccountDepartment, account_id)


@router.post("/accounts/{account_id}/departments")
def create_department(account_id: int, data: DepartmentBase, db: Session = Depends(get_db)):
    _get_account(db, account_id)
    row = _create(db, AccountDepartment, {"account_id": account_id, **data.model_dump()}, "department")
    return {"success": True, "department": DepartmentRead.model_validate(row)}


@router.put("/accounts/{account_id}/departments/{dept_id}")
def update_department(account_id: int, dept_id: int, data: DepartmentBase, db: Session = Depends(get_db)):
    row = _update(db, _owned(db, AccountDepartment, dept_id, account_id), data.model_dump(), "department")
    return {"success": True, "department": DepartmentRead.model_validate(row)}


@router.delete("/accounts/{account_id}/departments/{dept_id}")
def delete_department(account_id: int, dept_id: int, db: Session = Depends(get_db)):
    department = _owned(db, AccountDepartment, dept_id, account_id)
    if department is not None:
        # pain points go with their department
        db.query(DepartmentPainPoint).filter(DepartmentPainPoint.department_id == dept_id).delete(
            synchronize_session=False
        )
    return _delete(db, department, "department")


# Use cases

@router.get("/accounts/{account_id}/use-cases", response_model=List[UseCaseRead])
def get_use_cases(account_id: int, db: Session = Depends(get_db)):
    return _list(db, AccountUseCase, account_id)


@router.post("/accounts/{account_id}/use-cases")
def create_use_case(account_id: int, data: UseCaseBase, db: Session = Depends(get_db)):
    _get_account(db, account_id)
    values = data.model_dump()
    values["status"] = values.get("status") or "Identified"
    row = _create(db, AccountUseCase, {"account_id": account_id, **values}, "use case")
    return {"success": True, "useCase": UseCaseRead.model_validate(row)}


@router.put("/accounts/{account_id}/use-cases/{use_case_id}")
def update_use_case(account_id: int, use_case_id: int, data: UseCaseBase, db: Session = Depends(get_db)):
    row = _update(db, _owned(db, AccountUseCase, use_case_id, account_id), data.model_dump(), "use case")
    return {"success": True, "useCase": UseCaseRead.model_validate(row)}


@router.delete("/accounts/{account_id}/use-cases/{use_case_id}")
def delete_use_case(account_id: int, use_case_id: int, db: Session = Depends(get_db)):
    return _delete(db, _owned(db, AccountUseCase, use_case_id, account_id), "use case")


# Pain points

def _pain_point(db: Session, dept_id: int, point_id: int):
    return db.execute(
        select(DepartmentPainPoint).where(
            DepartmentPainPoint.id == point_id, DepartmentPainPoint.department_id == dept_id
        )
    ).scalars().first()


@router.get("/departments/{dept_id}/pain-points", response_model=List[PainPointRead])
def get_pain_points(dept_id: int, db: Session = Depends(get_db)):
    return db.execute(
        select(DepartmentPainPoint)
        .where(DepartmentPainPoint.department_id == dept_id)
        .order_by(DepartmentPainPoint.id)
    ).scalars().all()


@router.post("/departments/{dept_id}/pain-points")
def create_pain_point(dept_id: int, data: PainPointBase, db: Session = Depends(get_db)):
    if db.get(AccountDepartment, dept_id) is None:
        raise HTTPException(status_code=404, detail="Department not found")
    values = data.model_dump()
    values["severity"] = values.get("severity") or "Medium"
    row = _create(db, DepartmentPainPoint, {"department_id": dept_id, **values}, "pain point")
    return {"success": True, "painPoint": PainPointRead.model_validate(row)}


@router.put("/departments/{dept_id}/pain-points/{point_id}")
def update_pain_point(dept_id: int, point_id: int, data: PainPointBase, db: Session = Depends(get_db)):
    row = _update(db, _pain_point(db, dept_id, point_id), data.model_dump(), "pain point")
    return {"success": True, "painPoint": PainPointRead.model_validate(row)}


@router.delete("/departments/{dept_id}/pain-points/{point_id}")
def delete_pain_point(dept_id: int, point_id: int, db: Session = Depends(get_db)):
    return _delete(db, _pain_point(db, dept_id, point_id), "pain point")
