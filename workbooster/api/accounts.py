import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.accounts import Account
from workbooster.schemas.accounts import (
    AccountCreate,
    AccountListItem,
    AccountRead,
    AccountResponse,
    AccountUpdate,
    DuplicateCheck,
)
from workbooster.services.accounts import find_duplicates, has_leads, list_accounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"], redirect_slashes=False)


@router.get("/check-duplicate", response_model=DuplicateCheck)
def check_duplicate(
    account_name: Optional[str] = Query(None),
    company_website: Optional[str] = Query(None),
    exclude_account_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    try:
        return find_duplicates(db, account_name, company_website, exclude_account_id)
    except Exception as e:
        logger.error(f"Error checking duplicates: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("", response_model=List[AccountListItem])
def get_accounts(db: Session = Depends(get_db)):
    try:
        return list_accounts(db)
    except Exception as e:
        logger.error(f"Error fetching accounts: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=AccountResponse)
def create_account(account_data: AccountCreate, db: Session = Depends(get_db)):
    try:
        name = account_data.account_name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Account name is required")
        dupes = find_duplicates(db, name)
        if dupes["account_name_exists"]:
            raise HTTPException(status_code=400, detail="Account already exists")

        values = account_data.model_dump()
        values["account_name"] = name
        values["account_status"] = values.get("account_status") or "Prospect"
        account = Account(**values)
        db.add(account)
        db.commit()
        db.refresh(account)
        logger.info(f"Created account {account.account_id} ({account.account_name})")
        return {"success": True, "account": AccountRead.model_validate(account)}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Create account error: {e}")
        raise HTTPException(status_code=500, detail="Failed to create account")


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(account_id: int, account_data: AccountUpdate, db: Session = Depends(get_db)):
    try:
        account = db.get(Account, account_id)
        if not account:
            raise HTTPException(status_code=404, detail="Account not found")

        update_data = {k: v for k, v in account_data.model_dump().items() if v is not None}
        dupes = find_duplicates(
            db,
            update_data.get("account_name"),
            update_data.get("company_website"),
            exclude_account_id=account_id,
        )
        if dupes["account_name_exists"]:
            raise HTTPException(status_code=400, detail="Account already exists")
        if dupes["company_website_exists"]:
            raise HTTPException(
                status_code=400,
                detail=f"Website already exists for account \"{dupes['existing_website_account']}\"",
            )

        for field, value in update_data.items():
            setattr(account, field, value)
        account.last_updated = datetime.now()
        db.commit()
        db.refresh(account)
        return {"success": True, "account": AccountRead.model_validate(account)}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Update account error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update account")


@router.delete("/{account_id}")
def delete_account(account_id: int, db: Session = Depends(get_db)):
    try:
        account = db.get(Account, account_id)
        if not account:
            raise HTTPException(status_code=404, detail="Account not found")
        if has_leads(db, account_id):
            raise HTTPException(status_code=400, detail="Cannot delete account with existing leads")
        db.delete(account)
        db.commit()
        return {"success": True, "message": "Account deleted"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Delete account error: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete account")
