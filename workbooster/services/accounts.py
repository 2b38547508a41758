from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from workbooster.models.accounts import Account
from workbooster.models.leads import Lead
from workbooster.models.pipeline import LeadStage


def find_duplicates(db: Session, account_name: Optional[str] = None,
                    company_website: Optional[str] = None,
                    exclude_account_id: Optional[int] = None) -> Dict[str, Any]:
    """Case-insensitive name and website clash check used by forms and writes."""
    result = {
        "account_name_exists": False,
        "company_website_exists": False,
        "existing_account_name": None,
        "existing_website_account": None,
    }

    def first_match(column, value):
        stmt = select(Account.account_name).where(func.lower(column) == value.strip().lower())
        if exclude_account_id is not None:
            stmt = stmt.where(Account.account_id != exclude_account_id)
        return db.execute(stmt.limit(1)).scalar()

    if account_name and account_name.strip():
        match = first_match(Account.account_name, account_name)
        if match is not None:
            result["account_name_exists"] = True
            result["existing_account_name"] = match

    if company_website and company_website.strip():
        match = first_match(Account.company_website, company_website)
        if match is not None:
            result["company_website_exists"] = True
            result["existing_website_account"] = match

    return result


def list_accounts(db: Session) -> List[Dict[str, Any]]:
    """Accounts with the stage of their most recently created lead."""
    latest_lead = (
        select(Lead.lead_id)
        .where(Lead.account_id == Account.account_id)
        .order_by(Lead.created_date.desc(), Lead.lead_id.desc())
        .limit(1)
        .correlate(Account)
        .scalar_subquery()
    )
    stmt = (
        select(
            Account.account_id,
            Account.created_date,
            Account.account_name,
            Account.industry,
            Account.primary_lob,
            Account.head_office.label("hq_city"),
            Account.data_completion_score,
            Lead.lead_id,
            Lead.stage_id,
            LeadStage.stage_name,
            Account.account_status,
            Account.account_owner,
            Account.total_revenue,
            Account.last_updated,
        )
        .select_from(Account)
        .outerjoin(Lead, Lead.lead_id == latest_lead)
        .outerjoin(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .order_by(Account.created_date.desc(), Account.account_id.desc())
    )
    return [dict(row._mapping) for row in db.execute(stmt).fetchall()]


def has_leads(db: Session, account_id: int) -> bool:
    return db.execute(select(Lead.lead_id).where(Lead.account_id == account_id).limit(1)).first() is not None
