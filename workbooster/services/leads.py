from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from workbooster.models.accounts import Account
from workbooster.models.call_logs import LeadCallLog
from workbooster.models.leads import Lead
from workbooster.models.masters import City
from workbooster.models.pipeline import LeadStage, LeadStatus
from workbooster.models.users import User

# column order of the lead list, also the header order of the CSV export
LEAD_LIST_COLUMNS = [
    "lead_id",
    "account_id",
    "lead_date",
    "account_name",
    "generated_by",
    "lead_generated_by",
    "de_assigned_to",
    "de_assigned_to_name",
    "lead_source",
    "stage_id",
    "stage_name",
    "status_id",
    "status_name",
    "industry",
    "primary_lob",
    "hq_city",
    "data_completion_score",
    "expected_value",
    "last_contacted_at",
    "next_followup_at",
    "product_mapped",
    "last_call_outcome",
    "created_date",
]


def last_call_outcome_subquery():
    return (
        select(LeadCallLog.call_outcome)
        .where(LeadCallLog.lead_id == Lead.lead_id)
        .order_by(LeadCallLog.call_datetime.desc(), LeadCallLog.call_id.desc())
        .limit(1)
        .correlate(Lead)
        .scalar_subquery()
    )


def lead_list_query(stage_ids: Optional[Iterable[int]] = None):
    generator = aliased(User)
    enricher = aliased(User)
    stmt = (
        select(
            Lead.lead_id,
            Lead.account_id,
            Lead.lead_date,
            Account.account_name,
            generator.full_name.label("generated_by"),
            Lead.lead_generated_by,
            Lead.de_assigned_to,
            enricher.full_name.label("de_assigned_to_name"),
            Lead.lead_source,
            Lead.stage_id,
            LeadStage.stage_name,
            Lead.status_id,
            LeadStatus.status_name,
            Account.industry,
            Account.primary_lob,
            func.coalesce(City.city_name, Account.head_office).label("hq_city"),
            Account.data_completion_score,
            Lead.expected_value,
            Lead.last_contacted_at,
            Lead.next_followup_at,
            Lead.product_mapped,
            last_call_outcome_subquery().label("last_call_outcome"),
            Lead.created_date,
        )
        .select_from(Lead)
        .outerjoin(Account, Lead.account_id == Account.account_id)
        .outerjoin(generator, Lead.lead_generated_by == generator.user_id)
        .outerjoin(enricher, Lead.de_assigned_to == enricher.user_id)
        .outerjoin(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .outerjoin(LeadStatus, Lead.status_id == LeadStatus.status_id)
        .outerjoin(City, func.lower(Account.head_office) == func.lower(City.city_name))
        .order_by(Lead.created_date.desc(), Lead.lead_id.desc())
    )
    if stage_ids:
        stmt = stmt.where(Lead.stage_id.in_(list(stage_ids)))
    return stmt


def list_leads(db: Session, stage_ids: Optional[Iterable[int]] = None) -> List[Dict[str, Any]]:
    rows = db.execute(lead_list_query(stage_ids)).fetchall()
    return [dict(row._mapping) for row in rows]


def get_lead_detail(db: Session, lead_id: int) -> Optional[Dict[str, Any]]:
    generator = aliased(User)
    enricher = aliased(User)
    stmt = (
        select(
            Lead,
            Account.account_name,
            Account.industry,
            Account.head_office,
            Account.location,
            Account.company_website,
            Account.primary_contact_name,
            Account.contact_person_role,
            Account.contact_phone,
            Account.contact_email,
            Account.company_phone,
            Account.primary_lob,
            Account.data_completion_score,
            generator.full_name.label("generated_by_name"),
            enricher.full_name.label("de_assigned_to_name"),
            LeadStage.stage_name,
            LeadStatus.status_name,
            City.city_name.label("hq_city"),
        )
        .select_from(Lead)
        .outerjoin(Account, Lead.account_id == Account.account_id)
        .outerjoin(generator, Lead.lead_generated_by == generator.user_id)
        .outerjoin(enricher, Lead.de_assigned_to == enricher.user_id)
        .outerjoin(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .outerjoin(LeadStatus, Lead.status_id == LeadStatus.status_id)
        .outerjoin(City, func.lower(Account.head_office) == func.lower(City.city_name))
        .where(Lead.lead_id == lead_id)
    )
    row = db.execute(stmt).first()
    if row is None:
        return None
    data = row_to_dict(row[0])
    for key, value in row._mapping.items():
        if key != "Lead":
            data[key] = value
    return data


def row_to_dict(obj) -> Dict[str, Any]:
    """Column values of an ORM instance keyed by column name."""
    return {column.name: getattr(obj, column.key) for column in obj.__table__.columns}
