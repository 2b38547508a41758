"""
Read-only aggregates behind the dashboard cards and the stage page stats.

Day, week and month boundaries are computed here rather than in SQL so the
same queries run on any backend. Weeks start on Monday.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import and_, case, func, select
from sqlalchemy.orm import Session

from workbooster.models.accounts import Account
from workbooster.models.call_logs import LeadCallLog
from workbooster.models.leads import Lead
from workbooster.models.meetings import AccountMeeting
from workbooster.models.pipeline import LeadStage
from workbooster.models.users import User

logger = logging.getLogger(__name__)

WON_STAGE = "Closed Won"
LOST_STAGE = "Closed Lost"

OUTCOME_KEYS = {
    "No Answer": "noAnswer",
    "Busy": "busy",
    "Call Back Later": "callback",
    "Interested": "interested",
    "Not Interested": "notInterested",
}


def period_bounds(now: Optional[datetime] = None) -> Dict[str, datetime]:
    now = now or datetime.now()
    today = datetime.combine(now.date(), time.min)
    return {
        "today": today,
        "tomorrow": today + timedelta(days=1),
        "yesterday": today - timedelta(days=1),
        "week": today - timedelta(days=today.weekday()),
        "month": today.replace(day=1),
    }


def _period_columns(column, bounds: Dict[str, datetime]):
    def count_between(start, end):
        return func.coalesce(func.sum(case((and_(column >= start, column < end), 1), else_=0)), 0)

    return [
        count_between(bounds["today"], bounds["tomorrow"]).label("today"),
        count_between(bounds["yesterday"], bounds["today"]).label("yesterday"),
        count_between(bounds["week"], bounds["tomorrow"]).label("this_week"),
        count_between(bounds["month"], bounds["tomorrow"]).label("this_month"),
    ]


def empty_outcomes() -> Dict[str, int]:
    return {key: 0 for key in OUTCOME_KEYS.values()}


def call_outcomes(db: Session, now: Optional[datetime] = None,
                  telecaller_id: Optional[int] = None) -> Dict[str, Any]:
    """Calls logged today and their outcome breakdown."""
    bounds = period_bounds(now)
    stmt = (
        select(LeadCallLog.call_outcome, func.count(LeadCallLog.call_id))
        .where(LeadCallLog.created_at >= bounds["today"], LeadCallLog.created_at < bounds["tomorrow"])
        .group_by(LeadCallLog.call_outcome)
    )
    if telecaller_id is not None:
        stmt = stmt.where(LeadCallLog.telecaller_user_id == telecaller_id)

    outcomes = empty_outcomes()
    total = 0
    for outcome, count in db.execute(stmt).all():
        total += count
        key = OUTCOME_KEYS.get(outcome)
        if key:
            outcomes[key] += count
    return {"callsToday": total, "outcomes": outcomes}


def lead_stats(db: Session, stage_ids: Optional[Iterable[int]] = None,
               now: Optional[datetime] = None) -> Dict[str, Any]:
    bounds = period_bounds(now)
    stmt = select(*_period_columns(Lead.created_date, bounds))
    stage_ids = list(stage_ids or [])
    if stage_ids:
        stmt = stmt.where(Lead.stage_id.in_(stage_ids))
    row = db.execute(stmt).one()
    stats = {
        "today": int(row.today),
        "yesterday": int(row.yesterday),
        "thisWeek": int(row.this_week),
        "thisMonth": int(row.this_month),
    }
    stats.update(call_outcomes(db, now))
    return stats


def user_stats(db: Session, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    bounds = period_bounds(now)
    stmt = (
        select(User.user_id, User.full_name, User.role, *_period_columns(Lead.created_date, bounds))
        .select_from(User)
        .outerjoin(Lead, Lead.lead_generated_by == User.user_id)
        .where(User.status == "Active")
        .group_by(User.user_id, User.full_name, User.role)
    )
    stats = []
    for row in db.execute(stmt).all():
        entry = {
            "user_id": row.user_id,
            "full_name": row.full_name,
            "role": row.role,
            "today": int(row.today),
            "yesterday": int(row.yesterday),
            "thisWeek": int(row.this_week),
            "thisMonth": int(row.this_month),
        }
        entry.update(call_outcomes(db, now, telecaller_id=row.user_id))
        stats.append(entry)
    stats.sort(key=lambda s: (-s["today"], s["full_name"] or ""))
    return stats


def _stage_value(db: Session, stage_filter) -> float:
    value = db.execute(
        select(func.coalesce(func.sum(Lead.expected_value), 0))
        .select_from(Lead)
        .join(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .where(stage_filter)
    ).scalar()
    return float(value or 0)


def dashboard_summary(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    bounds = period_bounds(now)

    total_leads = db.execute(select(func.count(Lead.lead_id))).scalar()
    total_accounts = db.execute(select(func.count(Account.account_id))).scalar()
    today_followups = db.execute(
        select(func.count(Lead.lead_id)).where(
            Lead.next_followup_at >= bounds["today"], Lead.next_followup_at < bounds["tomorrow"]
        )
    ).scalar()

    by_stage = db.execute(
        select(LeadStage.stage_name.label("name"), func.count(Lead.lead_id).label("count"))
        .select_from(LeadStage)
        .outerjoin(Lead, Lead.stage_id == LeadStage.stage_id)
        .group_by(LeadStage.stage_id, LeadStage.stage_name)
        .order_by(LeadStage.stage_id)
    ).all()

    recent = db.execute(
        select(
            Lead.lead_id,
            Lead.lead_date,
            Account.account_name,
            User.full_name.label("generated_by_name"),
            Lead.lead_source,
            LeadStage.stage_name,
            Lead.expected_value,
        )
        .select_from(Lead)
        .outerjoin(Account, Lead.account_id == Account.account_id)
        .outerjoin(User, Lead.lead_generated_by == User.user_id)
        .outerjoin(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .order_by(Lead.created_date.desc(), Lead.lead_id.desc())
        .limit(5)
    ).all()

    summary = {
        "totalLeads": int(total_leads or 0),
        "totalAccounts": int(total_accounts or 0),
        "totalRevenue": _stage_value(db, LeadStage.stage_name == WON_STAGE),
        "expectedPipeline": _stage_value(db, LeadStage.stage_name.notin_([WON_STAGE, LOST_STAGE])),
        "todayFollowups": int(today_followups or 0),
        "leadsByStage": [{"name": r.name, "count": int(r.count)} for r in by_stage],
        "recentLeads": [dict(r._mapping) for r in recent],
    }
    summary.update(call_outcomes(db, now))
    return summary


def followups(db: Session, day: Optional[date] = None) -> Dict[str, Any]:
    """Leads due for follow-up on ``day`` (default today) with their latest call."""
    day = day or date.today()
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1)

    last_call = (
        select(LeadCallLog.call_id)
        .where(LeadCallLog.lead_id == Lead.lead_id)
        .order_by(LeadCallLog.call_datetime.desc(), LeadCallLog.call_id.desc())
        .limit(1)
        .correlate(Lead)
        .scalar_subquery()
    )
    rows = db.execute(
        select(
            Lead.lead_id,
            Lead.account_id,
            Lead.next_followup_at,
            Account.account_name,
            Account.primary_contact_name,
            Account.contact_phone,
            LeadStage.stage_name,
            LeadCallLog.call_outcome.label("last_call_outcome"),
            LeadCallLog.notes.label("last_call_notes"),
        )
        .select_from(Lead)
        .outerjoin(Account, Lead.account_id == Account.account_id)
        .outerjoin(LeadStage, Lead.stage_id == LeadStage.stage_id)
        .outerjoin(LeadCallLog, LeadCallLog.call_id == last_call)
        .where(Lead.next_followup_at >= start, Lead.next_followup_at < end)
        .order_by(Lead.next_followup_at)
    ).all()

    today_start = datetime.combine(date.today(), time.min)
    today_count = db.execute(
        select(func.count(Lead.lead_id)).where(
            Lead.next_followup_at >= today_start, Lead.next_followup_at < today_start + timedelta(days=1)
        )
    ).scalar()
    return {"followups": [dict(r._mapping) for r in rows], "todayCount": int(today_count or 0)}


def meeting_stats(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    bounds = period_bounds(now)
    today = bounds["today"].date()
    yesterday = bounds["yesterday"].date()
    week = bounds["week"].date()
    month = bounds["month"].date()

    def count_where(condition):
        return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

    # week and month include meetings scheduled later in the period
    row = db.execute(select(
        count_where(AccountMeeting.meeting_date == today).label("today"),
        count_where(AccountMeeting.meeting_date == yesterday).label("yesterday"),
        count_where(AccountMeeting.meeting_date >= week).label("this_week"),
        count_where(AccountMeeting.meeting_date >= month).label("this_month"),
    )).one()
    return {
        "today": int(row.today),
        "yesterday": int(row.yesterday),
        "thisWeek": int(row.this_week),
        "thisMonth": int(row.this_month),
    }
