"""
Stage views: one named configuration per pipeline page.

Every view is one variant of the ``StageView`` union. ``build_columns``
turns a view into its column list and ``apply_filters`` runs the filter
chain over lead rows: stage restriction, free-text search, the equality
filters the view enables, then the inclusive creation date range. Sorting
and pagination happen after filtering.
"""
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.models.meetings import AccountMeeting
from workbooster.schemas.stage_views import (
    BasicView,
    Column,
    EnrichmentView,
    FilterCriteria,
    MeetingView,
    StageView,
    TelecallingView,
    WonView,
)
from workbooster.services import dashboard
from workbooster.services.exceptions import InvalidSortKey, StageViewNotFound
from workbooster.services.leads import list_leads

logger = logging.getLogger(__name__)

STAGE_VIEWS: List[StageView] = [
    BasicView(
        name="all-leads",
        title="All Leads",
        description="Every lead across the pipeline",
        filters=["stage", "source", "industry", "lob", "city", "product"],
    ),
    BasicView(
        name="sourcing",
        title="New Leads",
        description="Freshly sourced leads awaiting enrichment",
        stage_ids=[1],
        show_status=False,
        allow_edit=False,
    ),
    EnrichmentView(
        name="data-enrichment",
        title="Data Enrichment",
        description="Leads being enriched with contact and company data",
        stage_ids=[2],
        show_generated_by=False,
        show_source=False,
    ),
    BasicView(
        name="product-qualification",
        title="Product Qualification",
        description="Mapping leads to products",
        stage_ids=[3],
        filters=["industry", "lob", "city", "product"],
    ),
    TelecallingView(
        name="telecalling",
        title="Telecalling",
        description="Leads in the calling queue",
        stage_ids=[4],
        filters=["industry", "lob", "city", "outcome"],
        show_generated_by=False,
    ),
    MeetingView(
        name="initial-connect",
        title="Initial Connect",
        description="First meetings with the account",
        stage_ids=[5],
        meeting_type="Initial Connect",
    ),
    MeetingView(
        name="demo",
        title="Demo",
        description="Product demonstrations",
        stage_ids=[6],
        meeting_type="Demo",
    ),
    MeetingView(
        name="discovery",
        title="Discovery",
        description="Requirement discovery sessions",
        stage_ids=[7],
        meeting_type="Discovery",
    ),
    BasicView(
        name="poc",
        title="POC",
        description="Proof of concept in progress",
        stage_ids=[8],
    ),
    BasicView(
        name="contract",
        title="Proposal & Contract",
        description="Proposals, commercials and pilots",
        stage_ids=[9, 10],
    ),
    WonView(
        name="closed-won",
        title="Closed Won",
        description="Deals won",
        stage_ids=[11],
    ),
    BasicView(
        name="signing-off",
        title="Signing Off",
        description="Deals awaiting final sign off",
        stage_ids=[12],
    ),
    BasicView(
        name="closed-lost",
        title="Closed Lost",
        description="Deals lost",
        stage_ids=[13],
        allow_edit=False,
    ),
]

# filter key -> lead row column
FILTER_COLUMNS = {
    "source": "lead_source",
    "industry": "industry",
    "lob": "primary_lob",
    "city": "hq_city",
    "product": "product_mapped",
    "outcome": "last_call_outcome",
}


def get_view(name: str) -> StageView:
    for view in STAGE_VIEWS:
        if view.name == name:
            return view
    raise StageViewNotFound(f"Unknown stage view: {name}")


def build_columns(view: StageView) -> List[Column]:
    columns = [Column(key="account_name", label="Account")]
    if view.show_generated_by:
        columns.append(Column(key="generated_by", label="Generated By"))
    if view.show_source:
        columns.append(Column(key="lead_source", label="Source"))
    columns += [
        Column(key="industry", label="Industry"),
        Column(key="primary_lob", label="Line of Business"),
        Column(key="hq_city", label="HQ City"),
        Column(key="stage_name", label="Stage"),
    ]
    if view.show_status:
        columns.append(Column(key="status_name", label="Status"))

    if isinstance(view, BasicView):
        pass
    elif isinstance(view, EnrichmentView):
        columns += [
            Column(key="de_assigned_to_name", label="DE Assigned To"),
            Column(key="data_completion_score", label="Completion %"),
        ]
    elif isinstance(view, TelecallingView):
        columns += [
            Column(key="last_call_outcome", label="Last Outcome"),
            Column(key="last_contacted_at", label="Last Contacted"),
            Column(key="next_followup_at", label="Next Follow-up"),
        ]
    elif isinstance(view, MeetingView):
        columns += [
            Column(key="meeting_date", label=f"{view.meeting_type} Date"),
            Column(key="meeting_time", label="Time"),
            Column(key="meeting_mode", label="Mode"),
            Column(key="meeting_status", label="Meeting Status"),
        ]
    elif isinstance(view, WonView):
        columns += [
            Column(key="product_mapped", label="Product"),
            Column(key="expected_value", label="Deal Value"),
        ]
    else:
        raise TypeError(f"Unhandled stage view kind: {view.kind}")

    columns.append(Column(key="lead_date", label="Lead Date"))
    if view.allow_edit:
        columns.append(Column(key="actions", label="Actions", sortable=False))
    return columns


def _as_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def _matches(value: Any, wanted: str) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() == wanted.strip().lower()


def apply_filters(rows: Sequence[Dict[str, Any]], view: StageView,
                  criteria: FilterCriteria) -> List[Dict[str, Any]]:
    """AND-combine the view's stage restriction with the enabled filters."""
    enabled = set(view.filters)
    result = []
    search = (criteria.search or "").strip().lower()

    for row in rows:
        if view.stage_ids and row.get("stage_id") not in view.stage_ids:
            continue

        if search:
            haystack = " ".join(str(row.get(k) or "") for k in ("account_name", "lead_source")).lower()
            if search not in haystack:
                continue

        if criteria.stage and "stage" in enabled:
            if not (_matches(row.get("stage_id"), criteria.stage) or _matches(row.get("stage_name"), criteria.stage)):
                continue

        rejected = False
        for key, column in FILTER_COLUMNS.items():
            wanted = getattr(criteria, key)
            if wanted and key in enabled and not _matches(row.get(column), wanted):
                rejected = True
                break
        if rejected:
            continue

        if criteria.date_from or criteria.date_to:
            created = _as_date(row.get("created_date"))
            if created is None:
                continue
            if criteria.date_from and created < criteria.date_from:
                continue
            if criteria.date_to and created > criteria.date_to:
                continue

        result.append(row)
    return result


def sort_rows(rows: List[Dict[str, Any]], key: Optional[str], order: str = "asc") -> List[Dict[str, Any]]:
    if not key:
        return rows
    present = [r for r in rows if r.get(key) is not None]
    missing = [r for r in rows if r.get(key) is None]

    def sort_key(row):
        value = row[key]
        return value.lower() if isinstance(value, str) else value

    try:
        present.sort(key=sort_key, reverse=(order == "desc"))
    except TypeError:
        present.sort(key=lambda r: str(r[key]), reverse=(order == "desc"))
    return present + missing


def _attach_meetings(db: Session, rows: List[Dict[str, Any]], meeting_type: str) -> None:
    """Add the latest meeting of ``meeting_type`` to each row."""
    lead_ids = [row["lead_id"] for row in rows]
    latest = {}
    if lead_ids:
        meetings = db.execute(
            select(AccountMeeting)
            .where(AccountMeeting.lead_id.in_(lead_ids), AccountMeeting.meeting_type == meeting_type)
            .order_by(AccountMeeting.meeting_date, AccountMeeting.meeting_time, AccountMeeting.meeting_id)
        ).scalars().all()
        for meeting in meetings:
            latest[meeting.lead_id] = meeting
    for row in rows:
        meeting = latest.get(row["lead_id"])
        row["meeting_date"] = meeting.meeting_date if meeting else None
        row["meeting_time"] = meeting.meeting_time if meeting else None
        row["meeting_mode"] = meeting.meeting_mode if meeting else None
        row["meeting_status"] = meeting.meeting_status if meeting else None


def view_page(db: Session, view: StageView, criteria: FilterCriteria) -> Dict[str, Any]:
    columns = build_columns(view)
    if criteria.sort and criteria.sort not in {c.key for c in columns if c.sortable}:
        raise InvalidSortKey(f"Cannot sort {view.name} by {criteria.sort}")

    rows = list_leads(db, view.stage_ids or None)
    rows = apply_filters(rows, view, criteria)
    if isinstance(view, MeetingView):
        _attach_meetings(db, rows, view.meeting_type)
    rows = sort_rows(rows, criteria.sort, criteria.order)

    total = len(rows)
    start = (criteria.page - 1) * criteria.limit
    page = {
        "view": view,
        "columns": columns,
        "rows": rows[start:start + criteria.limit],
        "total": total,
        "page": criteria.page,
        "limit": criteria.limit,
        "total_pages": math.ceil(total / criteria.limit) if total else 0,
        "call_stats": None,
    }
    if isinstance(view, TelecallingView):
        page["call_stats"] = dashboard.call_outcomes(db)
    logger.debug(f"Stage view {view.name}: {total} rows after filters")
    return page
