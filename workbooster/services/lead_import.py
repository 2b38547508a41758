"""
Lead import shared by the CSV upload, the JSON bulk import and the n8n webhook.

Each record is imported in its own transaction: a failing record is rolled
back and reported without touching the records before or after it.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from workbooster.models.accounts import Account
from workbooster.models.leads import Lead
from workbooster.services import pipeline
from workbooster.services.exceptions import LeadImportError, PipelineError
from workbooster.utils import csv_parser

logger = logging.getLogger(__name__)

CSV_SOURCE = "CSV Import"
SPREADSHEET_SOURCE = "Spreadsheet Import"
WEBHOOK_SOURCE = "n8n Webhook"

# spreadsheet column -> lead payload field
FIELD_ALIASES = {
    "company_name": "account_name",
    "company": "account_name",
    "website": "company_website",
    "service_offered": "industry",
    "district": "location",
    "city": "head_office",
    "contact_person": "primary_contact_name",
    "contact_person_name": "primary_contact_name",
    "phone": "contact_phone",
    "mobile": "contact_phone",
    "email": "contact_email",
    "email_id": "contact_email",
    "follow_up_1": "follow_up_status_1",
    "follow_up_2": "follow_up_status_2",
    "status": "remarks",
}

ACCOUNT_FIELDS = [
    "industry",
    "primary_lob",
    "head_office",
    "location",
    "country",
    "company_website",
    "primary_contact_name",
    "contact_person_role",
    "contact_phone",
    "contact_email",
    "company_phone",
]

LEAD_TEXT_FIELDS = [
    "lead_source",
    "product_mapped",
    "remarks",
    "call_status",
    "follow_up_status_1",
    "follow_up_status_2",
]


def normalize_key(key: str) -> str:
    return "_".join(str(key).strip().lower().split())


def normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Lower-case and underscore the keys, then map spreadsheet aliases.

    A canonical field already present in the record wins over its alias.
    """
    normalized: Dict[str, Any] = {}
    for key, value in record.items():
        normalized[normalize_key(key)] = value.strip() if isinstance(value, str) else value

    mapped: Dict[str, Any] = {}
    for key, value in normalized.items():
        target = FIELD_ALIASES.get(key, key)
        if target != key and target in normalized:
            continue
        if target in mapped and _blank(value):
            continue
        mapped[target] = value
    return mapped


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _as_int(record: Dict[str, Any], field: str) -> Optional[int]:
    value = record.get(field)
    if _blank(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise LeadImportError(f"{field} must be an integer, got {value!r}")


def _as_float(record: Dict[str, Any], field: str) -> Optional[float]:
    value = record.get(field)
    if _blank(value):
        return None
    try:
        return float(str(value).replace(",", ""))
    except (TypeError, ValueError):
        raise LeadImportError(f"{field} must be a number, got {value!r}")


def find_account_by_name(db: Session, name: str) -> Optional[Account]:
    return db.execute(
        select(Account).where(func.lower(Account.account_name) == name.strip().lower())
    ).scalars().first()


def import_record(db: Session, record: Dict[str, Any], default_source: str,
                  update_existing: bool = True) -> Tuple[int, int]:
    """
    Upsert the account named in ``record`` and add a lead for it.

    The record must already be normalized. Nothing is committed here.
    Returns ``(lead_id, account_id)``.
    """
    name = record.get("account_name")
    if _blank(name):
        raise LeadImportError("account_name is required")
    name = str(name).strip()

    account_values = {f: record[f] for f in ACCOUNT_FIELDS if not _blank(record.get(f))}

    account = find_account_by_name(db, name)
    if account is None:
        account = Account(account_name=name, account_status="Prospect", **account_values)
        db.add(account)
        db.flush()
    elif update_existing and account_values:
        for field, value in account_values.items():
            setattr(account, field, value)
        account.last_updated = datetime.now()

    stage_id = _as_int(record, "stage_id") or pipeline.first_stage_id(db)
    if stage_id is None:
        raise LeadImportError("No pipeline stages are configured")
    try:
        status_id = pipeline.resolve_status(db, stage_id, _as_int(record, "status_id"))
    except PipelineError as e:
        raise LeadImportError(str(e))

    lead = Lead(
        account_id=account.account_id,
        lead_date=datetime.now(),
        lead_source=record.get("lead_source") or default_source,
        lead_generated_by=_as_int(record, "lead_generated_by"),
        stage_id=stage_id,
        status_id=status_id,
        expected_value=_as_float(record, "expected_value") or 0,
    )
    for field in LEAD_TEXT_FIELDS:
        if field != "lead_source" and not _blank(record.get(field)):
            setattr(lead, field, record[field])
    db.add(lead)
    db.flush()
    return lead.lead_id, account.account_id


def import_records(db: Session, records: Iterable[Dict[str, Any]], default_source: str) -> Dict[str, Any]:
    """Import spreadsheet-style records one transaction each."""
    result: Dict[str, Any] = {"success": 0, "failed": 0, "skipped": 0, "errors": []}
    for raw in records:
        record = normalize_record(raw)
        if _blank(record.get("account_name")):
            result["skipped"] += 1
            continue
        try:
            import_record(db, record, default_source)
            db.commit()
            result["success"] += 1
        except Exception as e:
            db.rollback()
            logger.error(f"Error importing lead {record.get('account_name')}: {e}")
            result["failed"] += 1
            result["errors"].append({"company": record.get("account_name"), "error": str(e)})
    result["message"] = f"Import complete: {result['success']} succeeded, {result['failed']} failed"
    return result


def import_csv(db: Session, text: str) -> Dict[str, Any]:
    """
    Import the records of a CSV upload.

    Row numbers in ``errors`` and ``warnings`` are the file line the row
    starts on, so the header is row 1 and blank lines still count.
    A data row whose cell count differs from the header is still imported
    as far as it goes, with a warning.
    """
    headers = csv_parser.header_row(text)
    records = csv_parser.parse_csv(text)
    lengths = csv_parser.row_lengths(text)
    lines = csv_parser.row_lines(text)

    summary: Dict[str, Any] = {
        "message": "",
        "total_rows": len(records),
        "imported": 0,
        "skipped": 0,
        "failed": 0,
        "errors": [],
        "warnings": [],
    }
    if not records:
        summary["message"] = "No records found in file"
        return summary

    for index, raw in enumerate(records):
        row_number = lines[index]
        if lengths[index] != len(headers):
            summary["warnings"].append({
                "row": row_number,
                "reason": f"Row has {lengths[index]} values but the header has {len(headers)}",
            })
        record = normalize_record(raw)
        if _blank(record.get("account_name")):
            summary["skipped"] += 1
            summary["errors"].append({"row": row_number, "reason": "Missing account name"})
            continue
        try:
            import_record(db, record, CSV_SOURCE)
            db.commit()
            summary["imported"] += 1
        except Exception as e:
            db.rollback()
            logger.error(f"CSV import failed on row {row_number}: {e}")
            summary["failed"] += 1
            summary["errors"].append({"row": row_number, "reason": str(e)})

    summary["message"] = (
        f"Imported {summary['imported']} of {summary['total_rows']} rows "
        f"({summary['skipped']} skipped, {summary['failed']} failed)"
    )
    logger.info(summary["message"])
    return summary
