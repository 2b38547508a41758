import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.models.accounts import Account
from workbooster.models.leads import Lead
from workbooster.schemas.imports import BulkImportSummary, CSVImportSummary, WebhookLeadResponse
from workbooster.schemas.leads import (
    Followups,
    LeadCreate,
    LeadCreated,
    LeadDEAssignment,
    LeadListItem,
    LeadStageUpdate,
    LeadStats,
    LeadUpdate,
)
from workbooster.services import dashboard, lead_import, pipeline
from workbooster.services.accounts import find_duplicates
from workbooster.services.exceptions import LeadImportError, PipelineError
from workbooster.services.leads import LEAD_LIST_COLUMNS, get_lead_detail, list_leads
from workbooster.utils.csv_parser import dump_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["leads"], redirect_slashes=False)
webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"], redirect_slashes=False)

ACCOUNT_FIELDS = [
    "account_name",
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

LEAD_FIELDS = [
    "lead_source",
    "lead_generated_by",
    "assigned_telecaller",
    "bd_assigned_to",
    "de_assigned_to",
    "expected_value",
    "product_mapped",
    "remarks",
]


def _present(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and value.strip() == "")


def _parse_stage_ids(stage_ids: Optional[str]) -> List[int]:
    ids = []
    for part in (stage_ids or "").split(","):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return ids


@router.get("", response_model=List[LeadListItem])
def get_leads(stage_ids: Optional[str] = Query(None), db: Session = Depends(get_db)):
    try:
        return list_leads(db, _parse_stage_ids(stage_ids))
    except Exception as e:
        logger.error(f"Error fetching leads: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/stats", response_model=LeadStats)
def get_lead_stats(stage_ids: Optional[str] = Query(None), db: Session = Depends(get_db)):
    try:
        return dashboard.lead_stats(db, _parse_stage_ids(stage_ids))
    except Exception as e:
        logger.error(f"Error fetching lead stats: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/followups", response_model=Followups)
def get_followups(day: Optional[date] = Query(None, alias="date"), db: Session = Depends(get_db)):
    try:
        return dashboard.followups(db, day)
    except Exception as e:
        logger.error(f"Error fetching follow-ups: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/export")
def export_leads(stage_ids: Optional[str] = Query(None), db: Session = Depends(get_db)):
    try:
        rows = list_leads(db, _parse_stage_ids(stage_ids))
        records = [{column: row.get(column) for column in LEAD_LIST_COLUMNS} for row in rows]
        content = dump_csv(records) if records else ",".join(LEAD_LIST_COLUMNS) + "\n"
        filename = f"leads_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
    except Exception as e:
        logger.error(f"Error exporting leads: {e}")
        raise HTTPException(status_code=500, detail="Failed to export leads")


@router.post("/import", response_model=CSVImportSummary)
async def import_leads_csv(file: UploadFile = File(...), db: Session = Depends(get_db)):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only .csv files are supported")
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")
    try:
        return lead_import.import_csv(db, text)
    except Exception as e:
        db.rollback()
        logger.error(f"CSV import failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to import leads")


@router.post("/bulk-import", response_model=BulkImportSummary)
def bulk_import(
    payload: Union[List[Dict[str, Any]], Dict[str, Any]] = Body(...),
    db: Session = Depends(get_db)
):
    records = payload if isinstance(payload, list) else [payload]
    try:
        return lead_import.import_records(db, records, lead_import.SPREADSHEET_SOURCE)
    except Exception as e:
        db.rollback()
        logger.error(f"Bulk import failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to import leads")


@router.get("/{lead_id}")
def get_lead(lead_id: int, db: Session = Depends(get_db)):
    try:
        lead = get_lead_detail(db, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        return lead
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching lead {lead_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=LeadCreated)
def create_lead(lead_data: LeadCreate, db: Session = Depends(get_db)):
    if not _present(lead_data.account_name):
        raise HTTPException(status_code=400, detail={"error": "Account Name is required", "field": "account_name"})
    if not _present(lead_data.company_website):
        raise HTTPException(status_code=400, detail={"error": "Company Website is required", "field": "company_website"})

    try:
        name = lead_data.account_name.strip()
        website = lead_data.company_website.strip()
        dupes = find_duplicates(db, name, website)
        if dupes["account_name_exists"]:
            raise HTTPException(status_code=409, detail={
                "error": f"Account \"{dupes['existing_account_name']}\" already exists",
                "field": "account_name",
                "duplicate": True,
            })
        if dupes["company_website_exists"]:
            raise HTTPException(status_code=409, detail={
                "error": f"Website already exists for account \"{dupes['existing_website_account']}\"",
                "field": "company_website",
                "duplicate": True,
            })

        stage_id = lead_data.stage_id or pipeline.first_stage_id(db)
        status_id = pipeline.resolve_status(db, stage_id, lead_data.status_id) if stage_id else None

        values = lead_data.model_dump()
        account = Account(
            **{f: values[f] for f in ACCOUNT_FIELDS},
            account_status="Prospect",
        )
        account.account_name = name
        account.company_website = website
        db.add(account)
        db.flush()

        lead = Lead(
            account_id=account.account_id,
            lead_date=datetime.now(),
            stage_id=stage_id,
            status_id=status_id,
            **{f: values[f] for f in LEAD_FIELDS if values[f] is not None},
        )
        db.add(lead)
        db.commit()
        logger.info(f"Created lead {lead.lead_id} for account {account.account_id}")
        return {
            "success": True,
            "lead_id": lead.lead_id,
            "account_id": account.account_id,
            "message": "Lead created successfully",
        }
    except HTTPException:
        db.rollback()
        raise
    except PipelineError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating lead: {e}")
        raise HTTPException(status_code=500, detail="Failed to create lead")


@router.put("/{lead_id}")
def update_lead(lead_id: int, lead_data: LeadUpdate, db: Session = Depends(get_db)):
    try:
        lead = db.get(Lead, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")

        values = lead_data.model_dump()
        account_values = {f: values[f] for f in ACCOUNT_FIELDS if _present(values[f])}
        if account_values:
            dupes = find_duplicates(
                db,
                account_values.get("account_name"),
                account_values.get("company_website"),
                exclude_account_id=lead.account_id,
            )
            if dupes["account_name_exists"]:
                raise HTTPException(status_code=400, detail={"error": "Account already exists", "field": "account_name"})
            if dupes["company_website_exists"]:
                raise HTTPException(status_code=400, detail={
                    "error": f"Website already exists for account \"{dupes['existing_website_account']}\"",
                    "field": "company_website",
                })
            account = db.get(Account, lead.account_id)
            for field, value in account_values.items():
                setattr(account, field, value)
            account.last_updated = datetime.now()

        for field in LEAD_FIELDS:
            if _present(values[field]):
                setattr(lead, field, values[field])

        if values["stage_id"] is not None or values["status_id"] is not None:
            stage_id = values["stage_id"] or lead.stage_id
            lead.status_id = pipeline.resolve_status(db, stage_id, values["status_id"], lead.status_id)
            lead.stage_id = stage_id

        db.commit()
        return {"success": True, "message": "Lead updated successfully"}
    except HTTPException:
        db.rollback()
        raise
    except PipelineError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating lead {lead_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update lead")


@router.patch("/{lead_id}/stage")
def update_lead_stage(lead_id: int, stage_data: LeadStageUpdate, db: Session = Depends(get_db)):
    try:
        lead = db.get(Lead, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        lead.status_id = pipeline.resolve_status(db, stage_data.stage_id, stage_data.status_id, lead.status_id)
        lead.stage_id = stage_data.stage_id
        db.commit()
        return {
            "success": True,
            "message": "Lead stage updated successfully",
            "stage_id": lead.stage_id,
            "status_id": lead.status_id,
        }
    except HTTPException:
        raise
    except PipelineError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating lead stage: {e}")
        raise HTTPException(status_code=500, detail="Failed to update lead stage")


@router.patch("/{lead_id}/de-assignment")
def update_de_assignment(lead_id: int, data: LeadDEAssignment, db: Session = Depends(get_db)):
    try:
        lead = db.get(Lead, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        lead.de_assigned_to = data.de_assigned_to
        db.commit()
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Update DE assignment error: {e}")
        raise HTTPException(status_code=500, detail="Failed to update DE assignment")


@router.delete("/{lead_id}")
def delete_lead(lead_id: int, db: Session = Depends(get_db)):
    try:
        lead = db.get(Lead, lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        db.delete(lead)
        db.commit()
        return {"success": True, "message": "Lead deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting lead {lead_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@webhook_router.post("/n8n-lead", response_model=WebhookLeadResponse)
def n8n_lead(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    record = lead_import.normalize_record(payload)
    if not _present(record.get("account_name")):
        raise HTTPException(status_code=400, detail="company_name is required")
    try:
        lead_id, account_id = lead_import.import_record(
            db, record, lead_import.WEBHOOK_SOURCE, update_existing=False
        )
        db.commit()
        return {
            "success": True,
            "lead_id": lead_id,
            "account_id": account_id,
            "message": "Lead imported successfully",
        }
    except LeadImportError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.error(f"Webhook import error: {e}")
        raise HTTPException(status_code=500, detail="Failed to import lead")
