from pydantic import BaseModel
from typing import List, Optional

class RowIssue(BaseModel):
    row: int
    reason: str

class CSVImportSummary(BaseModel):
    message: str
    total_rows: int
    imported: int
    skipped: int
    failed: int
    errors: List[RowIssue] = []
    warnings: List[RowIssue] = []

class BulkImportError(BaseModel):
    company: Optional[str] = None
    error: str

class BulkImportSummary(BaseModel):
    message: str
    success: int
    failed: int
    skipped: int
    errors: List[BulkImportError] = []

class WebhookLeadResponse(BaseModel):
    success: bool = True
    lead_id: int
    account_id: int
    message: str
