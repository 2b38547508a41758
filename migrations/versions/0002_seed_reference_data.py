"""seed pipeline stages, statuses and lead sources

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 09:30:00
"""

from typing import Optional, Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Optional[Sequence[str]] = None
depends_on: Optional[Sequence[str]] = None


STAGES = [
    (1, "New Lead", ["New", "Assigned", "Duplicate"]),
    (2, "Data Enrichment", ["Pending Enrichment", "In Progress", "Enriched"]),
    (3, "Product Qualification", ["Pending Review", "Qualified", "Not a Fit"]),
    (4, "Telecalling", ["To Call", "Attempted", "Connected", "Call Back"]),
    (5, "Initial Connect", ["Meeting Pending", "Meeting Scheduled", "Meeting Done"]),
    (6, "Demo", ["Demo Pending", "Demo Scheduled", "Demo Done"]),
    (7, "Discovery", ["In Discovery", "Requirements Captured"]),
    (8, "POC", ["POC Planned", "POC Running", "POC Successful", "POC Failed"]),
    (9, "Proposal & Commercials", ["Proposal Sent", "Negotiation", "Commercials Agreed"]),
    (10, "Pilot", ["Pilot Planned", "Pilot Running", "Pilot Completed"]),
    (11, "Closed Won", ["Won"]),
    (12, "Signing Off", ["Awaiting Signature", "Signed"]),
    (13, "Closed Lost", ["Lost to Competitor", "No Budget", "No Response"]),
]

LEAD_SOURCES = [
    "Website",
    "Referral",
    "LinkedIn",
    "Cold Call",
    "Event",
    "CSV Import",
    "Spreadsheet Import",
    "n8n Webhook",
]

COUNTRIES = ["India", "United States", "United Kingdom", "United Arab Emirates", "Singapore"]


def upgrade() -> None:
    stages = sa.table("lead_stages", sa.column("stage_id", sa.Integer), sa.column("stage_name", sa.String))
    statuses = sa.table(
        "lead_stage_status",
        sa.column("status_id", sa.Integer),
        sa.column("status_name", sa.String),
        sa.column("stage_id", sa.Integer),
    )
    sources = sa.table("lead_source_master", sa.column("lead_source_name", sa.String))
    countries = sa.table("country_master", sa.column("country_name", sa.String))

    op.bulk_insert(stages, [{"stage_id": stage_id, "stage_name": name} for stage_id, name, _ in STAGES])

    rows = []
    status_id = 1
    for stage_id, _, names in STAGES:
        for name in names:
            rows.append({"status_id": status_id, "status_name": name, "stage_id": stage_id})
            status_id += 1
    op.bulk_insert(statuses, rows)

    op.bulk_insert(sources, [{"lead_source_name": name} for name in LEAD_SOURCES])
    op.bulk_insert(countries, [{"country_name": name} for name in COUNTRIES])

    # explicit ids skip the serial sequences on postgres
    if op.get_bind().dialect.name == "postgresql":
        for table, column in (("lead_stages", "stage_id"), ("lead_stage_status", "status_id")):
            op.execute(
                f"SELECT setval(pg_get_serial_sequence('{table}', '{column}'), "
                f"(SELECT MAX({column}) FROM {table}))"
            )


def downgrade() -> None:
    op.execute("DELETE FROM country_master")
    op.execute("DELETE FROM lead_source_master")
    op.execute("DELETE FROM lead_stage_status")
    op.execute("DELETE FROM lead_stages")
