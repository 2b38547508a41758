"""baseline schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from typing import Optional, Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Optional[Sequence[str]] = None
depends_on: Optional[Sequence[str]] = None


def _created(name="created_at"):
    return sa.Column(name, sa.DateTime(), server_default=sa.func.now(), nullable=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=50), nullable=False, server_default="Intern"),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Active"),
        _created("created_date"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "lead_stages",
        sa.Column("stage_id", sa.Integer(), primary_key=True),
        sa.Column("stage_name", sa.String(length=100), nullable=False),
    )
    op.create_table(
        "lead_stage_status",
        sa.Column("status_id", sa.Integer(), primary_key=True),
        sa.Column("status_name", sa.String(length=100), nullable=False),
        sa.Column("stage_id", sa.Integer(), sa.ForeignKey("lead_stages.stage_id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_lead_stage_status_stage_id", "lead_stage_status", ["stage_id"])

    op.create_table(
        "industry_master",
        sa.Column("industry_id", sa.Integer(), primary_key=True),
        sa.Column("industry_name", sa.String(length=255), nullable=False, unique=True),
    )
    op.create_table(
        "lead_source_master",
        sa.Column("lead_source_id", sa.Integer(), primary_key=True),
        sa.Column("lead_source_name", sa.String(length=255), nullable=False, unique=True),
    )
    op.create_table(
        "city_master",
        sa.Column("city_id", sa.Integer(), primary_key=True),
        sa.Column("city_name", sa.String(length=255), nullable=False),
    )
    op.create_table(
        "country_master",
        sa.Column("country_id", sa.Integer(), primary_key=True),
        sa.Column("country_name", sa.String(length=255), nullable=False),
    )
    op.create_table(
        "department_master",
        sa.Column("department_master_id", sa.Integer(), primary_key=True),
        sa.Column("department_name", sa.String(length=255), nullable=False),
    )
    op.create_table(
        "product_master",
        sa.Column("product_id", sa.Integer(), primary_key=True),
        sa.Column("product_name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("product_description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=True),
        _created("created_date"),
    )
    op.create_table(
        "industry_line_of_business",
        sa.Column("lob_id", sa.Integer(), primary_key=True),
        sa.Column("lob_name", sa.String(length=255), nullable=False),
        sa.Column("industry_id", sa.Integer(), sa.ForeignKey("industry_master.industry_id"), nullable=True),
    )
    op.create_table(
        "lob_use_case_master",
        sa.Column("use_case_id", sa.Integer(), primary_key=True),
        sa.Column("use_case_name", sa.String(length=255), nullable=False),
        sa.Column("lob_id", sa.Integer(), sa.ForeignKey("industry_line_of_business.lob_id"), nullable=True),
    )

    op.create_table(
        "accounts",
        sa.Column("account_id", sa.Integer(), primary_key=True),
        sa.Column("account_name", sa.String(length=255), nullable=False),
        sa.Column("industry", sa.String(length=255), nullable=True),
        sa.Column("primary_lob", sa.String(length=255), nullable=True),
        sa.Column("head_office", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=500), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("company_website", sa.Text(), nullable=True),
        sa.Column("primary_contact_name", sa.String(length=255), nullable=True),
        sa.Column("contact_person_role", sa.String(length=255), nullable=True),
        sa.Column("contact_phone", sa.String(length=50), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("company_phone", sa.String(length=50), nullable=True),
        sa.Column("account_status", sa.String(length=20), nullable=False, server_default="Prospect"),
        sa.Column("account_owner", sa.String(length=255), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("total_revenue", sa.Numeric(15, 2), server_default="0", nullable=True),
        sa.Column("employee_count", sa.Integer(), server_default="0", nullable=True),
        sa.Column("data_completion_score", sa.Integer(), server_default="0", nullable=True),
        _created("created_date"),
        _created("last_updated"),
    )
    op.create_index("ix_accounts_account_name", "accounts", ["account_name"])

    for table, columns in (
        ("account_contacts", [
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("role", sa.String(length=255), nullable=True),
            sa.Column("phone", sa.String(length=50), nullable=True),
            sa.Column("email", sa.String(length=255), nullable=True),
        ]),
        ("account_line_of_business", [
            sa.Column("business_type", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
        ]),
        ("account_departments", [
            sa.Column("department_name", sa.String(length=255), nullable=False),
            sa.Column("head_name", sa.String(length=255), nullable=True),
        ]),
        ("account_use_cases", [
            sa.Column("use_case_title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("status", sa.String(length=50), server_default="Identified", nullable=True),
        ]),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=True),
            *columns,
            _created(),
        )
        op.create_index(f"ix_{table}_account_id", table, ["account_id"])

    op.create_table(
        "department_pain_points",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("account_departments.id", ondelete="CASCADE"), nullable=True),
        sa.Column("pain_point", sa.Text(), nullable=False),
        sa.Column("severity", sa.String(length=50), server_default="Medium", nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _created(),
    )
    op.create_index("ix_department_pain_points_department_id", "department_pain_points", ["department_id"])

    op.create_table(
        "leads",
        sa.Column("lead_id", sa.Integer(), primary_key=True),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.account_id"), nullable=False),
        sa.Column("lead_date", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("lead_source", sa.String(length=255), nullable=True),
        sa.Column("lead_generated_by", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("assigned_telecaller", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("bd_assigned_to", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("de_assigned_to", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=True),
        sa.Column("stage_id", sa.Integer(), sa.ForeignKey("lead_stages.stage_id"), nullable=True),
        sa.Column("status_id", sa.Integer(), sa.ForeignKey("lead_stage_status.status_id"), nullable=True),
        sa.Column("expected_value", sa.Numeric(15, 2), server_default="0", nullable=True),
        sa.Column("product_mapped", sa.String(length=255), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("call_status", sa.Text(), nullable=True),
        sa.Column("follow_up_status_1", sa.Text(), nullable=True),
        sa.Column("follow_up_status_2", sa.Text(), nullable=True),
        sa.Column("last_contacted_at", sa.DateTime(), nullable=True),
        sa.Column("next_followup_at", sa.DateTime(), nullable=True),
        _created("created_date"),
    )
    op.create_index("ix_leads_account_id", "leads", ["account_id"])
    op.create_index("ix_leads_stage_id", "leads", ["stage_id"])
    op.create_index("ix_leads_next_followup_at", "leads", ["next_followup_at"])
    op.create_index("ix_leads_created_date", "leads", ["created_date"])

    op.create_table(
        "lead_call_logs",
        sa.Column("call_id", sa.Integer(), primary_key=True),
        sa.Column("lead_id", sa.Integer(), sa.ForeignKey("leads.lead_id", ondelete="CASCADE"), nullable=False),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False),
        sa.Column("telecaller_user_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("call_datetime", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("call_duration_seconds", sa.Integer(), server_default="0", nullable=True),
        sa.Column("call_outcome", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("followup_required", sa.Boolean(), server_default=sa.false(), nullable=True),
        sa.Column("followup_datetime", sa.DateTime(), nullable=True),
        _created(),
    )
    op.create_index("ix_lead_call_logs_lead_id", "lead_call_logs", ["lead_id"])
    op.create_index("ix_lead_call_logs_account_id", "lead_call_logs", ["account_id"])

    op.create_table(
        "account_meetings",
        sa.Column("meeting_id", sa.Integer(), primary_key=True),
        sa.Column("lead_id", sa.Integer(), sa.ForeignKey("leads.lead_id", ondelete="CASCADE"), nullable=False),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False),
        sa.Column("meeting_type", sa.String(length=50), server_default="Initial Connect", nullable=True),
        sa.Column("meeting_mode", sa.String(length=20), nullable=False),
        sa.Column("meeting_date", sa.Date(), nullable=False),
        sa.Column("meeting_time", sa.Time(), nullable=False),
        sa.Column("meeting_city", sa.Integer(), sa.ForeignKey("city_master.city_id"), nullable=True),
        sa.Column("meeting_address", sa.Text(), nullable=True),
        sa.Column("internal_attendees", sa.Text(), nullable=True),
        sa.Column("customer_attendees", sa.Text(), nullable=True),
        sa.Column("meeting_notes", sa.Text(), nullable=True),
        sa.Column("meeting_status", sa.String(length=20), server_default="Scheduled", nullable=True),
        _created(),
    )
    op.create_index("ix_account_meetings_lead_id", "account_meetings", ["lead_id"])
    op.create_index("ix_account_meetings_account_id", "account_meetings", ["account_id"])


def downgrade() -> None:
    for table in (
        "account_meetings",
        "lead_call_logs",
        "leads",
        "department_pain_points",
        "account_use_cases",
        "account_departments",
        "account_line_of_business",
        "account_contacts",
        "accounts",
        "lob_use_case_master",
        "industry_line_of_business",
        "product_master",
        "department_master",
        "country_master",
        "city_master",
        "lead_source_master",
        "industry_master",
        "lead_stage_status",
        "lead_stages",
        "users",
    ):
        op.drop_table(table)
