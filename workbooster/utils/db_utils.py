from sqlalchemy import Table

from workbooster.db import Base
import workbooster.models  # noqa: F401  registers every table on Base.metadata

# table -> (primary key, label column)
MASTER_TABLES = {
    "industry_master": ("industry_id", "industry_name"),
    "lead_source_master": ("lead_source_id", "lead_source_name"),
    "city_master": ("city_id", "city_name"),
    "country_master": ("country_id", "country_name"),
    "department_master": ("department_master_id", "department_name"),
    "product_master": ("product_id", "product_name"),
    "lob_use_case_master": ("use_case_id", "use_case_name"),
    "industry_line_of_business": ("lob_id", "lob_name"),
    "lead_stages": ("stage_id", "stage_name"),
    "users": ("user_id", "full_name"),
}

# never writable through the master table endpoints
PROTECTED_COLUMNS = {"users": {"password"}}


def get_table(table_name: str) -> Table:
    """Look up a whitelisted master table. Raises KeyError for anything else."""
    if table_name not in MASTER_TABLES:
        raise KeyError(table_name)
    return Base.metadata.tables[table_name]


def get_primary_key(table_name: str):
    return get_table(table_name).c[MASTER_TABLES[table_name][0]]


def writable_columns(table_name: str):
    table = get_table(table_name)
    pk = MASTER_TABLES[table_name][0]
    protected = PROTECTED_COLUMNS.get(table_name, set())
    return {c.name for c in table.columns if c.name != pk and c.name not in protected}


def readable_columns(table_name: str):
    table = get_table(table_name)
    protected = PROTECTED_COLUMNS.get(table_name, set())
    return [c for c in table.columns if c.name not in protected]

# read-only here, written through their own endpoints
MANAGED_ELSEWHERE = {"users": "/api/users"}
