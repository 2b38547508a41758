import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.utils.db_utils import (
    MANAGED_ELSEWHERE,
    get_primary_key,
    get_table,
    readable_columns,
    writable_columns,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/master", tags=["master tables"], redirect_slashes=False)


def _table_or_400(table_name: str):
    try:
        return get_table(table_name)
    except KeyError:
        raise HTTPException(status_code=400, detail="Unsupported master table")


def _reject_managed(table_name: str, action: str):
    if table_name in MANAGED_ELSEWHERE:
        raise HTTPException(status_code=400, detail=f"Use {MANAGED_ELSEWHERE[table_name]} to {action} {table_name}")


def _check_columns(table_name: str, data: Dict[str, Any]):
    if not data:
        raise HTTPException(status_code=400, detail="No fields provided")
    unknown = sorted(set(data) - writable_columns(table_name))
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown column(s) for {table_name}: {', '.join(unknown)}")


def _fetch(db: Session, table_name: str, record_id):
    row = db.execute(
        select(*readable_columns(table_name)).where(get_primary_key(table_name) == record_id)
    ).first()
    return dict(row._mapping) if row else None


@router.get("/{table_name}")
def get_master_rows(table_name: str, db: Session = Depends(get_db)):
    _table_or_400(table_name)
    try:
        rows = db.execute(
            select(*readable_columns(table_name)).order_by(get_primary_key(table_name).desc())
        ).fetchall()
        return [dict(row._mapping) for row in rows]
    except Exception as e:
        logger.error(f"Error fetching master table {table_name}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/{table_name}", status_code=201)
def create_master_row(table_name: str, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    table = _table_or_400(table_name)
    _reject_managed(table_name, "add")
    _check_columns(table_name, data)
    try:
        result = db.execute(table.insert().values(**data))
        db.commit()
        return _fetch(db, table_name, result.inserted_primary_key[0])
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected insert into {table_name}: {e.orig}")
        raise HTTPException(status_code=400, detail="Record conflicts with existing data")
    except Exception as e:
        db.rollback()
        logger.error(f"Error adding to master table {table_name}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{table_name}/{record_id}")
def update_master_row(table_name: str, record_id: int, data: Dict[str, Any] = Body(...),
                      db: Session = Depends(get_db)):
    table = _table_or_400(table_name)
    _reject_managed(table_name, "change")
    _check_columns(table_name, data)
    try:
        result = db.execute(
            table.update().where(get_primary_key(table_name) == record_id).values(**data)
        )
        if result.rowcount == 0:
            db.rollback()
            raise HTTPException(status_code=404, detail="Record not found")
        db.commit()
        return _fetch(db, table_name, record_id)
    except HTTPException:
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update of {table_name} {record_id}: {e.orig}")
        raise HTTPException(status_code=400, detail="Record conflicts with existing data")
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating master table {table_name}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{table_name}/{record_id}")
def delete_master_row(table_name: str, record_id: int, db: Session = Depends(get_db)):
    table = _table_or_400(table_name)
    _reject_managed(table_name, "delete")
    try:
        result = db.execute(table.delete().where(get_primary_key(table_name) == record_id))
        if result.rowcount == 0:
            db.rollback()
            raise HTTPException(status_code=404, detail="Record not found")
        db.commit()
        return {"success": True, "message": "Record deleted"}
    except HTTPException:
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected delete of {table_name} {record_id}: {e.orig}")
        raise HTTPException(status_code=400, detail="Record is still referenced by other data")
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting from master table {table_name}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
