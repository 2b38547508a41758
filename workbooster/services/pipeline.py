import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from workbooster.models.pipeline import LeadStage, LeadStatus
from workbooster.services.exceptions import PipelineError

logger = logging.getLogger(__name__)


def first_stage_id(db: Session) -> Optional[int]:
    return db.execute(select(LeadStage.stage_id).order_by(LeadStage.stage_id).limit(1)).scalar()


def first_status_id(db: Session, stage_id: int) -> Optional[int]:
    return db.execute(
        select(LeadStatus.status_id)
        .where(LeadStatus.stage_id == stage_id)
        .order_by(LeadStatus.status_id)
        .limit(1)
    ).scalar()


def resolve_status(db: Session, stage_id: int, status_id: Optional[int] = None,
                   current_status_id: Optional[int] = None) -> Optional[int]:
    """
    Return the status a lead should carry when it sits in ``stage_id``.

    An explicit ``status_id`` must belong to the stage. Without one the
    current status is kept when it belongs to the stage, otherwise the
    stage's first status is used (None when the stage has no statuses).
    """
    stage = db.get(LeadStage, stage_id)
    if stage is None:
        raise PipelineError(f"Unknown stage: {stage_id}")

    if status_id is not None:
        status = db.get(LeadStatus, status_id)
        if status is None or status.stage_id != stage_id:
            raise PipelineError(f"Status {status_id} does not belong to stage {stage_id}")
        return status_id

    if current_status_id is not None:
        current = db.get(LeadStatus, current_status_id)
        if current is not None and current.stage_id == stage_id:
            return current_status_id

    resolved = first_status_id(db, stage_id)
    logger.debug("Status reset to %s for stage %s", resolved, stage_id)
    return resolved
