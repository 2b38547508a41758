import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from workbooster.db import get_db
from workbooster.schemas.stage_views import FilterCriteria, StageView, StageViewDetail, StageViewPage
from workbooster.services import stage_views
from workbooster.services.exceptions import InvalidSortKey, StageViewNotFound

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stage-views", tags=["stage views"], redirect_slashes=False)


def _view_or_404(name: str):
    try:
        return stage_views.get_view(name)
    except StageViewNotFound:
        raise HTTPException(status_code=404, detail="Stage view not found")


@router.get("", response_model=List[StageView])
def list_stage_views():
    return stage_views.STAGE_VIEWS


@router.get("/{name}", response_model=StageViewDetail)
def get_stage_view(name: str):
    view = _view_or_404(name)
    return {"view": view, "columns": stage_views.build_columns(view)}


@router.get("/{name}/leads", response_model=StageViewPage)
def get_stage_view_leads(
    name: str,
    criteria: Annotated[FilterCriteria, Query()],
    db: Session = Depends(get_db)
):
    view = _view_or_404(name)
    try:
        return stage_views.view_page(db, view, criteria)
    except InvalidSortKey as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error building stage view {name}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
