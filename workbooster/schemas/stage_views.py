from datetime import date
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from workbooster.core.config import settings

DEFAULT_FILTERS = ["industry", "lob", "city"]


class StageViewBase(BaseModel):
    name: str
    title: str
    description: Optional[str] = None
    stage_ids: List[int] = []
    filters: List[str] = Field(default_factory=lambda: list(DEFAULT_FILTERS))
    show_status: bool = True
    show_generated_by: bool = True
    show_source: bool = True
    allow_edit: bool = True


class BasicView(StageViewBase):
    kind: Literal["basic"] = "basic"


class EnrichmentView(StageViewBase):
    kind: Literal["enrichment"] = "enrichment"


class TelecallingView(StageViewBase):
    kind: Literal["telecalling"] = "telecalling"


class MeetingView(StageViewBase):
    kind: Literal["meeting"] = "meeting"
    meeting_type: str


class WonView(StageViewBase):
    kind: Literal["won"] = "won"


StageView = Annotated[
    Union[BasicView, EnrichmentView, TelecallingView, MeetingView, WonView],
    Field(discriminator="kind"),
]


class Column(BaseModel):
    key: str
    label: str
    sortable: bool = True


class FilterCriteria(BaseModel):
    search: Optional[str] = None
    stage: Optional[str] = None
    source: Optional[str] = None
    industry: Optional[str] = None
    lob: Optional[str] = None
    city: Optional[str] = None
    product: Optional[str] = None
    outcome: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort: Optional[str] = None
    order: Literal["asc", "desc"] = "asc"
    page: int = Field(1, ge=1)
    limit: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=500)


class StageViewDetail(BaseModel):
    view: StageView
    columns: List[Column]


class StageViewPage(BaseModel):
    view: StageView
    columns: List[Column]
    rows: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int
    call_stats: Optional[Dict[str, Any]] = None
