from datetime import date, datetime, timedelta

import pytest

from workbooster.schemas.stage_views import BasicView, FilterCriteria, MeetingView
from workbooster.services.stage_views import STAGE_VIEWS, apply_filters, build_columns, get_view, sort_rows
from workbooster.services.exceptions import StageViewNotFound


@pytest.fixture
def pipeline_leads(client, make_lead):
    acme = make_lead("Acme", industry="Retail", head_office="Pune", lead_source="Referral")
    beta = make_lead("Beta", industry="Retail", head_office="Goa", lead_source="Website")
    gamma = make_lead("Gamma", industry="Banking", head_office="Pune", lead_source="Referral")
    for lead in (acme, beta):
        client.patch(f"/api/leads/{lead['lead_id']}/stage", json={"stage_id": 4})
    return {"acme": acme, "beta": beta, "gamma": gamma}


def _names(body):
    return sorted(row["account_name"] for row in body["rows"])


def test_every_view_builds_columns():
    for view in STAGE_VIEWS:
        keys = [c.key for c in build_columns(view)]
        assert keys[0] == "account_name"
        assert "lead_date" in keys
        assert ("actions" in keys) == view.allow_edit


def test_columns_follow_view_kind():
    telecalling = [c.key for c in build_columns(get_view("telecalling"))]
    assert "last_call_outcome" in telecalling
    assert "generated_by" not in telecalling

    enrichment = [c.key for c in build_columns(get_view("data-enrichment"))]
    assert "de_assigned_to_name" in enrichment
    assert "lead_source" not in enrichment

    demo = build_columns(get_view("demo"))
    assert demo[[c.key for c in demo].index("meeting_date")].label == "Demo Date"

    won = [c.key for c in build_columns(get_view("closed-won"))]
    assert "expected_value" in won

    sourcing = [c.key for c in build_columns(get_view("sourcing"))]
    assert "status_name" not in sourcing


def test_unknown_view():
    with pytest.raises(StageViewNotFound):
        get_view("nope")


def test_date_range_is_inclusive():
    view = BasicView(name="t", title="T")
    rows = [
        {"account_name": "a", "created_date": datetime(2026, 1, 1, 23, 59)},
        {"account_name": "b", "created_date": datetime(2026, 1, 2, 0, 0)},
        {"account_name": "c", "created_date": datetime(2026, 1, 3, 12, 0)},
        {"account_name": "d", "created_date": None},
    ]
    criteria = FilterCriteria(date_from=date(2026, 1, 1), date_to=date(2026, 1, 2))
    assert [r["account_name"] for r in apply_filters(rows, view, criteria)] == ["a", "b"]


def test_filters_are_and_combined():
    view = BasicView(name="t", title="T", filters=["industry", "city"])
    rows = [
        {"account_name": "a", "industry": "Retail", "hq_city": "Pune"},
        {"account_name": "b", "industry": "Retail", "hq_city": "Goa"},
        {"account_name": "c", "industry": "Banking", "hq_city": "Pune"},
    ]
    criteria = FilterCriteria(industry="retail", city="PUNE")
    assert [r["account_name"] for r in apply_filters(rows, view, criteria)] == ["a"]


def test_filters_not_enabled_for_view_are_ignored():
    view = BasicView(name="t", title="T", filters=["industry"])
    rows = [{"account_name": "a", "industry": "Retail", "product_mapped": "Payroll"}]
    assert apply_filters(rows, view, FilterCriteria(product="Other")) == rows


def test_sort_puts_missing_values_last():
    rows = [{"v": None}, {"v": "b"}, {"v": "A"}]
    assert [r["v"] for r in sort_rows(rows, "v")] == ["A", "b", None]
    assert [r["v"] for r in sort_rows(rows, "v", "desc")] == ["b", "A", None]


def test_meeting_view_requires_meeting_type():
    with pytest.raises(ValueError):
        MeetingView(name="m", title="M")


def test_list_views(client):
    views = client.get("/api/stage-views").json()
    assert len(views) == len(STAGE_VIEWS)
    kinds = {v["name"]: v["kind"] for v in views}
    assert kinds["telecalling"] == "telecalling"
    assert kinds["demo"] == "meeting"


def test_view_detail(client):
    body = client.get("/api/stage-views/closed-lost").json()
    assert body["view"]["stage_ids"] == [13]
    assert "actions" not in [c["key"] for c in body["columns"]]
    assert client.get("/api/stage-views/nope").status_code == 404


def test_view_leads_restricted_to_stage(client, pipeline_leads):
    body = client.get("/api/stage-views/telecalling/leads").json()
    assert _names(body) == ["Acme", "Beta"]
    assert body["total"] == 2
    assert body["call_stats"]["callsToday"] == 0


def test_view_leads_and_filters(client, pipeline_leads):
    body = client.get("/api/stage-views/telecalling/leads", params={"industry": "retail", "city": "pune"}).json()
    assert _names(body) == ["Acme"]


def test_view_leads_search(client, pipeline_leads):
    body = client.get("/api/stage-views/all-leads/leads", params={"search": "referral"}).json()
    assert _names(body) == ["Acme", "Gamma"]


def test_view_leads_stage_filter(client, pipeline_leads):
    body = client.get("/api/stage-views/all-leads/leads", params={"stage": "Telecalling"}).json()
    assert _names(body) == ["Acme", "Beta"]
    body = client.get("/api/stage-views/all-leads/leads", params={"stage": "1"}).json()
    assert _names(body) == ["Gamma"]


def test_view_leads_date_range(client, pipeline_leads):
    today = date.today()
    inside = client.get("/api/stage-views/all-leads/leads", params={
        "date_from": today.isoformat(), "date_to": today.isoformat(),
    }).json()
    assert inside["total"] == 3
    before = client.get("/api/stage-views/all-leads/leads", params={
        "date_to": (today - timedelta(days=1)).isoformat(),
    }).json()
    assert before["total"] == 0


def test_view_leads_sort_and_page(client, pipeline_leads):
    body = client.get("/api/stage-views/all-leads/leads", params={
        "sort": "account_name", "order": "desc", "limit": 2, "page": 2,
    }).json()
    assert [r["account_name"] for r in body["rows"]] == ["Acme"]
    assert body["total"] == 3
    assert body["total_pages"] == 2


def test_view_leads_bad_criteria(client):
    response = client.get("/api/stage-views/all-leads/leads", params={"limit": 0})
    assert response.status_code == 400
    assert response.json()["field"] == "limit"


def test_meeting_view_attaches_latest_meeting(client, make_lead):
    lead = make_lead("Acme")
    client.patch(f"/api/leads/{lead['lead_id']}/stage", json={"stage_id": 6})
    client.post("/api/meetings", json={
        "lead_id": lead["lead_id"],
        "account_id": lead["account_id"],
        "meeting_type": "Demo",
        "meeting_mode": "Onsite",
        "meeting_date": date.today().isoformat(),
        "meeting_time": "09:00:00",
    })
    body = client.get("/api/stage-views/demo/leads").json()
    row = body["rows"][0]
    assert row["meeting_mode"] == "Onsite"
    assert row["meeting_date"] == date.today().isoformat()


def test_view_leads_rejects_unsortable_columns(client, pipeline_leads):
    for key in ("actions", "not_a_column"):
        response = client.get("/api/stage-views/all-leads/leads", params={"sort": key})
        assert response.status_code == 400
        assert response.json() == {"error": f"Cannot sort all-leads by {key}"}
