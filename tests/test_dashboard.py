from datetime import datetime

from workbooster.services.dashboard import period_bounds


def test_period_bounds_week_starts_monday():
    bounds = period_bounds(datetime(2026, 10, 22, 15, 30))  # a Thursday
    assert bounds["today"] == datetime(2026, 10, 22)
    assert bounds["yesterday"] == datetime(2026, 10, 21)
    assert bounds["week"] == datetime(2026, 10, 19)
    assert bounds["month"] == datetime(2026, 10, 1)


def test_dashboard_summary(client, make_lead):
    won = make_lead("Acme", expected_value=1000)
    open_lead = make_lead("Beta", expected_value=250)
    lost = make_lead("Gamma", expected_value=75)
    client.patch(f"/api/leads/{won['lead_id']}/stage", json={"stage_id": 11})
    client.patch(f"/api/leads/{lost['lead_id']}/stage", json={"stage_id": 13})
    client.post("/api/lead-call-logs", json={
        "lead_id": open_lead["lead_id"],
        "account_id": open_lead["account_id"],
        "telecaller_user_id": 2,
        "call_outcome": "Busy",
    })

    summary = client.get("/api/dashboard").json()
    assert summary["totalLeads"] == 3
    assert summary["totalAccounts"] == 3
    assert summary["totalRevenue"] == 1000
    assert summary["expectedPipeline"] == 250
    assert summary["callsToday"] == 1
    assert summary["outcomes"]["busy"] == 1
    assert summary["outcomes"]["interested"] == 0

    by_stage = {s["name"]: s["count"] for s in summary["leadsByStage"]}
    assert by_stage["New Lead"] == 1
    assert by_stage["Closed Won"] == 1
    assert by_stage["Demo"] == 0
    assert len(summary["recentLeads"]) == 3


def test_lead_stats(client, make_lead):
    make_lead("Acme")
    second = make_lead("Beta")
    client.patch(f"/api/leads/{second['lead_id']}/stage", json={"stage_id": 4})

    stats = client.get("/api/leads/stats").json()
    assert stats["today"] == 2
    assert stats["yesterday"] == 0
    assert stats["thisMonth"] == 2

    stage_stats = client.get("/api/leads/stats", params={"stage_ids": "4"}).json()
    assert stage_stats["today"] == 1


def test_user_stats(client, make_lead):
    make_lead("Acme", lead_generated_by=2)
    make_lead("Beta", lead_generated_by=2)
    make_lead("Gamma", lead_generated_by=1)

    stats = client.get("/api/dashboard/user-stats").json()
    assert [s["full_name"] for s in stats] == ["Tara Telecaller", "Asha Admin"]
    assert stats[0]["today"] == 2
    assert stats[0]["callsToday"] == 0
