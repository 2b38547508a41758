from datetime import date, datetime, timedelta


def _call(lead, **extra):
    payload = {
        "lead_id": lead["lead_id"],
        "account_id": lead["account_id"],
        "telecaller_user_id": 2,
        "call_outcome": "Interested",
    }
    payload.update(extra)
    return payload


def _meeting(lead, **extra):
    payload = {
        "lead_id": lead["lead_id"],
        "account_id": lead["account_id"],
        "meeting_mode": "Online",
        "meeting_date": date.today().isoformat(),
        "meeting_time": "10:30:00",
    }
    payload.update(extra)
    return payload


def test_log_call_updates_lead(client, make_lead):
    lead = make_lead("Acme Corp")
    followup = (datetime.now() + timedelta(days=1)).replace(microsecond=0)
    response = client.post("/api/lead-call-logs", json=_call(
        lead, followup_required=True, followup_datetime=followup.isoformat(), notes="Call back tomorrow"
    ))
    assert response.status_code == 201
    assert response.json()["call_outcome"] == "Interested"

    detail = client.get(f"/api/leads/{lead['lead_id']}").json()
    assert detail["last_contacted_at"] is not None
    assert detail["next_followup_at"] == followup.isoformat()


def test_log_call_missing_fields(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/lead-call-logs", json={"lead_id": lead["lead_id"]})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_log_call_for_missing_lead(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/lead-call-logs", json=_call(lead, lead_id=999))
    assert response.status_code == 404


def test_log_call_can_move_stage(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/lead-call-logs", json=_call(lead, stage_id=5))
    assert response.status_code == 201
    detail = client.get(f"/api/leads/{lead['lead_id']}").json()
    assert (detail["stage_id"], detail["status_id"]) == (5, 9)


def test_log_call_with_mismatched_status_writes_nothing(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/lead-call-logs", json=_call(lead, stage_id=5, status_id=1))
    assert response.status_code == 400
    assert client.get(f"/api/leads/{lead['lead_id']}/call-logs").json() == []


def test_call_history_newest_first(client, make_lead):
    lead = make_lead("Acme Corp")
    client.post("/api/lead-call-logs", json=_call(lead, call_outcome="No Answer"))
    client.post("/api/lead-call-logs", json=_call(lead, call_outcome="Busy"))

    logs = client.get(f"/api/leads/{lead['lead_id']}/call-logs").json()
    assert [l["call_outcome"] for l in logs] == ["Busy", "No Answer"]
    assert logs[0]["telecaller_name"] == "Tara Telecaller"

    assert len(client.get(f"/api/accounts/{lead['account_id']}/call-logs").json()) == 2
    assert len(client.get(f"/api/leads/{lead['lead_id']}/calls").json()) == 2


def test_legacy_call_endpoint_clears_followup(client, make_lead):
    lead = make_lead("Acme Corp")
    followup = (datetime.now() + timedelta(days=2)).replace(microsecond=0)
    client.post("/api/lead-call-logs", json=_call(lead, followup_datetime=followup.isoformat()))

    response = client.post("/api/calls", json=_call(lead, call_outcome="Not Interested"))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["call_log"]["call_outcome"] == "Not Interested"
    assert client.get(f"/api/leads/{lead['lead_id']}").json()["next_followup_at"] is None


def test_followups_for_day(client, make_lead):
    lead = make_lead("Acme Corp")
    tomorrow = date.today() + timedelta(days=1)
    followup = datetime.combine(tomorrow, datetime.min.time()).replace(hour=11)
    client.post("/api/lead-call-logs", json=_call(
        lead, call_outcome="Call Back Later", notes="After lunch", followup_datetime=followup.isoformat()
    ))

    body = client.get("/api/leads/followups", params={"date": tomorrow.isoformat()}).json()
    assert body["todayCount"] == 0
    assert len(body["followups"]) == 1
    item = body["followups"][0]
    assert item["account_name"] == "Acme Corp"
    assert item["last_call_outcome"] == "Call Back Later"
    assert item["last_call_notes"] == "After lunch"


def test_create_meeting_defaults(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/meetings", json=_meeting(lead))
    assert response.status_code == 201
    meeting = response.json()
    assert meeting["meeting_type"] == "Initial Connect"
    assert meeting["meeting_status"] == "Scheduled"
    assert client.get(f"/api/leads/{lead['lead_id']}").json()["last_contacted_at"] is not None


def test_create_meeting_missing_fields(client, make_lead):
    lead = make_lead("Acme Corp")
    response = client.post("/api/meetings", json={"lead_id": lead["lead_id"]})
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required meeting fields"


def test_meeting_status_and_reschedule(client, make_lead):
    lead = make_lead("Acme Corp")
    meeting = client.post("/api/meetings", json=_meeting(lead, meeting_type="Demo")).json()
    url = f"/api/meetings/{meeting['meeting_id']}"

    assert client.patch(f"{url}/status", json={"status": "Postponed"}).status_code == 400
    done = client.patch(f"{url}/status", json={"status": "Completed"}).json()
    assert done["meeting_status"] == "Completed"

    new_day = (date.today() + timedelta(days=3)).isoformat()
    assert client.patch(f"{url}/reschedule", json={"meeting_date": new_day}).status_code == 400
    moved = client.patch(f"{url}/reschedule", json={"meeting_date": new_day, "meeting_time": "15:00:00"}).json()
    assert moved["meeting_date"] == new_day
    assert moved["meeting_time"] == "15:00:00"
    assert moved["meeting_status"] == "Scheduled"


def test_missing_meeting_is_404(client):
    assert client.patch("/api/meetings/999/status", json={"status": "Completed"}).status_code == 404


def test_lead_meetings_and_stats(client, make_lead):
    lead = make_lead("Acme Corp", primary_contact_name="Ravi")
    client.post("/api/meetings", json=_meeting(lead))

    meetings = client.get(f"/api/leads/{lead['lead_id']}/meetings").json()
    assert meetings[0]["account_name"] == "Acme Corp"
    assert meetings[0]["contact_name"] == "Ravi"
    assert len(client.get("/api/meetings").json()) == 1

    stats = client.get("/api/meetings/stats").json()
    assert stats["today"] == 1
    assert stats["yesterday"] == 0
    assert stats["thisWeek"] >= 1
    assert stats["thisMonth"] == 1
