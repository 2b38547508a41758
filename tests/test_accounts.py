def _create_account(client, name, **extra):
    response = client.post("/api/accounts", json={"account_name": name, **extra})
    assert response.status_code == 200, response.text
    return response.json()["account"]


def test_create_account_defaults(client):
    account = _create_account(client, "  Acme Corp  ", industry="Retail")
    assert account["account_name"] == "Acme Corp"
    assert account["account_status"] == "Prospect"
    assert account["industry"] == "Retail"


def test_duplicate_account_name_rejected(client):
    _create_account(client, "Acme Corp")
    response = client.post("/api/accounts", json={"account_name": "acme corp"})
    assert response.status_code == 400
    assert response.json() == {"error": "Account already exists"}
    assert len(client.get("/api/accounts").json()) == 1


def test_blank_account_name_rejected(client):
    response = client.post("/api/accounts", json={"account_name": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "Account name is required"


def test_invalid_account_status_is_a_validation_error(client):
    response = client.post("/api/accounts", json={"account_name": "Acme", "account_status": "Gone"})
    assert response.status_code == 400
    assert response.json()["field"] == "account_status"


def test_check_duplicate(client):
    _create_account(client, "Acme Corp", company_website="https://acme.com")
    body = client.get("/api/accounts/check-duplicate", params={
        "account_name": "ACME CORP",
        "company_website": "https://acme.com",
    }).json()
    assert body == {
        "account_name_exists": True,
        "company_website_exists": True,
        "existing_account_name": "Acme Corp",
        "existing_website_account": "Acme Corp",
    }


def test_check_duplicate_excludes_own_account(client):
    account = _create_account(client, "Acme Corp")
    body = client.get("/api/accounts/check-duplicate", params={
        "account_name": "Acme Corp",
        "exclude_account_id": account["account_id"],
    }).json()
    assert body["account_name_exists"] is False


def test_update_account(client):
    account = _create_account(client, "Acme Corp")
    response = client.put(f"/api/accounts/{account['account_id']}", json={"industry": "Logistics"})
    assert response.status_code == 200
    updated = response.json()["account"]
    assert updated["industry"] == "Logistics"
    assert updated["account_name"] == "Acme Corp"


def test_update_account_to_existing_name_rejected(client):
    _create_account(client, "Acme Corp")
    other = _create_account(client, "Beta Ltd")
    response = client.put(f"/api/accounts/{other['account_id']}", json={"account_name": "ACME CORP"})
    assert response.status_code == 400


def test_update_missing_account_is_404(client):
    response = client.put("/api/accounts/999", json={"industry": "Logistics"})
    assert response.status_code == 404
    assert response.json() == {"error": "Account not found"}


def test_delete_account_with_leads_blocked(client, make_lead):
    created = make_lead("Acme Corp")
    response = client.delete(f"/api/accounts/{created['account_id']}")
    assert response.status_code == 400
    assert response.json()["error"] == "Cannot delete account with existing leads"
    names = [a["account_name"] for a in client.get("/api/accounts").json()]
    assert names == ["Acme Corp"]


def test_delete_account_without_leads(client):
    account = _create_account(client, "Acme Corp")
    response = client.delete(f"/api/accounts/{account['account_id']}")
    assert response.status_code == 200
    assert client.get("/api/accounts").json() == []


def test_account_list_shows_latest_lead_stage(client, make_lead):
    created = make_lead("Acme Corp")
    client.patch(f"/api/leads/{created['lead_id']}/stage", json={"stage_id": 4})
    accounts = client.get("/api/accounts").json()
    assert accounts[0]["lead_id"] == created["lead_id"]
    assert accounts[0]["stage_name"] == "Telecalling"


def test_account_contacts_crud(client):
    account = _create_account(client, "Acme Corp")
    base = f"/api/accounts/{account['account_id']}/contacts"

    contact = client.post(base, json={"name": "Ravi", "role": "CTO"}).json()["contact"]
    assert contact["account_id"] == account["account_id"]

    updated = client.put(f"{base}/{contact['id']}", json={"name": "Ravi K", "role": "CTO"}).json()["contact"]
    assert updated["name"] == "Ravi K"

    assert [c["name"] for c in client.get(base).json()] == ["Ravi K"]
    assert client.delete(f"{base}/{contact['id']}").json()["success"] is True
    assert client.get(base).json() == []


def test_contact_of_other_account_not_found(client):
    first = _create_account(client, "Acme Corp")
    second = _create_account(client, "Beta Ltd")
    contact = client.post(f"/api/accounts/{first['account_id']}/contacts", json={"name": "Ravi"}).json()["contact"]
    response = client.delete(f"/api/accounts/{second['account_id']}/contacts/{contact['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Contact not found"}


def test_contact_for_missing_account_is_404(client):
    response = client.post("/api/accounts/999/contacts", json={"name": "Ravi"})
    assert response.status_code == 404


def test_account_full_view(client):
    account = _create_account(client, "Acme Corp")
    account_id = account["account_id"]
    client.post(f"/api/accounts/{account_id}/line-of-business", json={"business_type": "Retail"})
    client.post(f"/api/accounts/{account_id}/use-cases", json={"use_case_title": "Billing"})
    department = client.post(
        f"/api/accounts/{account_id}/departments", json={"department_name": "Finance"}
    ).json()["department"]
    point = client.post(
        f"/api/departments/{department['id']}/pain-points", json={"pain_point": "Manual reconciliation"}
    ).json()["painPoint"]
    assert point["severity"] == "Medium"

    full = client.get(f"/api/accounts/{account_id}/full").json()
    assert full["account_name"] == "Acme Corp"
    assert [l["business_type"] for l in full["lineOfBusiness"]] == ["Retail"]
    assert full["useCases"][0]["status"] == "Identified"
    assert full["departments"][0]["department_name"] == "Finance"
    assert full["painPoints"][0]["department_name"] == "Finance"


def test_deleting_department_removes_pain_points(client):
    account = _create_account(client, "Acme Corp")
    department = client.post(
        f"/api/accounts/{account['account_id']}/departments", json={"department_name": "Finance"}
    ).json()["department"]
    client.post(f"/api/departments/{department['id']}/pain-points", json={"pain_point": "Slow audits"})

    response = client.delete(f"/api/accounts/{account['account_id']}/departments/{department['id']}")
    assert response.status_code == 200
    assert client.get(f"/api/departments/{department['id']}/pain-points").json() == []
