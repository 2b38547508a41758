def test_master_crud(client):
    created = client.post("/api/master/industry_master", json={"industry_name": "Retail"})
    assert created.status_code == 201
    row = created.json()
    assert row["industry_name"] == "Retail"

    updated = client.patch(f"/api/master/industry_master/{row['industry_id']}", json={"industry_name": "Retail & FMCG"})
    assert updated.json()["industry_name"] == "Retail & FMCG"

    assert client.get("/api/master/industry_master").json() == [updated.json()]
    assert client.get("/api/leads/industries").json()[0]["industry_name"] == "Retail & FMCG"

    deleted = client.delete(f"/api/master/industry_master/{row['industry_id']}")
    assert deleted.json() == {"success": True, "message": "Record deleted"}
    assert client.get("/api/master/industry_master").json() == []


def test_unknown_table_rejected(client):
    response = client.get("/api/master/pg_user")
    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported master table"}


def test_unknown_column_rejected(client):
    response = client.post("/api/master/city_master", json={"city_name": "Pune", "drop": "table"})
    assert response.status_code == 400
    assert "drop" in response.json()["error"]


def test_empty_body_rejected(client):
    assert client.post("/api/master/city_master", json={}).status_code == 400


def test_missing_record_is_404(client):
    assert client.patch("/api/master/city_master/999", json={"city_name": "Goa"}).status_code == 404
    assert client.delete("/api/master/city_master/999").status_code == 404


def test_unique_violation_is_400(client):
    client.post("/api/master/lead_source_master", json={"lead_source_name": "Referral"})
    response = client.post("/api/master/lead_source_master", json={"lead_source_name": "Referral"})
    assert response.status_code == 400


def test_users_table_hides_password(client):
    users = client.get("/api/master/users").json()
    assert {u["email"] for u in users} == {"admin@example.com", "tara@example.com"}
    assert all("password" not in u for u in users)

    response = client.patch("/api/master/users/2", json={"password": "x"})
    assert response.status_code == 400


def test_users_table_is_read_only(client, admin_headers):
    response = client.patch("/api/master/users/2", json={"role": "Admin"})
    assert response.status_code == 400
    assert response.json()["error"] == "Use /api/users to change users"
    assert client.patch("/api/master/users/2", json={"role": "Overlord"}).status_code == 400

    response = client.delete("/api/master/users/1")
    assert response.status_code == 400
    assert response.json()["error"] == "Use /api/users to delete users"

    users = {u["email"]: u for u in client.get("/api/users", headers=admin_headers).json()}
    assert users["tara@example.com"]["role"] != "Admin"
    assert "admin@example.com" in users


def test_users_insert_goes_through_users_api(client):
    response = client.post("/api/master/users", json={"full_name": "New", "email": "new@example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Use /api/users to add users"


def test_new_stage_gets_next_id(client):
    response = client.post("/api/master/lead_stages", json={"stage_name": "Nurture"})
    assert response.status_code == 201
    assert response.json()["stage_id"] == 14


def test_products_lookup_lists_active_only(client):
    client.post("/api/master/product_master", json={"product_name": "Payroll", "is_active": True})
    client.post("/api/master/product_master", json={"product_name": "Legacy", "is_active": False})
    assert [p["name"] for p in client.get("/api/leads/products-master").json()] == ["Payroll"]
