from workbooster.cli import main
from workbooster.utils.password import hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "plain-text")
    assert not verify_password("s3cret", "")


def test_login(client):
    response = client.post("/api/login", json={"email": "ADMIN@example.com", "password": "admin-pass"})
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "Admin"
    assert "password" not in body["user"]


def test_login_wrong_password(client):
    response = client.post("/api/login", json={"email": "admin@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_login_inactive_user(client, admin_headers):
    client.put("/api/users/2", json={"status": "Inactive"}, headers=admin_headers)
    response = client.post("/api/login", json={"email": "tara@example.com", "password": "tara-pass"})
    assert response.status_code == 403


def test_me(client, admin_headers):
    response = client.get("/api/me", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "admin@example.com"


def test_me_requires_token(client):
    assert client.get("/api/me").status_code in (401, 403)
    response = client.get("/api/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_users_require_admin(client):
    login = client.post("/api/login", json={"email": "tara@example.com", "password": "tara-pass"}).json()
    headers = {"Authorization": f"Bearer {login['access_token']}"}
    response = client.get("/api/users", headers=headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}


def test_user_crud(client, admin_headers):
    created = client.post("/api/users", headers=admin_headers, json={
        "full_name": "Bala BD",
        "email": "bala@example.com",
        "password": "bala-pass",
        "role": "BD",
    })
    assert created.status_code == 200
    user = created.json()["user"]
    assert user["status"] == "Active"

    duplicate = client.post("/api/users", headers=admin_headers, json={
        "full_name": "Other", "email": "BALA@example.com", "password": "x",
    })
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Email already exists"}

    client.put(f"/api/users/{user['user_id']}", headers=admin_headers, json={"password": "new-pass"})
    login = client.post("/api/login", json={"email": "bala@example.com", "password": "new-pass"})
    assert login.status_code == 200

    assert client.delete(f"/api/users/{user['user_id']}", headers=admin_headers).status_code == 200
    emails = [u["email"] for u in client.get("/api/users", headers=admin_headers).json()]
    assert "bala@example.com" not in emails


def test_invalid_role_rejected(client, admin_headers):
    response = client.post("/api/users", headers=admin_headers, json={
        "full_name": "X", "email": "x@example.com", "password": "x", "role": "Overlord",
    })
    assert response.status_code == 400
    assert response.json()["field"] == "role"


def test_admin_cannot_delete_self(client, admin_headers):
    response = client.delete("/api/users/1", headers=admin_headers)
    assert response.status_code == 400


def test_missing_user_is_404(client, admin_headers):
    assert client.put("/api/users/999", headers=admin_headers, json={"full_name": "X"}).status_code == 404


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert "timestamp" in body


def test_cli_requires_password(monkeypatch):
    monkeypatch.setattr("getpass.getpass", lambda prompt: "")
    assert main(["seed-admin", "--email", "root@example.com"]) == 1
