NEW_USER = {"name": "Editor", "email": "Editor@Example.com", "password": "secret99", "role": "employee"}


def test_user_management_is_admin_only(client, employee_headers):
    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users", headers=employee_headers).status_code == 403
    assert client.post("/api/users", json=NEW_USER, headers=employee_headers).status_code == 403
    assert client.delete("/api/users/650000000000000000000000", headers=employee_headers).status_code == 403


def test_admin_creates_user_without_exposing_password(client, admin_headers):
    res = client.post("/api/users", json=NEW_USER, headers=admin_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "editor@example.com"
    assert body["is_active"] is True
    assert "password" not in body
    assert all("password" not in u for u in client.get("/api/users", headers=admin_headers).json())


def test_created_user_can_log_in(client, admin_headers):
    client.post("/api/users", json=NEW_USER, headers=admin_headers)
    res = client.post("/api/auth/login", json={"email": "editor@example.com", "password": "secret99"})
    assert res.status_code == 200
    assert res.json()["user"]["role"] == "employee"


def test_duplicate_email_is_rejected(client, admin_headers):
    client.post("/api/users", json=NEW_USER, headers=admin_headers)
    res = client.post("/api/users", json=dict(NEW_USER, email="editor@example.com"), headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "User already exists"


def test_invalid_role_is_rejected(client, admin_headers):
    res = client.post("/api/users", json=dict(NEW_USER, role="owner"), headers=admin_headers)
    assert res.status_code == 400


def test_update_without_password_keeps_it(client, admin_headers):
    user_id = client.post("/api/users", json=NEW_USER, headers=admin_headers).json()["id"]

    res = client.put(f"/api/users/{user_id}", json={"name": "Chief Editor", "role": "admin"}, headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["role"] == "admin"
    login = client.post("/api/auth/login", json={"email": "editor@example.com", "password": "secret99"})
    assert login.status_code == 200


def test_update_password_is_rehashed(client, admin_headers, database):
    user_id = client.post("/api/users", json=NEW_USER, headers=admin_headers).json()["id"]

    client.put(f"/api/users/{user_id}", json={"password": "newsecret"}, headers=admin_headers)

    stored = database["user"].find_one({"email": "editor@example.com"})
    assert stored["password"] != "newsecret"
    assert client.post("/api/auth/login", json={"email": "editor@example.com", "password": "newsecret"}).status_code == 200


def test_update_to_taken_email_is_rejected(client, admin_headers):
    user_id = client.post("/api/users", json=NEW_USER, headers=admin_headers).json()["id"]
    res = client.put(f"/api/users/{user_id}", json={"email": "admin@example.com"}, headers=admin_headers)
    assert res.status_code == 400


def test_delete_user(client, admin_headers):
    user_id = client.post("/api/users", json=NEW_USER, headers=admin_headers).json()["id"]
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/users/{user_id}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 404


def _own_id(client, headers):
    return client.get("/api/auth/me", headers=headers).json()["id"]


def test_admin_cannot_delete_own_account(client, admin_headers):
    own_id = _own_id(client, admin_headers)
    res = client.delete(f"/api/users/{own_id}", headers=admin_headers)
    assert res.status_code == 400
    assert client.get(f"/api/users/{own_id}", headers=admin_headers).status_code == 200


def test_admin_cannot_demote_or_deactivate_self(client, admin_headers):
    own_id = _own_id(client, admin_headers)
    assert client.put(f"/api/users/{own_id}", json={"role": "employee"}, headers=admin_headers).status_code == 400
    assert client.put(f"/api/users/{own_id}", json={"is_active": False}, headers=admin_headers).status_code == 400
    assert client.get("/api/users", headers=admin_headers).status_code == 200


def test_admin_can_rename_self(client, admin_headers):
    own_id = _own_id(client, admin_headers)
    res = client.put(f"/api/users/{own_id}", json={"name": "Head Admin", "role": "admin"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Head Admin"
