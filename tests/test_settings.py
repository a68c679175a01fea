from settings import load_settings


def test_get_creates_empty_singleton(client, admin_headers, database):
    res = client.get("/api/settings", headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["email_user"] is None
    assert database["settings"].count_documents({}) == 1


def test_save_upserts_single_document(client, admin_headers, database):
    first = {"email_user": "site@example.com", "email_pass": "abcd efgh", "notification_email": "me@example.com"}
    client.post("/api/settings", json=first, headers=admin_headers)
    client.post("/api/settings", json={"notification_email": "other@example.com"}, headers=admin_headers)

    res = client.get("/api/settings", headers=admin_headers).json()

    assert database["settings"].count_documents({}) == 1
    assert res["email_user"] == "site@example.com"
    assert res["notification_email"] == "other@example.com"


def test_settings_are_admin_only(client, employee_headers):
    assert client.get("/api/settings").status_code == 401
    assert client.get("/api/settings", headers=employee_headers).status_code == 403
    assert client.post("/api/settings", json={}, headers=employee_headers).status_code == 403


def test_load_settings_is_idempotent(database):
    first = load_settings(database)
    second = load_settings(database)
    assert first["id"] == second["id"]
