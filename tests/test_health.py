from fastapi.testclient import TestClient

from main import create_app


def test_root_banner(client):
    assert client.get("/").json() == {"status": "ok", "service": "portfolio-api"}


def test_database_check_lists_collections(client, admin_headers):
    client.post("/api/categories", json={"name": "Web"}, headers=admin_headers)

    body = client.get("/test").json()

    assert body["database"] == "connected"
    assert "category" in body["collections"]


def test_database_check_without_store(tmp_path):
    with TestClient(create_app(None, upload_dir=str(tmp_path / "uploads"))) as c:
        body = c.get("/test").json()
        services = c.get("/api/services")

    assert body == {"backend": "running", "database": "not-available", "collections": []}
    assert services.status_code == 500
    assert services.json() == {"message": "Database not available"}
