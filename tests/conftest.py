import mongomock
import pytest
from fastapi.testclient import TestClient

from auth import create_access_token, hash_password
from database import create_document
from main import create_app


@pytest.fixture
def database():
    return mongomock.MongoClient()["portfolio_test"]


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(database, upload_dir):
    app = create_app(database, upload_dir=str(upload_dir))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(database):
    def _make(email="someone@example.com", password="password123", role="employee", is_active=True, name="Someone"):
        _id = create_document(database, "user", {
            "name": name,
            "email": email,
            "password": hash_password(password),
            "role": role,
            "is_active": is_active,
        })
        return _id
    return _make


def bearer(user_id, role):
    return {"Authorization": f"Bearer {create_access_token({'id': user_id, 'role': role})}"}


@pytest.fixture
def admin_headers(make_user):
    return bearer(make_user(email="admin@example.com", role="admin", name="Admin"), "admin")


@pytest.fixture
def employee_headers(make_user):
    return bearer(make_user(email="staff@example.com", role="employee", name="Staff"), "employee")
