import pytest
from fastapi.testclient import TestClient

from mockapi.core.config import Settings
from mockapi.main import create_app
from mockapi.storage.file import FileStorage

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret-pass"
JWT_SECRET = "test-signing-secret"


def make_config(tmp_path, **overrides) -> Settings:
    values = {
        "ADMIN_USERNAME": ADMIN_USER,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "JWT_SECRET": JWT_SECRET,
        "DATA_PATH": "",
        "DATABASE_URL": "",
        "STATIC_DIR": str(tmp_path / "public"),
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def storage():
    return FileStorage()


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)


@pytest.fixture
def client(config, storage):
    app = create_app(config=config, storage=storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/admin/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['data']['token']}"}
