"""Fixtures partagées — DB SQLite temporaire, client HTTP, session admin."""
import pytest
from fastapi.testclient import TestClient

ADMIN = {"email": "admin@jakiglobal.com", "password": "changeme"}


@pytest.fixture
def db(tmp_path):
    """Session SQLAlchemy sur une DB temporaire."""
    from src.database import SessionLocal, init_db
    init_db(f"sqlite:///{tmp_path / 'test.db'}")
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Client de test avec DB SQLite temporaire, uploads isolés, catalogue mock."""
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("PRINTIFY_API_TOKEN", raising=False)
    monkeypatch.delenv("ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

    from src.database import init_db
    init_db(f"sqlite:///{tmp_path / 'test.db'}")
    from src.api.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin(client):
    """Client authentifié (cookie jaki_session posé)."""
    r = client.post("/api/auth/login", json=ADMIN)
    assert r.status_code == 200
    return client
