import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import app

TOKEN = "correct-token"


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def settings_env(monkeypatch, data_dir):
    """Point the service at a temp data dir with a known token."""
    monkeypatch.setenv("BEARER_TOKEN", TOKEN)
    monkeypatch.setenv("DATA_DIR", str(data_dir))
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def client(settings_env):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TOKEN}"}


def stored_files(path):
    """Files currently present in the data directory."""
    if not path.exists():
        return []
    return sorted(path.iterdir())
