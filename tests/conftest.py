import pytest
from fastapi.testclient import TestClient

from blogapi.config import TestingSettings
from blogapi.factory import create_app
from tests.helpers import login, register, role_id


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    # Settings must only come from what each test passes in
    for name in (
        "APP_ENV",
        "APP_NAME",
        "DEBUG",
        "DATABASE_URL",
        "JWT_SECRET_KEY",
        "SHOW_METADATA",
        "SHOW_PAGINATION",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def settings(database_url):
    """Testing settings on a throwaway SQLite file, with both envelope flags on."""
    return TestingSettings(
        DATABASE_URL=database_url,
        SHOW_METADATA=True,
        SHOW_PAGINATION=True,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def user_headers(client):
    assert register(client, "alice", "alice@example.com").status_code == 201
    return login(client, "alice@example.com")


@pytest.fixture
def admin_headers(client, user_headers):
    admin_role = role_id(client, user_headers, "admin")
    assert register(client, "root", "root@example.com", role_id=admin_role).status_code == 201
    return login(client, "root@example.com")
