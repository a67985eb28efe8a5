"""Root conftest: shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path (WAL + foreign keys on)
    - db_manager patched for routes; the app lifespan never runs under ASGITransport
    - Admin credentials come from the environment set below
"""

import base64
import os

os.environ.setdefault("BASIC_AUTH_USER", "admin")
os.environ.setdefault("BASIC_AUTH_PASS", "s3cret")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from driverlog.infrastructure.database import DatabaseSessionManager  # noqa: E402
import driverlog.infrastructure.database as db_module  # noqa: E402
from driverlog.main import app  # noqa: E402


@pytest.fixture
async def manager(tmp_path):
    """Session manager on a database file whose directory does not exist yet."""
    db_path = tmp_path / "data" / "logs.db"
    mgr = DatabaseSessionManager(f"sqlite+aiosqlite:///{db_path.as_posix()}")
    await mgr.create_schema()
    yield mgr
    await mgr.dispose()


@pytest.fixture
async def test_db(manager):
    async with manager.session() as session:
        yield session


@pytest.fixture
async def client(manager):
    """FastAPI test client with db_manager pointed at the test database."""
    original_manager = db_module.db_manager
    db_module.db_manager = manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def admin_headers():
    token = base64.b64encode(
        f"{os.environ['BASIC_AUTH_USER']}:{os.environ['BASIC_AUTH_PASS']}".encode(),
    ).decode()
    return {"Authorization": f"Basic {token}"}
