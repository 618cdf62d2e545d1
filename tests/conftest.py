import os
import tempfile
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from src.core.database.base import Base
from src.core.database import create_engine, create_session_factory, get_db
from src.core.notifications import get_booking_notifier
from src.main import app
from src.modules.exports.dependencies import create_export_orchestrator
from src.modules.exports.storage import ExportStorage

# File-backed SQLite: the export fetcher opens one session per collection
# concurrently, which an in-memory database cannot share.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="clinic-tests-")
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"

test_engine = create_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_async_session = create_session_factory(test_engine)


class RecordingNotifier:
    """Stands in for BookingNotifier in API tests; keeps what would be sent."""

    def __init__(self):
        self.sent = []

    async def send_booking_confirmation(self, booking):
        self.sent.append(booking)
        return []


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get test database session."""
    async with test_async_session() as session:
        yield session


@pytest.fixture
def session_factory() -> async_sessionmaker[AsyncSession]:
    """Factory over the test database, for code that opens its own sessions."""
    return test_async_session


@pytest.fixture
def export_storage(tmp_path: Path) -> ExportStorage:
    return ExportStorage(base_path=tmp_path, use_s3=False)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
async def client(
    db_session: AsyncSession,
    export_storage: ExportStorage,
    notifier: RecordingNotifier,
) -> AsyncGenerator[AsyncClient, None]:
    """Get test HTTP client with overridden database, notifier and export wiring."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_booking_notifier] = lambda: notifier
    original_orchestrator = app.state.export_orchestrator
    app.state.export_orchestrator = create_export_orchestrator(
        test_async_session, storage=export_storage
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.state.export_orchestrator = original_orchestrator
    app.dependency_overrides.clear()
