import os

# Must be set before the database module creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["ENV"] = "test"

import pytest  # noqa: E402
from datetime import date  # noqa: E402
from unittest.mock import AsyncMock, Mock  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# Import all models to ensure they're registered with SQLModel
from src.api.iuran.models.iuran_sync_execution import IuranSyncExecution  # noqa: E402,F401
from src.api.iuran.services.sync_panel import SyncPanel, panel_registry  # noqa: E402


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def test_session(test_engine):
    """Create a test database session"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def fixed_today():
    """A fixed 'today' so default selections are predictable"""
    return date(2025, 10, 19)


@pytest.fixture
def mock_iuran_service():
    """Test double for the iuran backend"""
    service = Mock()
    service.sync_iuran_data = AsyncMock(
        return_value={"success": True, "message": "Iuran Oktober 2025 dibuat"})
    service.generate_monthly_iuran = AsyncMock(
        return_value={"success": True, "message": "Iuran Maret 2025 dibuat", "created": 42})
    service.generate_iuran_for_year = AsyncMock(
        return_value=[{"month": i, "created": 10} for i in range(1, 13)])
    return service


@pytest.fixture
def panel(mock_iuran_service, fixed_today):
    """A sync panel backed by the mock backend"""
    return SyncPanel(mock_iuran_service, today=lambda: fixed_today)


@pytest.fixture(autouse=True)
def reset_panel_registry():
    panel_registry.clear()
    yield
    panel_registry.clear()
