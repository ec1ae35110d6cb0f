"""
Test Configuration and Fixtures

This module provides:
- Test environment variables set before any application import
- A throwaway SQLite database per test (WAL, busy timeout, foreign keys)
- Query / command repositories bound to that database
- An event factory for building valid EventEntity objects

Architecture:
- Unit tests (test/**/unit/): mock the repositories with AsyncMock, no database
- Integration tests (test/**/integration/): real SQLAlchemy repositories on SQLite
- API tests (test/**/api/): FastAPI TestClient with overridden DI providers
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are created at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Never reach a real partner service or PostgreSQL from the test suite
    os.environ['PARTNER_BASE_URLS'] = '{}'
    os.environ.setdefault('DATABASE_URL', f'sqlite+aiosqlite:///{test_log_dir / "default.db"}')
    os.environ.setdefault('SQLITE_BUSY_TIMEOUT', '30')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.orm_db_setting import Database, create_db_and_tables  # noqa: E402
from src.service.events.domain.entity.event_entity import EventEntity  # noqa: E402
from src.service.events.domain.enum.rating import Rating  # noqa: E402
from src.service.events.driven_adapter.repo.event_command_repo_impl import (  # noqa: E402
    EventCommandRepoImpl,
)
from src.service.events.driven_adapter.repo.event_query_repo_impl import (  # noqa: E402
    EventQueryRepoImpl,
)


def sqlite_url(directory: Path) -> str:
    return f'sqlite+aiosqlite:///{directory / "events.db"}'


# =============================================================================
# Database fixtures
# =============================================================================
@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    db = Database(db_url=sqlite_url(tmp_path))
    await create_db_and_tables(db)
    yield db
    await db.dispose()


@pytest.fixture
def event_query_repo(database: Database) -> EventQueryRepoImpl:
    return EventQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def event_command_repo(database: Database) -> EventCommandRepoImpl:
    return EventCommandRepoImpl(session_factory=database.session)


# =============================================================================
# Entity factories
# =============================================================================
def build_event(**overrides: Any) -> EventEntity:
    fields: dict[str, Any] = {
        'name': 'Summer Festival',
        'location': 'Riverside Park',
        'organization': 'City Events',
        'rating': Rating.FOUR_STAR,
        'date': datetime(2025, 7, 12, 20, 0, 0),
        'image_url': 'https://example.com/festival.png',
        'capacity': 20,
        'price': Decimal('120.00'),
        'partner_id': 1,
    }
    fields.update(overrides)
    return EventEntity(**fields)


@pytest.fixture
def make_event() -> Callable[..., EventEntity]:
    return build_event
