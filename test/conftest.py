"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- In-memory seating store and unit of work factory
- Participant directory with a few known passengers

Architecture:
- Unit tests (test/**/unit/): mocked repositories, see test_helpers.py
- Integration tests (test/**/integration/): in-memory store, or SQLAlchemy on sqlite+aiosqlite
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['SEATING_STORE_BACKEND'] = 'memory'
    os.environ.setdefault('DEBUG', 'true')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from datetime import datetime, timedelta, timezone  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from uuid_utils.compat import uuid7  # noqa: E402

from src.platform.database.unit_of_work import SeatingUnitOfWorkFactory  # noqa: E402
from src.service.seating.driven_adapter.memory.in_memory_seating_store import (  # noqa: E402
    InMemorySeatingStore,
)
from src.service.seating.driven_adapter.memory.static_participant_directory import (  # noqa: E402
    StaticParticipantDirectory,
)


@pytest.fixture
def memory_store() -> InMemorySeatingStore:
    return InMemorySeatingStore()


@pytest.fixture
def uow_factory(memory_store: InMemorySeatingStore) -> SeatingUnitOfWorkFactory:
    return memory_store.unit_of_work


@pytest.fixture
def trip_id() -> UUID:
    return uuid7()


@pytest.fixture
def participant_a() -> UUID:
    return uuid7()


@pytest.fixture
def participant_b() -> UUID:
    return uuid7()


@pytest.fixture
def participant_directory(participant_a: UUID, participant_b: UUID) -> StaticParticipantDirectory:
    return StaticParticipantDirectory({participant_a: 'Rossi Mario', participant_b: 'Bianchi Anna'})


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def one_week() -> timedelta:
    return timedelta(days=7)
