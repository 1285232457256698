"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database built with the alembic migrations
- Table cleanup between integration tests
- The session-wide TestClient and identity header helpers

Architecture:
- Unit tests (marked `unit`): mocked unit of work, no database
- Integration tests: real app + real database, cleaned before every test
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the logging sinks read these at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


TEST_DB_PATH = (
    Path(tempfile.gettempdir())
    / f'ticket_reservation_test_{os.environ.get("PYTEST_XDIST_WORKER", "master")}.db'
)


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB_PATH}'
    # the HTTP suite needs a gateway that always approves; failures are opted into per test
    os.environ['PAYMENT_GATEWAY_SUCCESS_RATE'] = '1.0'
    os.environ.setdefault('SQLITE_BUSY_TIMEOUT', '30')

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, text  # noqa: E402

from src.platform.constant.path import ALEMBIC_INI  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    _setup_test_database()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # first, so cleanup runs before fixtures that insert rows
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _sync_engine() -> Any:
    return create_engine(f'sqlite:///{TEST_DB_PATH}')


def _setup_test_database() -> None:
    TEST_DB_PATH.unlink(missing_ok=True)
    # env.py reads DATABASE_URL, which already points at TEST_DB_PATH
    command.upgrade(Config(str(ALEMBIC_INI)), 'head')


def _clean_all_tables() -> None:
    import src.service.ticket_reservation.driven_adapter.model  # noqa: F401

    engine = _sync_engine()
    try:
        with engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())
    finally:
        engine.dispose()


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    _clean_all_tables()
    yield


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        engine = _sync_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(text(statement), params or {})
                if fetch:
                    return [dict(row._mapping) for row in result]
                return None
        finally:
            engine.dispose()

    return _execute
