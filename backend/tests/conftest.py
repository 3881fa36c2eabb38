"""
PetClinic Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── fake_session: In-memory StorageSession with failure injection
    ├── ids: Deterministic id factory for services
    ├── owner_draft / pet_draft / visit_draft / vet_draft: Sample inputs
    ├── sql_session: Real SqlStorageSession on a temporary SQLite file
    ├── app: Fresh FastAPI instance with fake_session on app.state
    └── test_client: HTTPX AsyncClient bound to app
"""

import asyncio
import os
import tempfile
from collections import defaultdict
from datetime import date
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
os.environ["STORE_DRIVER"] = "sqlite+aiosqlite"
os.environ["STORE_DATABASE"] = os.path.join(
    tempfile.mkdtemp(prefix="petclinic_test_"), "petclinic.db"
)
os.environ["CONNECT_ATTEMPTS"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

from petclinic.config import Settings  # noqa: E402
from petclinic.database import Row, StorageSession, open_session  # noqa: E402
from petclinic.domain import OwnerDraft, PetDraft, PetType, VetDraft, VisitDraft  # noqa: E402
from petclinic.exceptions import StorageError  # noqa: E402
from petclinic.models import Base, key_columns, partition_columns  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Storage Session
# ══════════════════════════════════════════════════════════════════════════

class FakeStorageSession(StorageSession):
    """
    Dict-backed StorageSession with the same key rules as the SQL session.

    Every call yields to the event loop (optionally after `delay` seconds),
    so concurrent callers interleave the way they would against a store.
    Use `fail_on(operation, table)` to make the next calls of that kind fail.
    """

    def __init__(self) -> None:
        super().__init__()
        self.tables: Dict[str, Dict[Tuple, Row]] = defaultdict(dict)
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.delay = 0.0
        self._failures: Dict[Tuple[str, str], Exception] = {}

    # ── Test Controls ─────────────────────────────────────────────────────

    def fail_on(self, operation: str, table: str, error: Optional[Exception] = None) -> None:
        self._failures[(operation, table)] = error or StorageError(
            message="Injected failure", table=table, operation=operation
        )

    def clear_failures(self) -> None:
        self._failures.clear()

    def rows(self, table: str) -> List[Row]:
        return [dict(row) for row in self.tables[table].values()]

    def writes(self) -> List[Tuple[str, str, Dict[str, Any]]]:
        return [call for call in self.calls if call[0] in ("put", "delete")]

    # ── StorageSession ────────────────────────────────────────────────────

    async def get(self, table: str, key: Row) -> Optional[Row]:
        await self._enter("get", table, key)
        row = self.tables[table].get(self._key(table, key))
        return dict(row) if row is not None else None

    async def put(self, table: str, row: Row) -> None:
        columns = key_columns(Base.metadata.tables[table])
        key = {name: row.get(name) for name in columns}
        await self._enter("put", table, key)
        self.tables[table][self._key(table, key)] = dict(row)

    async def delete(self, table: str, key: Row) -> None:
        await self._enter("delete", table, key)
        self.tables[table].pop(self._key(table, key), None)

    async def scan(self, table: str, partition: Optional[Row] = None) -> AsyncIterator[Row]:
        await self._enter("scan", table, partition or {})
        columns = partition_columns(Base.metadata.tables[table])
        if partition is not None and set(partition) != set(columns):
            raise StorageError(message="Bad partition", table=table, operation="scan")
        rows = [
            dict(row)
            for row in self.tables[table].values()
            if partition is None or all(row.get(name) == partition[name] for name in columns)
        ]
        for row in rows:
            yield row

    async def ping(self) -> bool:
        return True

    # ── Internals ─────────────────────────────────────────────────────────

    async def _enter(self, operation: str, table: str, key: Dict[str, Any]) -> None:
        await asyncio.sleep(self.delay)
        self.calls.append((operation, table, dict(key)))
        error = self._failures.get((operation, table))
        if error is not None:
            raise error

    def _key(self, table: str, key: Row) -> Tuple:
        columns = key_columns(Base.metadata.tables[table])
        if set(key) != set(columns):
            raise StorageError(message="Bad key", table=table)
        return tuple(key[name] for name in columns)


class SequentialIds:
    """Deterministic UUIDs: 00000000-0000-0000-0000-000000000001, ...002, ..."""

    def __init__(self) -> None:
        self.issued: List[UUID] = []

    def __call__(self) -> UUID:
        value = UUID(int=len(self.issued) + 1)
        self.issued.append(value)
        return value


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_session() -> FakeStorageSession:
    return FakeStorageSession()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def owner_draft() -> OwnerDraft:
    return OwnerDraft(
        first_name="George",
        last_name="Franklin",
        address="110 W. Liberty St.",
        city="Madison",
        telephone="6085551023",
    )


@pytest.fixture
def pet_draft() -> PetDraft:
    return PetDraft(name="Leo", pet_type=PetType.CAT, birth_date=date(2010, 9, 7))


@pytest.fixture
def visit_draft() -> VisitDraft:
    return VisitDraft(visit_date=date(2013, 1, 1), description="rabies shot")


@pytest.fixture
def vet_draft() -> VetDraft:
    return VetDraft(
        first_name="Linda",
        last_name="Douglas",
        specialties=frozenset({"surgery", "dentistry"}),
    )


@pytest.fixture
def sqlite_settings(tmp_path) -> Settings:
    return Settings(
        store_driver="sqlite+aiosqlite",
        store_database=str(tmp_path / "store.db"),
        schema_action="create_if_not_exists",
        request_timeout=5,
        connect_timeout=5,
        connect_attempts=1,
    )


@pytest_asyncio.fixture
async def sql_session(sqlite_settings):
    """A real SqlStorageSession over a fresh SQLite file, closed after the test."""
    session = await open_session(sqlite_settings)
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def app(fake_session):
    """
    A fresh app instance bound to the in-memory session.

    The ASGI transport does not run the lifespan, so the fake session is
    placed on app.state directly and no store connection is attempted.
    """
    from petclinic.main import create_app

    application = create_app()
    application.state.storage_session = fake_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """HTTPX AsyncClient talking to the `app` fixture."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
