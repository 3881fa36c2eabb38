"""
PetClinic Backend — Storage Session
=====================================

What:  The process-wide session to the store and the factory that opens it.
How:   `StorageSession` is the contract every DAO is written against: keyed
       single-row get/put/delete plus a partition scan, all asynchronous.
       `SqlStorageSession` implements it on an async SQLAlchemy engine, and
       `open_session()` builds, probes and (optionally) bootstraps one.
Who:   Opened once in the FastAPI lifespan, stored on `app.state`, and
       injected into every DAO. Tests substitute an in-memory session.

Storage Contract:
    - A row is a plain dict of column name → value.
    - Every `put` is an upsert of exactly one row in its own transaction.
      Writing the same row twice leaves one row with the latest values.
    - There is no call that touches two rows atomically. Callers that need
      several rows written issue several independent puts.
    - Every call carries the configured request timeout. A timeout or any
      driver error surfaces as StorageError; nothing is retried here.

Connection Pooling:
    The engine pool is shared by every DAO. No component changes the
    session or its engine after `open_session()` returns.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

from sqlalchemy import Table, and_, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.schema import CreateSchema
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from petclinic.config import Settings, settings
from petclinic.exceptions import StorageError, StoreConnectionError
from petclinic.models import Base, key_columns, partition_columns

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
D = TypeVar("D")
T = TypeVar("T")

# Errors that mean "the store did not answer", as opposed to bad requests.
_TRANSIENT_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class StorageSession(ABC):
    """
    Abstract session to the denormalized store.

    Contract:
        - get(table, key)          → the row with that full key, or None
        - put(table, row)          → upsert one row by its key columns
        - delete(table, key)       → remove one row; missing rows are a no-op
        - scan(table, partition)   → lazy iterator over one partition
                                     (or the whole table when partition is None)
        - dao(DaoClass)            → the DAO of that type bound to this session

    `scan` results are finite and can be consumed once.
    """

    def __init__(self) -> None:
        self._daos: Dict[type, Any] = {}

    @abstractmethod
    async def get(self, table: str, key: Row) -> Optional[Row]:
        ...

    @abstractmethod
    async def put(self, table: str, row: Row) -> None:
        ...

    @abstractmethod
    async def delete(self, table: str, key: Row) -> None:
        ...

    @abstractmethod
    def scan(self, table: str, partition: Optional[Row] = None) -> AsyncIterator[Row]:
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight reachability check used by the health endpoint."""
        ...

    async def close(self) -> None:
        """Release connections. Sessions without resources do nothing."""

    def dao(self, dao_class: Type[D]) -> D:
        """
        Return the DAO of the given type bound to this session.

        Each DAO class is constructed once per session and reused, so every
        caller shares the same stateless instance.
        """
        instance = self._daos.get(dao_class)
        if instance is None:
            instance = dao_class(self)
            self._daos[dao_class] = instance
        return instance


class SqlStorageSession(StorageSession):
    """
    StorageSession backed by an async SQLAlchemy engine.

    Each row family is one table registered on `Base.metadata`. Keys are
    validated against the table's primary key (for get/put/delete) or its
    partition columns (for scan) before any SQL is sent.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        request_timeout: float = 20.0,
        keyspace: Optional[str] = None,
        consistency_level: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._engine = engine
        self.request_timeout = request_timeout
        self.keyspace = keyspace
        self.consistency_level = consistency_level

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    # ── Row Operations ────────────────────────────────────────────────────

    async def get(self, table: str, key: Row) -> Optional[Row]:
        sa_table = self._table(table, "get")
        clause = self._key_clause(sa_table, key, key_columns(sa_table), "get")

        async def fetch() -> Optional[Row]:
            async with self._engine.connect() as conn:
                result = await conn.execute(select(sa_table).where(clause))
                row = result.mappings().first()
                return dict(row) if row is not None else None

        return await self._run(table, "get", fetch)

    async def put(self, table: str, row: Row) -> None:
        sa_table = self._table(table, "put")
        unknown = set(row) - set(sa_table.columns.keys())
        if unknown:
            raise StorageError(
                message="Row has columns the table does not define",
                table=table,
                operation="put",
                context={"columns": sorted(unknown)},
            )
        missing = [name for name in key_columns(sa_table) if row.get(name) is None]
        if missing:
            raise StorageError(
                message="Row is missing key columns",
                table=table,
                operation="put",
                context={"columns": missing},
            )
        statement = self._upsert(sa_table, row)

        async def write() -> None:
            async with self._engine.begin() as conn:
                await conn.execute(statement)

        await self._run(table, "put", write)

    async def delete(self, table: str, key: Row) -> None:
        sa_table = self._table(table, "delete")
        clause = self._key_clause(sa_table, key, key_columns(sa_table), "delete")

        async def remove() -> None:
            async with self._engine.begin() as conn:
                await conn.execute(sa_table.delete().where(clause))

        await self._run(table, "delete", remove)

    async def scan(self, table: str, partition: Optional[Row] = None) -> AsyncIterator[Row]:
        """
        Read one partition (or the whole table) in a single query.

        The query runs when iteration starts, under the request timeout, and
        rows are yielded in clustering order.
        """
        sa_table = self._table(table, "scan")
        statement = select(sa_table)
        if partition is not None:
            statement = statement.where(
                self._key_clause(sa_table, partition, partition_columns(sa_table), "scan")
            )
        statement = statement.order_by(*sa_table.primary_key.columns)

        async def fetch() -> List[Row]:
            async with self._engine.connect() as conn:
                result = await conn.execute(statement)
                return [dict(row) for row in result.mappings().all()]

        rows = await self._run(table, "scan", fetch)
        for row in rows:
            yield row

    async def ping(self) -> bool:
        try:
            await self._run("*", "ping", self._select_one)
        except StorageError:
            return False
        return True

    async def close(self) -> None:
        await self._engine.dispose()

    # ── Schema Bootstrap ──────────────────────────────────────────────────

    async def create_schema(self) -> None:
        """
        Create the keyspace and every row table if they do not exist yet.

        Idempotent: the keyspace is checked with the inspector before it is
        created, and tables are created with `checkfirst`.
        """

        async def create() -> None:
            async with self._engine.begin() as conn:
                if self.keyspace:
                    exists = await conn.run_sync(
                        lambda sync_conn: inspect(sync_conn).has_schema(self.keyspace)
                    )
                    if not exists:
                        await conn.execute(CreateSchema(self.keyspace))
                        logger.info("+ Keyspace '%s' created", self.keyspace)
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)

        await self._run("*", "create_schema", create)
        logger.info("+ Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))

    # ── Internals ─────────────────────────────────────────────────────────

    async def _select_one(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def _run(self, table: str, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(call(), timeout=self.request_timeout)
        except asyncio.TimeoutError as e:
            logger.error("Storage %s on %s timed out after %.1fs", operation, table, self.request_timeout)
            raise StorageError(
                message="The store did not answer in time. Please try again later.",
                table=table,
                operation=operation,
                context={"timeout": self.request_timeout},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Storage %s on %s failed: %s", operation, table, str(e))
            raise StorageError(
                table=table,
                operation=operation,
                context={"error_type": type(e).__name__},
            ) from e

    def _table(self, name: str, operation: str) -> Table:
        sa_table = Base.metadata.tables.get(name)
        if sa_table is None:
            raise StorageError(
                message=f"Unknown table '{name}'",
                table=name,
                operation=operation,
            )
        return sa_table

    def _key_clause(self, sa_table: Table, key: Row, columns: List[str], operation: str):
        if set(key) != set(columns):
            raise StorageError(
                message="Key does not match the table's key columns",
                table=sa_table.name,
                operation=operation,
                context={"expected": columns, "given": sorted(key)},
            )
        return and_(*(sa_table.c[name] == key[name] for name in columns))

    def _upsert(self, sa_table: Table, row: Row):
        dialect = self._engine.dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise StorageError(
                message=f"Upsert is not supported on dialect '{dialect}'",
                table=sa_table.name,
                operation="put",
            )

        keys = key_columns(sa_table)
        statement = insert(sa_table).values(**row)
        updates = {name: statement.excluded[name] for name in row if name not in keys}
        if not updates:
            return statement.on_conflict_do_nothing(index_elements=keys)
        return statement.on_conflict_do_update(index_elements=keys, set_=updates)


# ── Session Factory ───────────────────────────────────────────────────────


def build_engine(config: Settings) -> AsyncEngine:
    """
    Create the async engine from the enumerated settings.

    Server dialects get a sized pool, the isolation level matching the
    configured consistency level, and a schema translate map that places
    every table inside the keyspace.
    """
    if config.is_embedded:
        return create_async_engine(
            config.store_url,
            echo=config.log_level == "DEBUG",
        )
    return create_async_engine(
        config.store_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        isolation_level=config.isolation_level,
        execution_options={"schema_translate_map": {None: config.keyspace}},
        connect_args={"timeout": config.connect_timeout},
        echo=config.log_level == "DEBUG",
    )


async def probe_connection(engine: AsyncEngine, config: Settings) -> None:
    """
    Check that the store answers, retrying with exponential backoff.

    Raises:
        StoreConnectionError: the store never answered within
            `connect_attempts` tries.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(config.connect_attempts),
        wait=wait_exponential_jitter(initial=config.connect_min_wait, max=config.connect_max_wait),
        retry=retry_if_exception_type(_TRANSIENT_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )

    async def select_one() -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    try:
        async for attempt in retrying:
            with attempt:
                await asyncio.wait_for(select_one(), timeout=config.connect_timeout)
    except _TRANSIENT_ERRORS as e:
        raise StoreConnectionError(
            message="Could not connect to the store",
            context={
                "url": engine.url.render_as_string(hide_password=True),
                "attempts": config.connect_attempts,
                "error_type": type(e).__name__,
            },
        ) from e


async def open_session(config: Optional[Settings] = None) -> SqlStorageSession:
    """
    Open the process-wide storage session.

    Steps:
        1. Build the engine from settings
        2. Probe the store (fails with StoreConnectionError)
        3. Create the keyspace and tables when schema_action asks for it

    The engine is disposed again if any step fails.
    """
    config = config or settings
    logger.info("Initializing connection to the store...")
    if config.is_embedded:
        logger.info("+ Embedded store at '%s'", config.store_database)
    else:
        logger.info("+ Contact points %s, keyspace '%s'", config.contact_point_list, config.keyspace)

    engine = build_engine(config)
    session = SqlStorageSession(
        engine,
        request_timeout=config.request_timeout,
        keyspace=None if config.is_embedded else config.keyspace,
        consistency_level=config.consistency_level,
    )
    try:
        await probe_connection(engine, config)
        if config.schema_action == "create_if_not_exists":
            await session.create_schema()
    except StorageError as e:
        await engine.dispose()
        raise StoreConnectionError(
            message="Could not prepare the keyspace",
            context=dict(e.context),
        ) from e
    except StoreConnectionError:
        await engine.dispose()
        raise

    logger.info("[OK] Connection established (consistency %s)", config.consistency_level)
    return session
