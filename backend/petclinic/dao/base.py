"""
PetClinic Backend — DAO Base
==============================

What:  Shared plumbing for the per-entity data-access objects.
How:   A DAO holds the injected StorageSession and nothing else. Every
       method issues exactly one storage call (one row, or one partition
       scan); none of them filters rows in Python.
"""

from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

from petclinic.database import Row, StorageSession

T = TypeVar("T")


class BaseDao(Generic[T]):

    def __init__(self, session: StorageSession) -> None:
        self._session = session

    async def _get(self, table: str, key: Row, from_row: Callable[[Row], T]) -> Optional[T]:
        row = await self._session.get(table, key)
        return from_row(row) if row is not None else None

    async def _scan(
        self,
        table: str,
        partition: Optional[Row],
        from_row: Callable[[Row], T],
    ) -> AsyncIterator[T]:
        async for row in self._session.scan(table, partition):
            yield from_row(row)
