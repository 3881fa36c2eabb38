"""
PetClinic Backend — Vet & Reference List DAOs
===============================================

Vets are fully denormalized: the row already carries its specialties, so
listing vets is one scan with no follow-up reads.
"""

from typing import AsyncIterator, FrozenSet, Iterable, Optional
from uuid import UUID

from petclinic.dao.base import BaseDao
from petclinic.domain import Vet
from petclinic.mappers import ReferenceListMapper, VetMapper
from petclinic.models import REFERENCE_LIST_TABLE, VET_TABLE


class VetDao(BaseDao[Vet]):

    async def save(self, vet: Vet) -> Vet:
        await self._session.put(VET_TABLE, VetMapper.to_row(vet))
        return vet

    async def find_by_id(self, vet_id: UUID) -> Optional[Vet]:
        return await self._get(VET_TABLE, {"id": vet_id}, VetMapper.from_row)

    def find_all(self) -> AsyncIterator[Vet]:
        return self._scan(VET_TABLE, None, VetMapper.from_row)

    async def delete(self, vet_id: UUID) -> None:
        await self._session.delete(VET_TABLE, {"id": vet_id})


class ReferenceListDao(BaseDao[FrozenSet[str]]):

    async def find(self, list_name: str) -> Optional[FrozenSet[str]]:
        return await self._get(
            REFERENCE_LIST_TABLE, {"list_name": list_name}, ReferenceListMapper.from_row
        )

    async def save(self, list_name: str, entries: Iterable[str]) -> FrozenSet[str]:
        row = ReferenceListMapper.to_row(list_name, entries)
        await self._session.put(REFERENCE_LIST_TABLE, row)
        return frozenset(row["entries"])
