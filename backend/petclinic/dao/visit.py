"""
PetClinic Backend — Visit DAO
===============================

Same shape as the pet DAO, over `petclinic_visit` and
`petclinic_visit_by_pet`.
"""

from typing import AsyncIterator, Optional
from uuid import UUID

from petclinic.dao.base import BaseDao
from petclinic.domain import Visit
from petclinic.mappers import VisitMapper
from petclinic.models import VISIT_BY_PET_TABLE, VISIT_TABLE


class VisitDao(BaseDao[Visit]):

    async def save(self, visit: Visit) -> Visit:
        await self._session.put(VISIT_TABLE, VisitMapper.to_row(visit))
        return visit

    async def save_pet_partition(self, visit: Visit) -> Visit:
        await self._session.put(VISIT_BY_PET_TABLE, VisitMapper.to_pet_partition_row(visit))
        return visit

    async def find_by_id(self, visit_id: UUID) -> Optional[Visit]:
        return await self._get(VISIT_TABLE, {"id": visit_id}, VisitMapper.from_row)

    def find_all_by_pet_id(self, pet_id: UUID) -> AsyncIterator[Visit]:
        return self._scan(VISIT_BY_PET_TABLE, {"pet_id": pet_id}, VisitMapper.from_row)

    async def delete(self, visit_id: UUID) -> None:
        await self._session.delete(VISIT_TABLE, {"id": visit_id})

    async def delete_pet_partition(self, pet_id: UUID, visit_id: UUID) -> None:
        await self._session.delete(VISIT_BY_PET_TABLE, {"pet_id": pet_id, "visit_id": visit_id})
