"""
PetClinic Backend — Owner DAO
===============================

Access patterns on `petclinic_owner`:
    save(owner)          upsert by id
    find_by_id(id)       single-row read
    find_all()           full scan, for listing
    delete(id)           single-row delete
"""

from typing import AsyncIterator, Optional
from uuid import UUID

from petclinic.dao.base import BaseDao
from petclinic.domain import Owner
from petclinic.mappers import OwnerMapper
from petclinic.models import OWNER_TABLE


class OwnerDao(BaseDao[Owner]):

    async def save(self, owner: Owner) -> Owner:
        await self._session.put(OWNER_TABLE, OwnerMapper.to_row(owner))
        return owner

    async def find_by_id(self, owner_id: UUID) -> Optional[Owner]:
        return await self._get(OWNER_TABLE, {"id": owner_id}, OwnerMapper.from_row)

    def find_all(self) -> AsyncIterator[Owner]:
        return self._scan(OWNER_TABLE, None, OwnerMapper.from_row)

    async def delete(self, owner_id: UUID) -> None:
        await self._session.delete(OWNER_TABLE, {"id": owner_id})
