"""
PetClinic Backend — Pet DAO
=============================

What:  Access patterns over the two pet row families.
How:   Each method touches exactly one row family. Writing both copies of a
       pet is the pet service's job; this DAO never assumes that saving one
       copy updates the other.

    save(pet)                      → petclinic_pet          (upsert by id)
    save_owner_partition(pet)      → petclinic_pet_by_owner (upsert by owner, pet)
    find_by_id(id)                 → petclinic_pet          (single row)
    find_all_by_owner_id(owner_id) → petclinic_pet_by_owner (one partition scan)
    delete(id)                     → petclinic_pet          (single row)
    delete_owner_partition(pet)    → petclinic_pet_by_owner (single row)
"""

from typing import AsyncIterator, Optional
from uuid import UUID

from petclinic.dao.base import BaseDao
from petclinic.domain import Pet
from petclinic.mappers import PetMapper
from petclinic.models import PET_BY_OWNER_TABLE, PET_TABLE


class PetDao(BaseDao[Pet]):

    async def save(self, pet: Pet) -> Pet:
        await self._session.put(PET_TABLE, PetMapper.to_row(pet))
        return pet

    async def save_owner_partition(self, pet: Pet) -> Pet:
        await self._session.put(PET_BY_OWNER_TABLE, PetMapper.to_owner_partition_row(pet))
        return pet

    async def find_by_id(self, pet_id: UUID) -> Optional[Pet]:
        return await self._get(PET_TABLE, {"id": pet_id}, PetMapper.from_row)

    def find_all_by_owner_id(self, owner_id: UUID) -> AsyncIterator[Pet]:
        """Lazy scan of the owner's partition; consumable once."""
        return self._scan(PET_BY_OWNER_TABLE, {"owner_id": owner_id}, PetMapper.from_row)

    async def delete(self, pet_id: UUID) -> None:
        await self._session.delete(PET_TABLE, {"id": pet_id})

    async def delete_owner_partition(self, owner_id: UUID, pet_id: UUID) -> None:
        await self._session.delete(PET_BY_OWNER_TABLE, {"owner_id": owner_id, "pet_id": pet_id})
