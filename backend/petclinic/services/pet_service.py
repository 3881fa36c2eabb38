"""
PetClinic Backend — Pet Service
=================================

What:  Pet operations over the two pet row families.
How:   Every pet write is a two-step WritePlan:

    1. petclinic_pet           (id)             primary row
    2. petclinic_pet_by_owner  (owner_id, pet)  owner's partition copy

    Step 2 is issued only after step 1 has been acknowledged. If step 2
    fails the pet is readable by id but missing from the owner's pet list,
    and the caller gets StorageError. Retrying the same request rewrites
    both rows with the same values.

Referential Check:
    create_pet() reads the owner before generating an id or writing
    anything. A missing owner raises NotFoundError and no row is written.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from petclinic.dao import OwnerDao, PetDao
from petclinic.database import StorageSession
from petclinic.domain import Pet, PetDraft, PetType
from petclinic.exceptions import NotFoundError, ValidationError
from petclinic.models import PET_BY_OWNER_TABLE, PET_TABLE
from petclinic.services.base import collect, service_boundary
from petclinic.services.write_plan import WritePlan

logger = logging.getLogger(__name__)


class PetService:

    def __init__(self, session: StorageSession, id_factory: Callable[[], UUID] = uuid4) -> None:
        self._owners = session.dao(OwnerDao)
        self._pets = session.dao(PetDao)
        self._new_id = id_factory

    @service_boundary
    async def create_pet(self, owner_id: UUID, draft: PetDraft, pet_id: Optional[UUID] = None) -> Pet:
        """
        Create a pet for an existing owner.

        `pet_id` is normally left out and generated here. A caller retrying
        a failed create passes the id from the first attempt, so the retry
        rewrites the same two rows instead of creating a second pet.

        Raises:
            NotFoundError: owner_id has no owner row (nothing is written)
            StorageError: a write failed; the primary row may already exist
        """
        owner = await self._owners.find_by_id(owner_id)
        if owner is None:
            raise NotFoundError(resource="owner", resource_id=str(owner_id))
        if pet_id is not None:
            existing = await self._pets.find_by_id(pet_id)
            if existing is not None and existing.owner_id != owner.id:
                raise ValidationError(message="This pet id belongs to another owner", field="id")

        pet = Pet(
            id=pet_id or self._new_id(),
            owner_id=owner.id,
            name=draft.name,
            pet_type=draft.pet_type,
            birth_date=draft.birth_date,
        )
        await self._write_copies(pet, "create_pet")
        logger.info("Pet created: %s for owner %s", pet.id, owner.id)
        return pet

    @service_boundary
    async def update_pet(self, pet_id: UUID, draft: PetDraft) -> Pet:
        """Rewrite both copies of an existing pet. The owner never changes."""
        existing = await self.get_pet(pet_id)
        pet = replace(
            existing,
            name=draft.name,
            pet_type=draft.pet_type,
            birth_date=draft.birth_date,
        )
        await self._write_copies(pet, "update_pet")
        return pet

    @service_boundary
    async def get_pet(self, pet_id: UUID) -> Pet:
        pet = await self._pets.find_by_id(pet_id)
        if pet is None:
            raise NotFoundError(resource="pet", resource_id=str(pet_id))
        return pet

    @service_boundary
    async def list_pets_by_owner(self, owner_id: UUID) -> List[Pet]:
        if await self._owners.find_by_id(owner_id) is None:
            raise NotFoundError(resource="owner", resource_id=str(owner_id))
        return await collect(self._pets.find_all_by_owner_id(owner_id))

    @service_boundary
    async def delete_pet(self, pet_id: UUID) -> None:
        """
        Remove the primary row, then the owner's partition copy.

        The two deletes are independent writes; if the second fails the
        owner's pet list keeps a stale entry until the delete is retried.
        Visits of the pet are not removed.
        """
        pet = await self.get_pet(pet_id)
        await (
            WritePlan("delete_pet")
            .add(PET_TABLE, {"id": pet.id}, lambda: self._pets.delete(pet.id))
            .add(
                PET_BY_OWNER_TABLE,
                {"owner_id": pet.owner_id, "pet_id": pet.id},
                lambda: self._pets.delete_owner_partition(pet.owner_id, pet.id),
            )
            .execute()
        )
        logger.info("Pet deleted: %s", pet.id)

    def list_pet_types(self) -> List[PetType]:
        return sorted(PetType, key=lambda pet_type: pet_type.value)

    async def _write_copies(self, pet: Pet, operation: str) -> None:
        await (
            WritePlan(operation)
            .add(PET_TABLE, {"id": pet.id}, lambda: self._pets.save(pet))
            .add(
                PET_BY_OWNER_TABLE,
                {"owner_id": pet.owner_id, "pet_id": pet.id},
                lambda: self._pets.save_owner_partition(pet),
            )
            .execute()
        )
