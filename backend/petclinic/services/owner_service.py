"""
PetClinic Backend — Owner Service
===================================

What:  Owner operations, including the owner-with-pets aggregate view.
How:   Owners have no denormalized copies, so every owner write is a plan of
       one row. The aggregate view is rebuilt on every read from the owner
       row and the owner's pet partition, never stored pre-joined.

Read Composition (find_owner_with_pets):
    ┌──────────────────┐
    │ owner by id      │──┐
    └──────────────────┘  │  issued together
    ┌──────────────────┐  ├──────────────────▶ OwnerView
    │ pets by owner id │──┘
    └──────────────────┘
             │ include_visits=True
             ▼
    one visits-by-pet scan per pet, issued together
"""

import asyncio
import logging
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from petclinic.dao import OwnerDao, PetDao, VisitDao
from petclinic.database import StorageSession
from petclinic.domain import Owner, OwnerDraft, OwnerView, PetView
from petclinic.exceptions import NotFoundError
from petclinic.models import OWNER_TABLE
from petclinic.services.base import collect, service_boundary
from petclinic.services.write_plan import WritePlan

logger = logging.getLogger(__name__)


class OwnerService:
    """
    Responsibilities:
        - create_owner(): assign an id, write the owner row
        - update_owner(): overwrite the owner row of an existing owner
        - get_owner() / list_owners(): plain reads
        - find_owner_with_pets(): owner + pets (+ visits) aggregate
        - delete_owner(): remove the owner row; pets are not touched
    """

    def __init__(self, session: StorageSession, id_factory: Callable[[], UUID] = uuid4) -> None:
        self._owners = session.dao(OwnerDao)
        self._pets = session.dao(PetDao)
        self._visits = session.dao(VisitDao)
        self._new_id = id_factory

    @service_boundary
    async def create_owner(self, draft: OwnerDraft) -> Owner:
        owner = Owner(
            id=self._new_id(),
            first_name=draft.first_name,
            last_name=draft.last_name,
            address=draft.address,
            city=draft.city,
            telephone=draft.telephone,
        )
        await self._save(owner, "create_owner")
        logger.info("Owner created: %s", owner.id)
        return owner

    @service_boundary
    async def update_owner(self, owner_id: UUID, draft: OwnerDraft) -> Owner:
        await self.get_owner(owner_id)
        owner = Owner(
            id=owner_id,
            first_name=draft.first_name,
            last_name=draft.last_name,
            address=draft.address,
            city=draft.city,
            telephone=draft.telephone,
        )
        await self._save(owner, "update_owner")
        return owner

    @service_boundary
    async def get_owner(self, owner_id: UUID) -> Owner:
        owner = await self._owners.find_by_id(owner_id)
        if owner is None:
            raise NotFoundError(resource="owner", resource_id=str(owner_id))
        return owner

    @service_boundary
    async def list_owners(self) -> List[Owner]:
        return await collect(self._owners.find_all())

    @service_boundary
    async def find_owner_with_pets(
        self,
        owner_id: UUID,
        include_visits: bool = False,
    ) -> Optional[OwnerView]:
        """
        Assemble an owner with their pets from independent reads.

        Returns None when the owner row does not exist. Pets come from the
        owner's partition copies, so a pet whose partition write failed is
        absent here until the create is retried. Pet order is unspecified.
        """
        owner, pets = await asyncio.gather(
            self._owners.find_by_id(owner_id),
            collect(self._pets.find_all_by_owner_id(owner_id)),
        )
        if owner is None:
            return None

        views = [PetView(pet=pet) for pet in pets]
        if include_visits and views:
            visit_lists = await asyncio.gather(
                *(collect(self._visits.find_all_by_pet_id(view.pet.id)) for view in views)
            )
            for view, visits in zip(views, visit_lists):
                view.visits = visits

        return OwnerView(owner=owner, pets=views)

    @service_boundary
    async def delete_owner(self, owner_id: UUID) -> None:
        """
        Logically delete an owner by removing the owner row.

        The owner's pet partition and the pets' own rows are left in place.
        """
        await self.get_owner(owner_id)
        await (
            WritePlan("delete_owner")
            .add(OWNER_TABLE, {"id": owner_id}, lambda: self._owners.delete(owner_id))
            .execute()
        )
        logger.info("Owner deleted: %s", owner_id)

    async def _save(self, owner: Owner, operation: str) -> None:
        await (
            WritePlan(operation)
            .add(OWNER_TABLE, {"id": owner.id}, lambda: self._owners.save(owner))
            .execute()
        )
