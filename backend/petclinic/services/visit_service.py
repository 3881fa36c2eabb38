"""
PetClinic Backend — Visit Service
===================================

Visits follow the pet layout one level down:

    1. petclinic_visit          (id)              primary row
    2. petclinic_visit_by_pet   (pet_id, visit)   pet's partition copy

create_visit() checks the pet exists before any write; a missing pet is a
NotFoundError with nothing written.
"""

import logging
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from petclinic.dao import PetDao, VisitDao
from petclinic.database import StorageSession
from petclinic.domain import Visit, VisitDraft
from petclinic.exceptions import NotFoundError, ValidationError
from petclinic.models import VISIT_BY_PET_TABLE, VISIT_TABLE
from petclinic.services.base import collect, service_boundary
from petclinic.services.write_plan import WritePlan

logger = logging.getLogger(__name__)


class VisitService:

    def __init__(self, session: StorageSession, id_factory: Callable[[], UUID] = uuid4) -> None:
        self._pets = session.dao(PetDao)
        self._visits = session.dao(VisitDao)
        self._new_id = id_factory

    @service_boundary
    async def create_visit(
        self,
        pet_id: UUID,
        draft: VisitDraft,
        visit_id: Optional[UUID] = None,
    ) -> Visit:
        """Create a visit for an existing pet; `visit_id` lets a retry target the same rows."""
        pet = await self._pets.find_by_id(pet_id)
        if pet is None:
            raise NotFoundError(resource="pet", resource_id=str(pet_id))
        if visit_id is not None:
            existing = await self._visits.find_by_id(visit_id)
            if existing is not None and existing.pet_id != pet.id:
                raise ValidationError(message="This visit id belongs to another pet", field="id")

        visit = Visit(
            id=visit_id or self._new_id(),
            pet_id=pet.id,
            visit_date=draft.visit_date,
            description=draft.description,
        )
        await (
            WritePlan("create_visit")
            .add(VISIT_TABLE, {"id": visit.id}, lambda: self._visits.save(visit))
            .add(
                VISIT_BY_PET_TABLE,
                {"pet_id": visit.pet_id, "visit_id": visit.id},
                lambda: self._visits.save_pet_partition(visit),
            )
            .execute()
        )
        logger.info("Visit created: %s for pet %s", visit.id, pet.id)
        return visit

    @service_boundary
    async def get_visit(self, visit_id: UUID) -> Visit:
        visit = await self._visits.find_by_id(visit_id)
        if visit is None:
            raise NotFoundError(resource="visit", resource_id=str(visit_id))
        return visit

    @service_boundary
    async def list_visits_by_pet(self, pet_id: UUID) -> List[Visit]:
        if await self._pets.find_by_id(pet_id) is None:
            raise NotFoundError(resource="pet", resource_id=str(pet_id))
        return await collect(self._visits.find_all_by_pet_id(pet_id))

    @service_boundary
    async def delete_visit(self, visit_id: UUID) -> None:
        visit = await self.get_visit(visit_id)
        await (
            WritePlan("delete_visit")
            .add(VISIT_TABLE, {"id": visit.id}, lambda: self._visits.delete(visit.id))
            .add(
                VISIT_BY_PET_TABLE,
                {"pet_id": visit.pet_id, "visit_id": visit.id},
                lambda: self._visits.delete_pet_partition(visit.pet_id, visit.id),
            )
            .execute()
        )
        logger.info("Visit deleted: %s", visit.id)
