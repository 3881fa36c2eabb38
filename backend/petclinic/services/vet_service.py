"""
PetClinic Backend — Vet Service
=================================

What:  Vet operations and the specialty reference list.
How:   A vet row embeds its specialty names, so listing vets is a single
       scan with no composition step. The specialty reference list is one
       row updated by read-modify-write; two concurrent additions can
       overwrite each other (last write wins), like any other row.
"""

import logging
from typing import Callable, List
from uuid import UUID, uuid4

from petclinic.dao import ReferenceListDao, VetDao
from petclinic.database import StorageSession
from petclinic.domain import DEFAULT_SPECIALTIES, Vet, VetDraft, VetView
from petclinic.exceptions import NotFoundError
from petclinic.models import REFERENCE_LIST_TABLE, VET_TABLE
from petclinic.services.base import collect, service_boundary
from petclinic.services.write_plan import WritePlan

logger = logging.getLogger(__name__)

SPECIALTY_LIST = "vet_specialty"


class VetService:

    def __init__(self, session: StorageSession, id_factory: Callable[[], UUID] = uuid4) -> None:
        self._vets = session.dao(VetDao)
        self._reference_lists = session.dao(ReferenceListDao)
        self._new_id = id_factory

    @service_boundary
    async def create_vet(self, draft: VetDraft) -> Vet:
        vet = Vet(
            id=self._new_id(),
            first_name=draft.first_name,
            last_name=draft.last_name,
            specialties=frozenset(draft.specialties),
        )
        await self._save(vet, "create_vet")
        logger.info("Vet created: %s", vet.id)
        return vet

    @service_boundary
    async def update_vet(self, vet_id: UUID, draft: VetDraft) -> Vet:
        await self.get_vet(vet_id)
        vet = Vet(
            id=vet_id,
            first_name=draft.first_name,
            last_name=draft.last_name,
            specialties=frozenset(draft.specialties),
        )
        await self._save(vet, "update_vet")
        return vet

    @service_boundary
    async def get_vet(self, vet_id: UUID) -> Vet:
        vet = await self._vets.find_by_id(vet_id)
        if vet is None:
            raise NotFoundError(resource="vet", resource_id=str(vet_id))
        return vet

    @service_boundary
    async def list_vets(self) -> List[VetView]:
        return [VetView(vet=vet) for vet in await collect(self._vets.find_all())]

    @service_boundary
    async def delete_vet(self, vet_id: UUID) -> None:
        await self.get_vet(vet_id)
        await (
            WritePlan("delete_vet")
            .add(VET_TABLE, {"id": vet_id}, lambda: self._vets.delete(vet_id))
            .execute()
        )
        logger.info("Vet deleted: %s", vet_id)

    # ── Specialty Reference List ──────────────────────────────────────────

    @service_boundary
    async def list_specialties(self) -> List[str]:
        entries = await self._reference_lists.find(SPECIALTY_LIST)
        return sorted(entries or ())

    @service_boundary
    async def add_specialty(self, name: str) -> List[str]:
        current = await self._reference_lists.find(SPECIALTY_LIST) or frozenset()
        if name in current:
            return sorted(current)
        updated = current | {name}
        await (
            WritePlan("add_specialty")
            .add(
                REFERENCE_LIST_TABLE,
                {"list_name": SPECIALTY_LIST},
                lambda: self._reference_lists.save(SPECIALTY_LIST, updated),
            )
            .execute()
        )
        return sorted(updated)

    @service_boundary
    async def ensure_reference_lists(self) -> None:
        """Seed the specialty list on first run; existing lists are kept."""
        if await self._reference_lists.find(SPECIALTY_LIST) is None:
            await self._reference_lists.save(SPECIALTY_LIST, DEFAULT_SPECIALTIES)
            logger.info("+ Seeded reference list '%s'", SPECIALTY_LIST)

    async def _save(self, vet: Vet, operation: str) -> None:
        await (
            WritePlan(operation)
            .add(VET_TABLE, {"id": vet.id}, lambda: self._vets.save(vet))
            .execute()
        )
