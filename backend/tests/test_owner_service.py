"""
PetClinic Backend — Owner Service Unit Tests
==============================================

What:  Tests for owner writes and the owner-with-pets aggregate view.
How:   Services run over the in-memory session; ids come from a
       deterministic factory.

What we test:
    ✅ The aggregate is rebuilt from the owner row plus the pet partition
    ✅ A missing owner yields None, not an empty aggregate
    ✅ Visits are attached only when asked for
    ✅ Pets whose partition copy is missing are not shown
    ✅ Concurrent updates of one owner: last write wins, no merge
    ✅ Deleting an owner leaves their pets in place
"""

import asyncio
from uuid import uuid4

import pytest

from petclinic.domain import OwnerDraft, PetDraft, PetType
from petclinic.exceptions import NotFoundError, StorageError
from petclinic.models import OWNER_TABLE, PET_BY_OWNER_TABLE, PET_TABLE
from petclinic.services import OwnerService, PetService, VisitService


class TestCreateAndRead:

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_writes_one_row(self, fake_session, ids, owner_draft):
        service = OwnerService(fake_session, id_factory=ids)

        owner = await service.create_owner(owner_draft)

        assert owner.id == ids.issued[0]
        assert owner.last_name == "Franklin"
        assert fake_session.writes() == [("put", OWNER_TABLE, {"id": owner.id})]
        assert await service.get_owner(owner.id) == owner

    @pytest.mark.asyncio
    async def test_get_missing_owner(self, fake_session):
        with pytest.raises(NotFoundError) as exc_info:
            await OwnerService(fake_session).get_owner(uuid4())
        assert exc_info.value.resource == "owner"

    @pytest.mark.asyncio
    async def test_list_owners(self, fake_session, owner_draft):
        service = OwnerService(fake_session)
        first = await service.create_owner(owner_draft)
        second = await service.create_owner(owner_draft)

        owners = await service.list_owners()

        assert {owner.id for owner in owners} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, fake_session, owner_draft):
        service = OwnerService(fake_session)
        owner = await service.create_owner(owner_draft)

        updated = await service.update_owner(
            owner.id,
            OwnerDraft(
                first_name="George",
                last_name="Franklin",
                address="1 Main St.",
                city="Verona",
                telephone="6085550000",
            ),
        )

        assert updated.id == owner.id
        assert (await service.get_owner(owner.id)).city == "Verona"

    @pytest.mark.asyncio
    async def test_update_missing_owner_writes_nothing(self, fake_session, owner_draft):
        with pytest.raises(NotFoundError):
            await OwnerService(fake_session).update_owner(uuid4(), owner_draft)
        assert fake_session.writes() == []


class TestOwnerWithPets:

    @pytest.mark.asyncio
    async def test_two_pets(self, fake_session, owner_draft, pet_draft):
        owners = OwnerService(fake_session)
        pets = PetService(fake_session)
        owner = await owners.create_owner(owner_draft)
        leo = await pets.create_pet(owner.id, pet_draft)
        basil = await pets.create_pet(
            owner.id, PetDraft(name="Basil", pet_type=PetType.HAMSTER, birth_date=pet_draft.birth_date)
        )

        view = await owners.find_owner_with_pets(owner.id)

        assert view.owner == owner
        assert view.pet_ids() == {leo.id, basil.id}
        assert all(pet_view.visits == [] for pet_view in view.pets)

    @pytest.mark.asyncio
    async def test_missing_owner_returns_none(self, fake_session):
        assert await OwnerService(fake_session).find_owner_with_pets(uuid4()) is None

    @pytest.mark.asyncio
    async def test_owner_without_pets(self, fake_session, owner_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)

        view = await owners.find_owner_with_pets(owner.id, include_visits=True)

        assert view.pets == []

    @pytest.mark.asyncio
    async def test_include_visits(self, fake_session, owner_draft, pet_draft, visit_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)
        pet = await PetService(fake_session).create_pet(owner.id, pet_draft)
        visit = await VisitService(fake_session).create_visit(pet.id, visit_draft)

        without = await owners.find_owner_with_pets(owner.id)
        with_visits = await owners.find_owner_with_pets(owner.id, include_visits=True)

        assert without.pets[0].visits == []
        assert with_visits.pets[0].visits == [visit]

    @pytest.mark.asyncio
    async def test_pet_missing_from_partition_is_not_shown(self, fake_session, owner_draft, pet_draft):
        owners = OwnerService(fake_session)
        pets = PetService(fake_session)
        owner = await owners.create_owner(owner_draft)
        fake_session.fail_on("put", PET_BY_OWNER_TABLE)

        with pytest.raises(StorageError):
            await pets.create_pet(owner.id, pet_draft)

        assert len(fake_session.rows(PET_TABLE)) == 1
        view = await owners.find_owner_with_pets(owner.id)
        assert view.pets == []

    @pytest.mark.asyncio
    async def test_owner_and_pets_are_read_concurrently(self, fake_session, owner_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)
        fake_session.calls.clear()
        fake_session.delay = 0.05

        started = asyncio.get_running_loop().time()
        await owners.find_owner_with_pets(owner.id)
        elapsed = asyncio.get_running_loop().time() - started

        assert [call[0] for call in fake_session.calls] == ["get", "scan"]
        assert elapsed < 0.09

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self, fake_session, owner_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)
        fake_session.fail_on("scan", PET_BY_OWNER_TABLE)

        with pytest.raises(StorageError):
            await owners.find_owner_with_pets(owner.id)


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_updates_last_write_wins(self, fake_session, owner_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)

        def draft(city):
            return OwnerDraft(
                first_name=owner_draft.first_name,
                last_name=owner_draft.last_name,
                address=owner_draft.address,
                city=city,
                telephone=owner_draft.telephone,
            )

        await asyncio.gather(
            owners.update_owner(owner.id, draft("Monona")),
            owners.update_owner(owner.id, draft("Verona")),
        )

        stored = await owners.get_owner(owner.id)
        puts = [call for call in fake_session.writes() if call[0] == "put"]
        assert len(fake_session.rows(OWNER_TABLE)) == 1
        assert stored.city in {"Monona", "Verona"}
        assert len(puts) == 3


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_keeps_pets(self, fake_session, owner_draft, pet_draft):
        owners = OwnerService(fake_session)
        owner = await owners.create_owner(owner_draft)
        pet = await PetService(fake_session).create_pet(owner.id, pet_draft)

        await owners.delete_owner(owner.id)

        assert fake_session.rows(OWNER_TABLE) == []
        assert await owners.find_owner_with_pets(owner.id) is None
        assert await PetService(fake_session).get_pet(pet.id) == pet
        assert len(fake_session.rows(PET_BY_OWNER_TABLE)) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_owner(self, fake_session):
        with pytest.raises(NotFoundError):
            await OwnerService(fake_session).delete_owner(uuid4())
