"""
PetClinic Backend — API Route Tests
=====================================

What:  End-to-end HTTP tests through the FastAPI app over the in-memory session.
How:   Uses the `test_client` fixture (httpx AsyncClient on ASGITransport).

What we test:
    ✅ CRUD status codes and Location headers
    ✅ Owner detail includes pets and visits
    ✅ Error kinds map to distinct statuses and codes (400/404/500/503)
    ✅ Health check reflects store availability
"""

from uuid import uuid4

import pytest

from petclinic.models import OWNER_TABLE, PET_BY_OWNER_TABLE, PET_TABLE
from petclinic.routes import API_PREFIX

OWNER_BODY = {
    "first_name": "Eduardo",
    "last_name": "Rodriquez",
    "address": "2693 Commerce St.",
    "city": "McFarland",
    "telephone": "6085558763",
}
PET_BODY = {"name": "Rosy", "pet_type": "dog", "birth_date": "2011-04-17"}


async def create_owner(client):
    response = await client.post(f"{API_PREFIX}/owners", json=OWNER_BODY)
    assert response.status_code == 201
    return response.json()


class TestOwnerRoutes:

    @pytest.mark.asyncio
    async def test_create_owner(self, test_client):
        response = await test_client.post(f"{API_PREFIX}/owners", json=OWNER_BODY)

        assert response.status_code == 201
        body = response.json()
        assert body["last_name"] == "Rodriquez"
        assert body["pets"] == []
        assert response.headers["location"] == f"{API_PREFIX}/owners/{body['id']}"
        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_owner_detail_with_pets_and_visits(self, test_client):
        owner = await create_owner(test_client)
        pet = (await test_client.post(f"{API_PREFIX}/owners/{owner['id']}/pets", json=PET_BODY)).json()
        visit_response = await test_client.post(
            f"{API_PREFIX}/pets/{pet['id']}/visits",
            json={"visit_date": "2013-01-01", "description": "rabies shot"},
        )
        assert visit_response.status_code == 201

        response = await test_client.get(f"{API_PREFIX}/owners/{owner['id']}")

        assert response.status_code == 200
        pets = response.json()["pets"]
        assert [found["name"] for found in pets] == ["Rosy"]
        assert pets[0]["type"] == {"id": "dog", "name": "dog"}
        assert [visit["description"] for visit in pets[0]["visits"]] == ["rabies shot"]

    @pytest.mark.asyncio
    async def test_unknown_owner(self, test_client):
        response = await test_client.get(f"{API_PREFIX}/owners/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_and_delete(self, test_client):
        owner = await create_owner(test_client)

        updated = await test_client.put(
            f"{API_PREFIX}/owners/{owner['id']}", json=dict(OWNER_BODY, city="Madison")
        )
        deleted = await test_client.delete(f"{API_PREFIX}/owners/{owner['id']}")
        listed = await test_client.get(f"{API_PREFIX}/owners")

        assert updated.json()["city"] == "Madison"
        assert deleted.status_code == 204
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_invalid_body(self, test_client):
        response = await test_client.post(f"{API_PREFIX}/owners", json={"first_name": ""})
        assert response.status_code == 422


class TestPetRoutes:

    @pytest.mark.asyncio
    async def test_pet_for_unknown_owner(self, test_client, fake_session):
        response = await test_client.post(f"{API_PREFIX}/owners/{uuid4()}/pets", json=PET_BODY)

        assert response.status_code == 404
        assert fake_session.rows(PET_TABLE) == []

    @pytest.mark.asyncio
    async def test_unknown_pet_type_is_rejected(self, test_client):
        owner = await create_owner(test_client)
        response = await test_client.post(
            f"{API_PREFIX}/owners/{owner['id']}/pets", json=dict(PET_BODY, pet_type="dragon")
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_partial_write_then_retry(self, test_client, fake_session):
        owner = await create_owner(test_client)
        pet_id = str(uuid4())
        body = dict(PET_BODY, id=pet_id)
        fake_session.fail_on("put", PET_BY_OWNER_TABLE)

        failed = await test_client.post(f"{API_PREFIX}/owners/{owner['id']}/pets", json=body)

        assert failed.status_code == 503
        assert failed.json()["error"] == "storage_error"
        assert failed.headers["retry-after"] == "1"
        assert (await test_client.get(f"{API_PREFIX}/pets/{pet_id}")).status_code == 200

        fake_session.clear_failures()
        retried = await test_client.post(f"{API_PREFIX}/owners/{owner['id']}/pets", json=body)
        listed = await test_client.get(f"{API_PREFIX}/owners/{owner['id']}/pets")

        assert retried.status_code == 201
        assert [pet["id"] for pet in listed.json()] == [pet_id]

    @pytest.mark.asyncio
    async def test_reused_id_of_another_owners_pet(self, test_client):
        first = await create_owner(test_client)
        second = await create_owner(test_client)
        pet = (await test_client.post(f"{API_PREFIX}/owners/{first['id']}/pets", json=PET_BODY)).json()

        response = await test_client.post(
            f"{API_PREFIX}/owners/{second['id']}/pets", json=dict(PET_BODY, id=pet["id"])
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_corrupt_row_is_a_data_error(self, test_client, fake_session):
        owner = await create_owner(test_client)
        pet = (await test_client.post(f"{API_PREFIX}/owners/{owner['id']}/pets", json=PET_BODY)).json()
        for row in fake_session.tables[PET_TABLE].values():
            row["pet_type"] = "dragon"

        response = await test_client.get(f"{API_PREFIX}/pets/{pet['id']}")

        assert response.status_code == 500
        assert response.json()["error"] == "data_error"
        assert "dragon" not in response.text

    @pytest.mark.asyncio
    async def test_pet_types(self, test_client):
        response = await test_client.get(f"{API_PREFIX}/pettypes")

        assert response.status_code == 200
        assert [pet_type["name"] for pet_type in response.json()] == [
            "bird", "cat", "dog", "hamster", "lizard", "snake",
        ]


class TestVetRoutes:

    @pytest.mark.asyncio
    async def test_vet_with_specialties(self, test_client):
        created = await test_client.post(
            f"{API_PREFIX}/vets",
            json={"first_name": "Linda", "last_name": "Douglas", "specialties": [" Surgery", "dentistry"]},
        )
        listed = await test_client.get(f"{API_PREFIX}/vets")

        assert created.status_code == 201
        assert listed.json()[0]["specialties"] == ["dentistry", "surgery"]

    @pytest.mark.asyncio
    async def test_specialties(self, test_client):
        added = await test_client.post(f"{API_PREFIX}/specialties", json={"name": "Radiology"})
        listed = await test_client.get(f"{API_PREFIX}/specialties")

        assert added.status_code == 201
        assert listed.json() == ["radiology"]


class TestErrorMapping:

    @pytest.mark.asyncio
    async def test_storage_failure_is_503(self, test_client, fake_session):
        fake_session.fail_on("scan", OWNER_TABLE)

        response = await test_client.get(f"{API_PREFIX}/owners")

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "storage_error"
        assert OWNER_TABLE not in body["message"]

    @pytest.mark.asyncio
    async def test_foreign_failure_is_wrapped(self, test_client, fake_session):
        fake_session.fail_on("get", OWNER_TABLE, ConnectionResetError("reset by peer"))

        response = await test_client.get(f"{API_PREFIX}/owners/{uuid4()}")

        assert response.status_code == 503
        assert response.json()["error"] == "storage_error"

    @pytest.mark.asyncio
    async def test_session_not_open(self, app, test_client):
        app.state.storage_session = None

        response = await test_client.get(f"{API_PREFIX}/vets")

        assert response.status_code == 503
        assert response.json()["error"] == "store_unavailable"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["store"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_without_session(self, app, test_client):
        app.state.storage_session = None

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
