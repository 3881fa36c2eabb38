"""
PetClinic Backend — Pet Route Handlers
========================================
"""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from petclinic.dependencies import get_pet_service
from petclinic.routes import API_PREFIX
from petclinic.schemas.common import ErrorResponse
from petclinic.schemas.pet import PetRequest, PetResponse, PetTypeResponse
from petclinic.services import PetService

router = APIRouter(prefix=API_PREFIX, tags=["Pets"])

PetServiceDep = Annotated[PetService, Depends(get_pet_service)]


@router.get("/pettypes", response_model=List[PetTypeResponse], summary="List pet types")
async def list_pet_types(service: PetServiceDep) -> List[PetTypeResponse]:
    return [PetTypeResponse.from_domain(pet_type) for pet_type in service.list_pet_types()]


@router.get(
    "/owners/{owner_id}/pets",
    response_model=List[PetResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List the pets of an owner",
)
async def list_pets(owner_id: UUID, service: PetServiceDep) -> List[PetResponse]:
    pets = await service.list_pets_by_owner(owner_id)
    return [PetResponse.from_domain(pet) for pet in pets]


@router.post(
    "/owners/{owner_id}/pets",
    response_model=PetResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Add a pet to an owner",
    description=(
        "Writes the pet row, then the owner's copy. On a 503 the pet may "
        "already be readable by id; repeating the request is safe."
    ),
)
async def create_pet(
    owner_id: UUID,
    body: PetRequest,
    response: Response,
    service: PetServiceDep,
) -> PetResponse:
    pet = await service.create_pet(owner_id, body.to_draft(), pet_id=body.id)
    response.headers["Location"] = f"{API_PREFIX}/pets/{pet.id}"
    return PetResponse.from_domain(pet)


@router.get(
    "/pets/{pet_id}",
    response_model=PetResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a pet",
)
async def get_pet(pet_id: UUID, service: PetServiceDep) -> PetResponse:
    return PetResponse.from_domain(await service.get_pet(pet_id))


@router.put(
    "/pets/{pet_id}",
    response_model=PetResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Replace a pet's details",
)
async def update_pet(pet_id: UUID, body: PetRequest, service: PetServiceDep) -> PetResponse:
    pet = await service.update_pet(pet_id, body.to_draft())
    return PetResponse.from_domain(pet)


@router.delete(
    "/pets/{pet_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a pet (visits are kept)",
)
async def delete_pet(pet_id: UUID, service: PetServiceDep) -> Response:
    await service.delete_pet(pet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
