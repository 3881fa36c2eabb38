"""
PetClinic Backend — Vet Route Handlers
========================================
"""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from petclinic.dependencies import get_vet_service
from petclinic.domain import VetView
from petclinic.routes import API_PREFIX
from petclinic.schemas.common import ErrorResponse
from petclinic.schemas.vet import SpecialtyRequest, VetRequest, VetResponse
from petclinic.services import VetService

router = APIRouter(prefix=API_PREFIX, tags=["Vets"])

VetServiceDep = Annotated[VetService, Depends(get_vet_service)]


@router.get("/vets", response_model=List[VetResponse], summary="List vets with specialties")
async def list_vets(service: VetServiceDep) -> List[VetResponse]:
    return [VetResponse.from_view(view) for view in await service.list_vets()]


@router.post(
    "/vets",
    response_model=VetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a vet",
)
async def create_vet(body: VetRequest, response: Response, service: VetServiceDep) -> VetResponse:
    vet = await service.create_vet(body.to_draft())
    response.headers["Location"] = f"{API_PREFIX}/vets/{vet.id}"
    return VetResponse.from_view(VetView(vet=vet))


@router.get(
    "/vets/{vet_id}",
    response_model=VetResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a vet",
)
async def get_vet(vet_id: UUID, service: VetServiceDep) -> VetResponse:
    return VetResponse.from_view(VetView(vet=await service.get_vet(vet_id)))


@router.put(
    "/vets/{vet_id}",
    response_model=VetResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Replace a vet's details",
)
async def update_vet(vet_id: UUID, body: VetRequest, service: VetServiceDep) -> VetResponse:
    vet = await service.update_vet(vet_id, body.to_draft())
    return VetResponse.from_view(VetView(vet=vet))


@router.delete(
    "/vets/{vet_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a vet",
)
async def delete_vet(vet_id: UUID, service: VetServiceDep) -> Response:
    await service.delete_vet(vet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/specialties", response_model=List[str], summary="List vet specialties")
async def list_specialties(service: VetServiceDep) -> List[str]:
    return await service.list_specialties()


@router.post(
    "/specialties",
    response_model=List[str],
    status_code=status.HTTP_201_CREATED,
    summary="Add a vet specialty",
)
async def add_specialty(body: SpecialtyRequest, service: VetServiceDep) -> List[str]:
    return await service.add_specialty(body.name)
