"""
PetClinic Backend — Owner Route Handlers
==========================================

GET /owners/{owner_id} returns the owner with pets and their visits,
assembled from partition reads by OwnerService.find_owner_with_pets().
"""

import logging
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from petclinic.dependencies import get_owner_service
from petclinic.exceptions import NotFoundError
from petclinic.routes import API_PREFIX
from petclinic.schemas.common import ErrorResponse
from petclinic.schemas.owner import OwnerRequest, OwnerResponse
from petclinic.services import OwnerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["Owners"])

OwnerServiceDep = Annotated[OwnerService, Depends(get_owner_service)]


@router.get("/owners", response_model=List[OwnerResponse], summary="List all owners")
async def list_owners(service: OwnerServiceDep) -> List[OwnerResponse]:
    owners = await service.list_owners()
    return [OwnerResponse.from_domain(owner) for owner in owners]


@router.post(
    "/owners",
    response_model=OwnerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an owner",
)
async def create_owner(body: OwnerRequest, response: Response, service: OwnerServiceDep) -> OwnerResponse:
    owner = await service.create_owner(body.to_draft())
    response.headers["Location"] = f"{API_PREFIX}/owners/{owner.id}"
    return OwnerResponse.from_domain(owner)


@router.get(
    "/owners/{owner_id}",
    response_model=OwnerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an owner with pets and visits",
)
async def get_owner(owner_id: UUID, service: OwnerServiceDep) -> OwnerResponse:
    view = await service.find_owner_with_pets(owner_id, include_visits=True)
    if view is None:
        raise NotFoundError(resource="owner", resource_id=str(owner_id))
    return OwnerResponse.from_view(view)


@router.put(
    "/owners/{owner_id}",
    response_model=OwnerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Replace an owner's details",
)
async def update_owner(owner_id: UUID, body: OwnerRequest, service: OwnerServiceDep) -> OwnerResponse:
    owner = await service.update_owner(owner_id, body.to_draft())
    return OwnerResponse.from_domain(owner)


@router.delete(
    "/owners/{owner_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete an owner (pets are kept)",
)
async def delete_owner(owner_id: UUID, service: OwnerServiceDep) -> Response:
    await service.delete_owner(owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
