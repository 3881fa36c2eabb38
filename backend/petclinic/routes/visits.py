"""
PetClinic Backend — Visit Route Handlers
==========================================
"""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from petclinic.dependencies import get_visit_service
from petclinic.routes import API_PREFIX
from petclinic.schemas.common import ErrorResponse
from petclinic.schemas.pet import VisitRequest, VisitResponse
from petclinic.services import VisitService

router = APIRouter(prefix=API_PREFIX, tags=["Visits"])

VisitServiceDep = Annotated[VisitService, Depends(get_visit_service)]


@router.get(
    "/pets/{pet_id}/visits",
    response_model=List[VisitResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List the visits of a pet",
)
async def list_visits(pet_id: UUID, service: VisitServiceDep) -> List[VisitResponse]:
    visits = await service.list_visits_by_pet(pet_id)
    return [VisitResponse.from_domain(visit) for visit in visits]


@router.post(
    "/pets/{pet_id}/visits",
    response_model=VisitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Record a visit for a pet",
)
async def create_visit(
    pet_id: UUID,
    body: VisitRequest,
    response: Response,
    service: VisitServiceDep,
) -> VisitResponse:
    visit = await service.create_visit(pet_id, body.to_draft(), visit_id=body.id)
    response.headers["Location"] = f"{API_PREFIX}/visits/{visit.id}"
    return VisitResponse.from_domain(visit)


@router.get(
    "/visits/{visit_id}",
    response_model=VisitResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a visit",
)
async def get_visit(visit_id: UUID, service: VisitServiceDep) -> VisitResponse:
    return VisitResponse.from_domain(await service.get_visit(visit_id))


@router.delete(
    "/visits/{visit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a visit",
)
async def delete_visit(visit_id: UUID, service: VisitServiceDep) -> Response:
    await service.delete_visit(visit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
