"""
PetClinic Backend — FastAPI Dependencies
==========================================

What:  Provides the storage session and the domain services to route handlers.
How:   The session is opened once in the lifespan and kept on `app.state`.
       Services are cheap, stateless wrappers around the session's DAOs and
       are built per request from it.
Who:   Injected via `Depends()`. Tests override `get_storage_session` to
       run the API against an in-memory session.
"""

from typing import Annotated

from fastapi import Depends, Request

from petclinic.database import StorageSession
from petclinic.exceptions import StoreConnectionError
from petclinic.services import OwnerService, PetService, VetService, VisitService


def get_storage_session(request: Request) -> StorageSession:
    session = getattr(request.app.state, "storage_session", None)
    if session is None:
        raise StoreConnectionError(message="The store session is not open")
    return session


SessionDep = Annotated[StorageSession, Depends(get_storage_session)]


def get_owner_service(session: SessionDep) -> OwnerService:
    return OwnerService(session)


def get_pet_service(session: SessionDep) -> PetService:
    return PetService(session)


def get_visit_service(session: SessionDep) -> VisitService:
    return VisitService(session)


def get_vet_service(session: SessionDep) -> VetService:
    return VetService(session)
