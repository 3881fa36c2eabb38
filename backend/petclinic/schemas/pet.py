"""
PetClinic Backend — Pet & Visit Schemas
=========================================
"""

import uuid
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from petclinic.domain import Pet, PetDraft, PetType, Visit, VisitDraft


class PetTypeResponse(BaseModel):
    """Pet types are reference values whose id equals their name."""
    id: str
    name: str

    @classmethod
    def from_domain(cls, pet_type: PetType) -> "PetTypeResponse":
        return cls(id=pet_type.id, name=pet_type.value)


class VisitRequest(BaseModel):
    id: Optional[uuid.UUID] = Field(default=None, description="Client-chosen id; reuse it to retry a failed create")
    visit_date: date
    description: str = Field(default="", max_length=2000)

    def to_draft(self) -> VisitDraft:
        return VisitDraft(visit_date=self.visit_date, description=self.description)


class VisitResponse(BaseModel):
    id: uuid.UUID
    pet_id: uuid.UUID
    visit_date: date
    description: str

    @classmethod
    def from_domain(cls, visit: Visit) -> "VisitResponse":
        return cls(
            id=visit.id,
            pet_id=visit.pet_id,
            visit_date=visit.visit_date,
            description=visit.description,
        )


class PetRequest(BaseModel):
    """Body of POST /owners/{owner_id}/pets and PUT /pets/{pet_id}."""
    id: Optional[uuid.UUID] = Field(
        default=None,
        description="Client-chosen id for creates; reuse it to retry a failed create. Ignored on PUT.",
    )
    name: str = Field(min_length=1, max_length=100)
    pet_type: PetType = Field(description="One of the values listed by GET /pettypes")
    birth_date: date

    def to_draft(self) -> PetDraft:
        return PetDraft(name=self.name, pet_type=self.pet_type, birth_date=self.birth_date)


class PetResponse(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    type: PetTypeResponse
    birth_date: date
    visits: List[VisitResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, pet: Pet, visits: Optional[Iterable[Visit]] = None) -> "PetResponse":
        return cls(
            id=pet.id,
            owner_id=pet.owner_id,
            name=pet.name,
            type=PetTypeResponse.from_domain(pet.pet_type),
            birth_date=pet.birth_date,
            visits=[VisitResponse.from_domain(visit) for visit in visits or ()],
        )
