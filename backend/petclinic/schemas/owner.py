"""
PetClinic Backend — Owner Schemas
===================================
"""

import uuid
from typing import List

from pydantic import BaseModel, Field

from petclinic.domain import Owner, OwnerDraft, OwnerView
from petclinic.schemas.pet import PetResponse


class OwnerRequest(BaseModel):
    """Body of POST /owners and PUT /owners/{owner_id}."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    address: str = Field(default="", max_length=255)
    city: str = Field(default="", max_length=100)
    telephone: str = Field(default="", max_length=30, pattern=r"^[0-9+() \-]*$")

    def to_draft(self) -> OwnerDraft:
        return OwnerDraft(
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
            city=self.city,
            telephone=self.telephone,
        )


class OwnerResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    address: str
    city: str
    telephone: str
    pets: List[PetResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, owner: Owner) -> "OwnerResponse":
        return cls(
            id=owner.id,
            first_name=owner.first_name,
            last_name=owner.last_name,
            address=owner.address,
            city=owner.city,
            telephone=owner.telephone,
        )

    @classmethod
    def from_view(cls, view: OwnerView) -> "OwnerResponse":
        response = cls.from_domain(view.owner)
        response.pets = [
            PetResponse.from_domain(pet_view.pet, visits=pet_view.visits)
            for pet_view in view.pets
        ]
        return response
