"""
PetClinic Backend — Vet Schemas
=================================
"""

import uuid
from typing import List

from pydantic import BaseModel, Field, field_validator

from petclinic.domain import VetDraft, VetView


def normalize_specialty(name: str) -> str:
    cleaned = " ".join(name.split()).lower()
    if not cleaned:
        raise ValueError("Specialty name must not be blank")
    return cleaned


class SpecialtyRequest(BaseModel):
    name: str = Field(min_length=1, max_length=80)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return normalize_specialty(v)


class VetRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    specialties: List[str] = Field(default_factory=list)

    @field_validator("specialties")
    @classmethod
    def validate_specialties(cls, v: List[str]) -> List[str]:
        return sorted({normalize_specialty(name) for name in v})

    def to_draft(self) -> VetDraft:
        return VetDraft(
            first_name=self.first_name,
            last_name=self.last_name,
            specialties=frozenset(self.specialties),
        )


class VetResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    specialties: List[str]

    @classmethod
    def from_view(cls, view: VetView) -> "VetResponse":
        return cls(
            id=view.vet.id,
            first_name=view.vet.first_name,
            last_name=view.vet.last_name,
            specialties=view.specialties,
        )
