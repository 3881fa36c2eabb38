"""
Domain model for the pet clinic.

These types describe owners, pets, visits and vets the way callers think
about them: relational, with parent references. They know nothing about
rows, partitions or the store. Mappers translate them to storage rows and
services assemble the view types from several reads.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import FrozenSet, List
from uuid import UUID


class PetType(Enum):
    """
    Reference values used to categorize pets.

    The id and the name are the same string, and the value is copied inline
    into every stored pet row instead of being joined.
    """
    BIRD = "bird"
    CAT = "cat"
    DOG = "dog"
    HAMSTER = "hamster"
    LIZARD = "lizard"
    SNAKE = "snake"

    @property
    def id(self) -> str:
        return self.value


# Seed values for the vet specialty reference list.
DEFAULT_SPECIALTIES = ("dentistry", "radiology", "surgery")


# ── Entities ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Owner:
    id: UUID
    first_name: str
    last_name: str
    address: str
    city: str
    telephone: str


@dataclass(frozen=True)
class Pet:
    id: UUID
    owner_id: UUID
    name: str
    pet_type: PetType
    birth_date: date


@dataclass(frozen=True)
class Visit:
    id: UUID
    pet_id: UUID
    visit_date: date
    description: str


@dataclass(frozen=True)
class Vet:
    """A vet with specialties embedded inline rather than joined."""
    id: UUID
    first_name: str
    last_name: str
    specialties: FrozenSet[str] = frozenset()


# ── Drafts ────────────────────────────────────────────────────────────────
# Caller-supplied fields of a new or updated entity. Ids are assigned by the
# domain services, never by the caller or the store.


@dataclass(frozen=True)
class OwnerDraft:
    first_name: str
    last_name: str
    address: str
    city: str
    telephone: str


@dataclass(frozen=True)
class PetDraft:
    name: str
    pet_type: PetType
    birth_date: date


@dataclass(frozen=True)
class VisitDraft:
    visit_date: date
    description: str


@dataclass(frozen=True)
class VetDraft:
    first_name: str
    last_name: str
    specialties: FrozenSet[str] = frozenset()


# ── Read Views ────────────────────────────────────────────────────────────


@dataclass
class PetView:
    """A pet plus its visits, when the caller asked for them."""
    pet: Pet
    visits: List[Visit] = field(default_factory=list)


@dataclass
class OwnerView:
    """
    An owner with their pets, assembled at read time.

    Nothing is stored pre-joined: the view is rebuilt from one owner read
    and one scan of the owner's pet partition. Pet order is not guaranteed.
    """
    owner: Owner
    pets: List[PetView] = field(default_factory=list)

    def pet_ids(self) -> FrozenSet[UUID]:
        return frozenset(view.pet.id for view in self.pets)


@dataclass(frozen=True)
class VetView:
    vet: Vet

    @property
    def specialties(self) -> List[str]:
        return sorted(self.vet.specialties)

