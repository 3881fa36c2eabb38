"""
PetClinic Backend — Vet Record Mapper
=======================================

Vet ↔ `petclinic_vet` row. Specialties are embedded as a sorted list so the
same vet always produces the same row.
"""

from typing import FrozenSet, Iterable, List

from petclinic.domain import Vet
from petclinic.mappers.base import Row, read_str, read_str_list, read_uuid, require_key

ENTITY = "vet"


class VetMapper:

    @staticmethod
    def to_row(vet: Vet) -> Row:
        return {
            "id": require_key(vet, "id", ENTITY),
            "first_name": vet.first_name,
            "last_name": vet.last_name,
            "specialties": sorted(vet.specialties),
        }

    @staticmethod
    def from_row(row: Row) -> Vet:
        return Vet(
            id=read_uuid(row, "id", ENTITY),
            first_name=read_str(row, "first_name", ENTITY),
            last_name=read_str(row, "last_name", ENTITY),
            specialties=frozenset(read_str_list(row, "specialties", ENTITY)),
        )


class ReferenceListMapper:
    """Named value list ↔ `petclinic_reference_lists` row."""

    @staticmethod
    def to_row(list_name: str, entries: Iterable[str]) -> Row:
        return {"list_name": list_name, "entries": sorted(set(entries))}

    @staticmethod
    def from_row(row: Row) -> FrozenSet[str]:
        entries: List[str] = read_str_list(row, "entries", "reference list")
        return frozenset(entries)
