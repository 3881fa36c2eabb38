"""
PetClinic Backend — Visit Record Mapper
=========================================

Visit ↔ `petclinic_visit` (keyed by `id`) and `petclinic_visit_by_pet`
(keyed by `pet_id`, `visit_id`). Mirrors the pet mapper one level down.
"""

from petclinic.domain import Visit
from petclinic.mappers.base import Row, read_date, read_str, read_uuid, require_key

ENTITY = "visit"


class VisitMapper:

    @staticmethod
    def to_row(visit: Visit) -> Row:
        return {
            "id": require_key(visit, "id", ENTITY),
            "pet_id": require_key(visit, "pet_id", ENTITY),
            "visit_date": visit.visit_date,
            "description": visit.description,
        }

    @staticmethod
    def to_pet_partition_row(visit: Visit) -> Row:
        return {
            "pet_id": require_key(visit, "pet_id", ENTITY),
            "visit_id": require_key(visit, "id", ENTITY),
            "visit_date": visit.visit_date,
            "description": visit.description,
        }

    @staticmethod
    def from_row(row: Row) -> Visit:
        id_field = "id" if "id" in row else "visit_id"
        return Visit(
            id=read_uuid(row, id_field, ENTITY),
            pet_id=read_uuid(row, "pet_id", ENTITY),
            visit_date=read_date(row, "visit_date", ENTITY),
            description=read_str(row, "description", ENTITY),
        )
