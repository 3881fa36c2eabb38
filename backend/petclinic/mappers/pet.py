"""
PetClinic Backend — Pet Record Mapper
=======================================

What:  Pet ↔ its two row shapes.
How:
    to_row(pet)                     → `petclinic_pet` row, keyed by `id`
    to_owner_partition_row(pet)     → `petclinic_pet_by_owner` row, keyed by
                                      (`owner_id`, `pet_id`)
    from_row(row)                   → Pet, from either shape

Both shapes carry the full payload, including the pet type name copied
inline. An unknown pet type name is a MappingError, not a silent default.
"""

from petclinic.domain import Pet, PetType
from petclinic.exceptions import MappingError
from petclinic.mappers.base import Row, read_date, read_str, read_uuid, require_key

ENTITY = "pet"


def read_pet_type(row: Row) -> PetType:
    name = read_str(row, "pet_type", ENTITY)
    try:
        return PetType(name)
    except ValueError:
        raise MappingError(
            entity=ENTITY,
            field="pet_type",
            reason=f"has unrecognized value '{name}'",
        )


class PetMapper:

    @staticmethod
    def to_row(pet: Pet) -> Row:
        return {
            "id": require_key(pet, "id", ENTITY),
            "owner_id": require_key(pet, "owner_id", ENTITY),
            "name": pet.name,
            "pet_type": pet.pet_type.value,
            "birth_date": pet.birth_date,
        }

    @staticmethod
    def to_owner_partition_row(pet: Pet) -> Row:
        return {
            "owner_id": require_key(pet, "owner_id", ENTITY),
            "pet_id": require_key(pet, "id", ENTITY),
            "name": pet.name,
            "pet_type": pet.pet_type.value,
            "birth_date": pet.birth_date,
        }

    @staticmethod
    def from_row(row: Row) -> Pet:
        # Partition copies name the pet's own id `pet_id`
        id_field = "id" if "id" in row else "pet_id"
        return Pet(
            id=read_uuid(row, id_field, ENTITY),
            owner_id=read_uuid(row, "owner_id", ENTITY),
            name=read_str(row, "name", ENTITY),
            pet_type=read_pet_type(row),
            birth_date=read_date(row, "birth_date", ENTITY),
        )
