"""
PetClinic Backend — Owner Record Mapper
=========================================

Owner ↔ `petclinic_owner` row. One physical row per owner.
"""

from petclinic.domain import Owner
from petclinic.mappers.base import Row, read_str, read_uuid, require_key

ENTITY = "owner"


class OwnerMapper:
    """Pure translation between Owner and its storage row."""

    @staticmethod
    def to_row(owner: Owner) -> Row:
        return {
            "id": require_key(owner, "id", ENTITY),
            "first_name": owner.first_name,
            "last_name": owner.last_name,
            "address": owner.address,
            "city": owner.city,
            "telephone": owner.telephone,
        }

    @staticmethod
    def from_row(row: Row) -> Owner:
        return Owner(
            id=read_uuid(row, "id", ENTITY),
            first_name=read_str(row, "first_name", ENTITY),
            last_name=read_str(row, "last_name", ENTITY),
            address=read_str(row, "address", ENTITY),
            city=read_str(row, "city", ENTITY),
            telephone=read_str(row, "telephone", ENTITY),
        )
