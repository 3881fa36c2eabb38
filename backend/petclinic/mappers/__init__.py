"""
PetClinic Backend — Record Mappers
====================================

Pure, side-effect-free translation between domain objects and storage rows.
For every well-formed domain object `o`: `from_row(to_row(o)) == o`.
Malformed rows raise MappingError.
"""

from petclinic.mappers.owner import OwnerMapper
from petclinic.mappers.pet import PetMapper
from petclinic.mappers.vet import ReferenceListMapper, VetMapper
from petclinic.mappers.visit import VisitMapper

__all__ = ["OwnerMapper", "PetMapper", "VisitMapper", "VetMapper", "ReferenceListMapper"]
