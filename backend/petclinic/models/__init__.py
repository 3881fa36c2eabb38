"""
PetClinic Backend — Row Tables
================================

Importing this package registers every row table on `Base.metadata`.

Table inventory (partition key → clustering key):
    petclinic_owner            id
    petclinic_pet              id
    petclinic_pet_by_owner     owner_id → pet_id
    petclinic_visit            id
    petclinic_visit_by_pet     pet_id → visit_id
    petclinic_vet              id
    petclinic_reference_lists  list_name
"""

from petclinic.models.base import Base, key_columns, partition_columns
from petclinic.models.owner import OwnerRecord
from petclinic.models.pet import PetByOwnerRecord, PetRecord
from petclinic.models.reference_list import ReferenceListRecord
from petclinic.models.vet import VetRecord
from petclinic.models.visit import VisitByPetRecord, VisitRecord

OWNER_TABLE = OwnerRecord.__tablename__
PET_TABLE = PetRecord.__tablename__
PET_BY_OWNER_TABLE = PetByOwnerRecord.__tablename__
VISIT_TABLE = VisitRecord.__tablename__
VISIT_BY_PET_TABLE = VisitByPetRecord.__tablename__
VET_TABLE = VetRecord.__tablename__
REFERENCE_LIST_TABLE = ReferenceListRecord.__tablename__

__all__ = [
    "Base",
    "key_columns",
    "partition_columns",
    "OwnerRecord",
    "PetRecord",
    "PetByOwnerRecord",
    "VisitRecord",
    "VisitByPetRecord",
    "VetRecord",
    "ReferenceListRecord",
    "OWNER_TABLE",
    "PET_TABLE",
    "PET_BY_OWNER_TABLE",
    "VISIT_TABLE",
    "VISIT_BY_PET_TABLE",
    "VET_TABLE",
    "REFERENCE_LIST_TABLE",
]
