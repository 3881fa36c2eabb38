"""
PetClinic Backend — Data-Access Objects
=========================================

One DAO per entity. Each method maps to one access pattern the row layout
supports: a keyed single-row read/write/delete or one partition scan.
DAOs are obtained from the storage session: `session.dao(PetDao)`.
"""

from petclinic.dao.owner import OwnerDao
from petclinic.dao.pet import PetDao
from petclinic.dao.vet import ReferenceListDao, VetDao
from petclinic.dao.visit import VisitDao

__all__ = ["OwnerDao", "PetDao", "VisitDao", "VetDao", "ReferenceListDao"]
