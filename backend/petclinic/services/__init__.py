"""
PetClinic Backend — Domain Services
=====================================

What:  Orchestration layer between the API routes and the DAOs.
How:   Each service turns one relational-looking operation into explicit
       single-row reads and writes. Multi-row writes are expressed as a
       WritePlan whose steps run in order and are never rolled back.

Service Inventory:
    - OwnerService: owners and the owner-with-pets aggregate
    - PetService:   pets (primary row + owner partition copy)
    - VisitService: visits (primary row + pet partition copy)
    - VetService:   vets with embedded specialties, specialty list

Error Contract:
    Callers see exactly four data-layer kinds: StorageError, MappingError,
    NotFoundError (and StoreConnectionError at startup). Anything else
    raised below a service is wrapped into StorageError.
"""

from petclinic.services.owner_service import OwnerService
from petclinic.services.pet_service import PetService
from petclinic.services.vet_service import VetService
from petclinic.services.visit_service import VisitService
from petclinic.services.write_plan import RowWrite, WritePlan

__all__ = ["OwnerService", "PetService", "VisitService", "VetService", "RowWrite", "WritePlan"]
