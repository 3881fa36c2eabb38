"""
PetClinic Backend — Vet Row Table
===================================

One row per vet with the specialty names embedded as a list. Listing vets
reads each row once and needs no join table.
"""

import uuid
from typing import List

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.models.base import Base, partition_key


class VetRecord(Base):
    __tablename__ = "petclinic_vet"

    id: Mapped[uuid.UUID] = partition_key(Uuid)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    specialties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
