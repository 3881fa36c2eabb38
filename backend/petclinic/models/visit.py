"""
PetClinic Backend — Visit Row Tables
======================================

Same layout as pets, one level down:

    petclinic_visit          partition (id)                   → primary row
    petclinic_visit_by_pet   partition (pet_id), clustering (visit_id)
                                                              → pet's copy
"""

import uuid
from datetime import date

from sqlalchemy import Date, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.models.base import Base, clustering_key, partition_key


class VisitRecord(Base):
    __tablename__ = "petclinic_visit"

    id: Mapped[uuid.UUID] = partition_key(Uuid)
    pet_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")


class VisitByPetRecord(Base):
    __tablename__ = "petclinic_visit_by_pet"

    pet_id: Mapped[uuid.UUID] = partition_key(Uuid)
    visit_id: Mapped[uuid.UUID] = clustering_key(Uuid)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
