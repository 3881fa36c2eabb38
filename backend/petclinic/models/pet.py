"""
PetClinic Backend — Pet Row Tables
====================================

A pet is stored twice:

    petclinic_pet            partition (id)                   → primary row
    petclinic_pet_by_owner   partition (owner_id), clustering (pet_id)
                                                              → owner's copy

The primary row answers "get pet by id". The owner's copy answers "all pets
of an owner" with one partition scan. Both rows carry the full pet payload,
with the pet type copied inline, so neither read needs a second lookup.
The pet service writes both copies in one logical write.
"""

import uuid
from datetime import date

from sqlalchemy import Date, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.models.base import Base, clustering_key, partition_key


class PetRecord(Base):
    __tablename__ = "petclinic_pet"

    id: Mapped[uuid.UUID] = partition_key(Uuid)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    pet_type: Mapped[str] = mapped_column(String(30), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)


class PetByOwnerRecord(Base):
    __tablename__ = "petclinic_pet_by_owner"

    owner_id: Mapped[uuid.UUID] = partition_key(Uuid)
    pet_id: Mapped[uuid.UUID] = clustering_key(Uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    pet_type: Mapped[str] = mapped_column(String(30), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
