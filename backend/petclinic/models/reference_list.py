"""
PetClinic Backend — Reference List Table
==========================================

Small named value lists (pet types, vet specialties), one row per list.
"""

from typing import List

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.models.base import Base, partition_key


class ReferenceListRecord(Base):
    __tablename__ = "petclinic_reference_lists"

    list_name: Mapped[str] = partition_key(String(50))
    entries: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
