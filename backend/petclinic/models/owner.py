"""
PetClinic Backend — Owner Row Table
=====================================

One row per owner, partitioned by owner id. Owners have no denormalized
copies; pets reference them by id only.

Query Patterns:
    - Get owner: WHERE id = :owner_id (single partition)
    - List owners: full table scan (listing screens only)
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.models.base import Base, partition_key


class OwnerRecord(Base):
    __tablename__ = "petclinic_owner"

    id: Mapped[uuid.UUID] = partition_key(Uuid, comment="Owner id, generated by the service")
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    telephone: Mapped[str] = mapped_column(String(30), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<OwnerRecord(id={self.id}, last_name='{self.last_name}')>"
