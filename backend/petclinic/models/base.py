"""
PetClinic Backend — Declarative Base for Row Tables
=====================================================

What:  Base class for every row-family table, plus column helpers that mark
       partition keys.
How:   Each table's primary key is its full row key. Columns flagged with
       `partition_key()` form the partition: the unit a scan reads in one
       query. The remaining primary-key columns are clustering columns that
       order rows inside the partition.
"""

from typing import Any, List

from sqlalchemy import Table
from sqlalchemy.orm import DeclarativeBase, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all row tables.

    Shares one metadata object, so the storage session can resolve any table
    by name and the schema bootstrap can create them all in one pass.
    """
    pass


def partition_key(*args: Any, **kwargs: Any):
    """A primary-key column that is part of the partition key."""
    info = dict(kwargs.pop("info", {}) or {})
    info["partition_key"] = True
    return mapped_column(*args, primary_key=True, info=info, **kwargs)


def clustering_key(*args: Any, **kwargs: Any):
    """A primary-key column that orders rows inside a partition."""
    return mapped_column(*args, primary_key=True, **kwargs)


def key_columns(table: Table) -> List[str]:
    return [column.name for column in table.primary_key.columns]


def partition_columns(table: Table) -> List[str]:
    return [
        column.name
        for column in table.primary_key.columns
        if column.info.get("partition_key")
    ]
