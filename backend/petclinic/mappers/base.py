"""
PetClinic Backend — Shared Field Readers for Record Mappers
=============================================================

What:  Typed readers that pull one field out of a storage row.
How:   Each reader either returns a value of the expected type or raises
       MappingError naming the entity and field. Drivers hand back UUIDs
       and dates either natively or as strings, so both are accepted.
"""

import uuid
from datetime import date
from typing import Any, Dict, List

from petclinic.exceptions import MappingError

Row = Dict[str, Any]


def require(row: Row, field: str, entity: str) -> Any:
    if field not in row or row[field] is None:
        raise MappingError(entity=entity, field=field, reason="is missing")
    return row[field]


def read_uuid(row: Row, field: str, entity: str) -> uuid.UUID:
    value = require(row, field, entity)
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise MappingError(entity=entity, field=field, reason="is not a valid UUID")


def read_str(row: Row, field: str, entity: str) -> str:
    value = require(row, field, entity)
    if not isinstance(value, str):
        raise MappingError(entity=entity, field=field, reason="is not a string")
    return value


def read_date(row: Row, field: str, entity: str) -> date:
    value = require(row, field, entity)
    # datetime is a date subclass; a timestamp here means the row has drifted
    if type(value) is date:
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise MappingError(entity=entity, field=field, reason="is not a valid date")


def read_str_list(row: Row, field: str, entity: str) -> List[str]:
    value = require(row, field, entity)
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise MappingError(entity=entity, field=field, reason="is not a list")
    if not all(isinstance(item, str) for item in value):
        raise MappingError(entity=entity, field=field, reason="contains non-string values")
    return list(value)


def require_key(obj: Any, field: str, entity: str) -> Any:
    """Guards the outbound direction: a domain object must carry its id."""
    value = getattr(obj, field, None)
    if value is None:
        raise MappingError(entity=entity, field=field, reason="is missing")
    return value
