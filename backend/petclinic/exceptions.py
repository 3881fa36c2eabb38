"""
PetClinic Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure kind the data layer
       can produce.
How:   Each exception class carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map every kind to a
       distinct HTTP status and error code.
Who:   Raised by the storage session, mappers, DAOs and services.

Exception Hierarchy:
    PetClinicError (base)
    ├── StoreConnectionError → 503, fatal at startup (process does not serve)
    ├── StorageError         → 503 (a single read or write failed)
    ├── MappingError         → 500 (corrupt or schema-drifted row)
    ├── NotFoundError        → 404 (referenced entity does not exist)
    └── ValidationError      → 400 (client input rejected at the API)

Lower layers never swallow these. The domain services wrap anything foreign
into StorageError and let the four data kinds pass through unchanged.
"""

from typing import Any, Dict, Optional


class PetClinicError(Exception):
    """
    Base exception for all PetClinic application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StoreConnectionError(PetClinicError):
    """
    Raised when the storage session cannot reach the store at startup.

    What:    The startup probe failed after every configured attempt.
    When:    `open_session()` during the application lifespan.
    HTTP:    503 if it ever reaches a handler; normally the process exits first.
    """

    def __init__(
        self,
        message: str = "Could not connect to the store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(PetClinicError):
    """
    Raised when a single storage read or write fails.

    What:    Timeout, unavailable node, malformed response, or a partially
             applied multi-row write.
    When:    Any session call; surfaced by DAOs and services without retry.
    HTTP:    503 Service Unavailable

    The message is generic; the table, operation and key are kept in
    `context` for server-side logs.
    """

    def __init__(
        self,
        message: str = "A storage operation failed. Please try again later.",
        table: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if table:
            ctx["table"] = table
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.table = table
        self.operation = operation


class MappingError(PetClinicError):
    """
    Raised when a row cannot be translated to or from a domain object.

    What:    A required field is missing, has the wrong type, or holds an
             unrecognized enumerated value.
    HTTP:    500 Internal Server Error (a data problem, not an outage)
    """

    def __init__(
        self,
        entity: str,
        field: Optional[str] = None,
        reason: str = "invalid value",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Could not map {entity} record"
        if field:
            message = f"Could not map {entity} record: field '{field}' {reason}"
        ctx = context or {}
        ctx["entity"] = entity
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.entity = entity
        self.field = field


class NotFoundError(PetClinicError):
    """
    Raised when a requested or referenced entity does not exist.

    What:    An owner for a new pet, a pet for a new visit, or the target of
             a read/update/delete is absent.
    When:    Detected by an explicit existence check before any write.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(PetClinicError):
    """
    Raised when client input fails a business rule the schemas cannot express.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
