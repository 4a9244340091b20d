"""
Service Errors

Typed failures raised by the service layer. Route handlers never build error
responses themselves; the application error handler renders these.
"""

from typing import Any, Dict, List, Optional


class ServiceError(Exception):
    """Base class for failures surfaced to API callers"""

    code = 'SERVICE_ERROR'
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced user, driver or route does not exist"""

    code = 'NOT_FOUND'
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(ServiceError):
    """Operation would break a lifecycle rule"""

    code = 'CONFLICT'
    status_code = 409


class ValidationFailure(ServiceError):
    """Malformed input, rejected before the database is touched"""

    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.details = details or []


class StorageError(ServiceError):
    """Opaque database failure (connectivity, storage-level constraint)"""

    code = 'STORAGE_ERROR'
    status_code = 503
