"""
Service Layer Architecture

This package contains the business logic behind the API blueprints.
Services provide:

1. **Transaction Management**: Commit on success, rollback on failure
2. **Lifecycle Rules**: Referential checks run before any write
3. **Typed Failures**: NotFound, Conflict, ValidationFailure and StorageError
4. **Testability**: Business logic can be tested without the HTTP layer

Services Architecture:
- **UserService**: User CRUD
- **DriverService**: Driver registration, partial updates, guarded deletion
- **RouteService**: Route assignment, partial updates, status-guarded deletion
- **ReportingService**: Filtered route reports with status and distance totals
"""

from .errors import ServiceError, NotFoundError, ConflictError, ValidationFailure, StorageError
from .user_service import UserService
from .driver_service import DriverService
from .route_service import RouteService
from .reporting_service import ReportingService, RouteReportSummary
from .transaction_helper import TransactionHelper

__all__ = [
    'ServiceError',
    'NotFoundError',
    'ConflictError',
    'ValidationFailure',
    'StorageError',
    'UserService',
    'DriverService',
    'RouteService',
    'ReportingService',
    'RouteReportSummary',
    'TransactionHelper'
]
