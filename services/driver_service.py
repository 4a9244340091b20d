"""
Driver Service

Handles driver lifecycle management: registration with vehicle details,
partial profile updates and availability changes, and deletion guarded by
route history.
"""

from typing import Any, List, Optional
import logging
from models import db, Driver, Route, AvailabilityStatus, apply_changes
from schemas import DriverCreate, DriverUpdate, parse_payload
from .errors import NotFoundError, ConflictError, ValidationFailure
from .transaction_helper import TransactionHelper

logger = logging.getLogger(__name__)

class DriverService:
    """Service class for driver management operations"""

    @TransactionHelper.with_transaction
    def create_driver(self, payload: Any) -> Driver:
        """
        Register a driver.

        Args:
            payload: DriverCreate or a dict of its fields; availability_status
                defaults to available when omitted

        Returns:
            Driver: the persisted driver with id and created_at assigned
        """
        data = parse_payload(DriverCreate, payload)

        driver = Driver(**data.model_dump())
        db.session.add(driver)
        db.session.flush()

        logger.info(f"Driver {driver.name} (ID: {driver.id}) created as {driver.availability_status.value}")
        return driver

    @TransactionHelper.with_storage_errors
    def list_drivers(self, availability_status: Optional[Any] = None) -> List[Driver]:
        """
        List drivers in insertion order.

        Args:
            availability_status: Optional AvailabilityStatus (or its value) to filter on

        Returns:
            List of drivers
        """
        query = Driver.query

        if availability_status is not None:
            try:
                status_enum = AvailabilityStatus(availability_status)
            except ValueError:
                raise ValidationFailure(f"Unknown availability status '{availability_status}'")
            query = query.filter(Driver.availability_status == status_enum)

        return query.order_by(Driver.id).all()

    @TransactionHelper.with_storage_errors
    def get_driver(self, driver_id: int) -> Optional[Driver]:
        return db.session.get(Driver, driver_id)

    @TransactionHelper.with_transaction
    def update_driver(self, driver_id: int, payload: Any) -> Driver:
        """
        Apply a partial update to a driver.

        Only fields present in the payload are written. An empty payload
        returns the stored driver untouched.

        Raises:
            ValidationFailure: malformed patch
            NotFoundError: no driver with `driver_id`
        """
        changes = parse_payload(DriverUpdate, payload).changes()

        driver = db.session.get(Driver, driver_id)
        if not driver:
            raise NotFoundError('Driver', driver_id)

        if not changes:
            return driver

        apply_changes(driver, changes)
        logger.info(f"Driver {driver_id} updated: {', '.join(sorted(changes))}")
        return driver

    @TransactionHelper.with_transaction
    def delete_driver(self, driver_id: int) -> bool:
        """
        Delete a driver that has never been assigned a route.

        Any referencing route blocks deletion, whatever its status.

        Raises:
            NotFoundError: no driver with `driver_id`
            ConflictError: the driver still has routes
        """
        driver = db.session.get(Driver, driver_id)
        if not driver:
            raise NotFoundError('Driver', driver_id)

        route_count = Route.query.filter(Route.driver_id == driver_id).count()
        if route_count > 0:
            logger.warning(f"Refused to delete driver {driver_id}: {route_count} associated routes")
            raise ConflictError(
                f"Cannot delete driver with id {driver_id} because they have associated routes"
            )

        db.session.delete(driver)
        logger.info(f"Driver {driver.name} (ID: {driver_id}) deleted")
        return True
