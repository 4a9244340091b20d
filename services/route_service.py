"""
Route Service

Handles delivery route lifecycle: assignment to an available driver,
partial updates (including driver reassignment), and deletion rules that
keep in-progress and completed routes as historical record.

Driver availability is only ever read here. Creating, reassigning,
cancelling or deleting a route never changes the driver's status.
"""

from typing import Any, List, Optional
import logging
from models import db, Driver, Route, apply_changes
from schemas import RouteCreate, RouteUpdate, parse_payload
from .errors import NotFoundError, ConflictError
from .query_filters import joined_route_query
from .transaction_helper import TransactionHelper

logger = logging.getLogger(__name__)

class RouteService:
    """Service class for route management operations"""

    @TransactionHelper.with_transaction
    def create_route(self, payload: Any) -> Route:
        """
        Create a route for an available driver.

        Args:
            payload: RouteCreate or a dict of its fields

        Returns:
            Route: the persisted route; distance is an exact two-place Decimal

        Raises:
            ValidationFailure: malformed input (checked before any lookup)
            NotFoundError: driver_id does not resolve
            ConflictError: the driver is not available
        """
        data = parse_payload(RouteCreate, payload)

        driver = db.session.get(Driver, data.driver_id)
        if not driver:
            raise NotFoundError('Driver', data.driver_id)

        if not driver.is_available:
            logger.warning(f"Route rejected: driver {driver.id} is {driver.availability_status.value}")
            raise ConflictError(f"Driver with id {driver.id} is not available")

        route = Route(**data.model_dump())
        db.session.add(route)
        db.session.flush()

        logger.info(f"Route {route.id} ({route.origin} -> {route.destination}) assigned to driver {driver.id}")
        return route

    @TransactionHelper.with_storage_errors
    def list_routes(self) -> List[Route]:
        """All routes with their driver attached, in insertion order"""
        return joined_route_query().order_by(Route.id).all()

    @TransactionHelper.with_storage_errors
    def get_route(self, route_id: int) -> Optional[Route]:
        """Route with its driver attached, or None"""
        return joined_route_query().filter(Route.id == route_id).first()

    @TransactionHelper.with_transaction
    def update_route(self, route_id: int, payload: Any) -> Route:
        """
        Apply a partial update to a route.

        A new driver_id must reference an existing driver, but unlike
        creation the driver does not have to be available. Sending
        end_datetime as null clears it; leaving it out keeps it.

        Raises:
            ValidationFailure: malformed patch
            NotFoundError: route or new driver does not exist
        """
        changes = parse_payload(RouteUpdate, payload).changes()

        route = db.session.get(Route, route_id)
        if not route:
            raise NotFoundError('Route', route_id)

        new_driver_id = changes.get('driver_id')
        if new_driver_id is not None and db.session.get(Driver, new_driver_id) is None:
            raise NotFoundError('Driver', new_driver_id)

        if not changes:
            return route

        apply_changes(route, changes)
        db.session.flush()

        logger.info(f"Route {route_id} updated: {', '.join(sorted(changes))}")
        return route

    @TransactionHelper.with_transaction
    def delete_route(self, route_id: int) -> bool:
        """
        Delete a pending or cancelled route.

        Raises:
            NotFoundError: no route with `route_id`
            ConflictError: the route is in progress or completed
        """
        route = db.session.get(Route, route_id)
        if not route:
            raise NotFoundError('Route', route_id)

        if not route.is_deletable:
            status = route.route_status.value
            logger.warning(f"Refused to delete route {route_id} with status {status}")
            raise ConflictError(
                f"Cannot delete route with status '{status}'. "
                f"Only pending and cancelled routes can be deleted."
            )

        db.session.delete(route)
        logger.info(f"Route {route_id} deleted")
        return True
