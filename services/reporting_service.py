"""
Reporting Service

Route reports: filters the joined route/driver scan and summarises the
matching routes by status, distance and duration.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List
import logging
from models import Route, RouteStatus
from schemas import RouteReportFilter, parse_payload
from .query_filters import build_route_conditions, joined_route_query
from .transaction_helper import TransactionHelper

logger = logging.getLogger(__name__)

ZERO_DISTANCE = Decimal('0.00')

@dataclass
class RouteReportSummary:
    """Aggregates over the routes matched by a report filter"""

    total_routes: int = 0
    completed_routes: int = 0
    pending_routes: int = 0
    in_progress_routes: int = 0
    cancelled_routes: int = 0
    total_distance: Decimal = ZERO_DISTANCE
    total_duration: int = 0
    routes: List[Route] = field(default_factory=list)

    @property
    def average_distance(self) -> Decimal:
        if not self.total_routes:
            return ZERO_DISTANCE
        return (self.total_distance / self.total_routes).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_routes': self.total_routes,
            'completed_routes': self.completed_routes,
            'pending_routes': self.pending_routes,
            'in_progress_routes': self.in_progress_routes,
            'cancelled_routes': self.cancelled_routes,
            'total_distance': float(self.total_distance),
            'total_duration': self.total_duration,
            'average_distance': float(self.average_distance),
            'routes': [route.to_dict(include_driver=True) for route in self.routes]
        }

class ReportingService:
    """Service class for route reporting"""

    @TransactionHelper.with_storage_errors
    def generate_route_report(self, report_filter: Any = None) -> RouteReportSummary:
        """
        Build a route report.

        Args:
            report_filter: RouteReportFilter or a dict with any of driver_id,
                start_date, end_date, route_status. Supplied fields are ANDed;
                an empty filter covers every route.

        Returns:
            RouteReportSummary: zero counts and an empty list when nothing
            matches, including for an unknown driver id
        """
        criteria = parse_payload(RouteReportFilter, report_filter)
        conditions = build_route_conditions(criteria)

        routes = joined_route_query().filter(*conditions).order_by(Route.id).all()

        status_counts = Counter(route.route_status for route in routes)
        summary = RouteReportSummary(
            total_routes=len(routes),
            completed_routes=status_counts[RouteStatus.COMPLETED],
            pending_routes=status_counts[RouteStatus.PENDING],
            in_progress_routes=status_counts[RouteStatus.IN_PROGRESS],
            cancelled_routes=status_counts[RouteStatus.CANCELLED],
            total_distance=sum((route.distance for route in routes), ZERO_DISTANCE),
            total_duration=sum(route.estimated_duration for route in routes),
            routes=routes
        )

        logger.info(
            f"Route report generated: {summary.total_routes} routes, "
            f"{summary.total_distance} km, filters={sorted(criteria.model_dump(exclude_none=True))}"
        )
        return summary
