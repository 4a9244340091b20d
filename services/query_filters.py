"""
Query filter composition for route lookups.

Turns a sparse RouteReportFilter into the SQLAlchemy clauses applied to the
joined route/driver scan. Every supplied field adds one clause; clauses are
combined with AND by the caller via ``query.filter(*conditions)``.
"""

from typing import List

from sqlalchemy.orm import contains_eager
from sqlalchemy.sql.elements import ColumnElement

from models import Driver, Route
from schemas import RouteReportFilter


def build_route_conditions(report_filter: RouteReportFilter) -> List[ColumnElement]:
    conditions = []

    if report_filter.driver_id is not None:
        conditions.append(Route.driver_id == report_filter.driver_id)

    if report_filter.start_date is not None:
        conditions.append(Route.start_datetime >= report_filter.start_date)

    # Both date bounds apply to the start time of the route
    if report_filter.end_date is not None:
        conditions.append(Route.start_datetime <= report_filter.end_date)

    if report_filter.route_status is not None:
        conditions.append(Route.route_status == report_filter.route_status)

    return conditions


def joined_route_query():
    """Routes inner-joined with their driver, driver eagerly populated from the join"""
    return Route.query.join(Driver, Route.driver_id == Driver.id) \
                      .options(contains_eager(Route.driver))
