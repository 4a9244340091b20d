"""
Unit tests for route filter composition
"""

from datetime import datetime

from models import Route, RouteStatus
from schemas import RouteReportFilter
from services.query_filters import build_route_conditions, joined_route_query
from tests.factories import DriverFactory, RouteFactory


def _matching_ids(**criteria):
    conditions = build_route_conditions(RouteReportFilter(**criteria))
    return [route.id for route in joined_route_query().filter(*conditions).order_by(Route.id)]


def test_empty_filter_has_no_conditions():
    assert build_route_conditions(RouteReportFilter()) == []


def test_each_supplied_field_adds_one_condition():
    report_filter = RouteReportFilter(
        driver_id=1,
        start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 1, 31),
        route_status=RouteStatus.PENDING
    )

    assert len(build_route_conditions(report_filter)) == 4


def test_date_bounds_are_inclusive(db_session, driver):
    on_start = RouteFactory(driver=driver, start_datetime=datetime(2024, 1, 1, 0, 0))
    on_end = RouteFactory(driver=driver, start_datetime=datetime(2024, 1, 31, 0, 0))
    RouteFactory(driver=driver, start_datetime=datetime(2024, 2, 1, 0, 0))

    assert _matching_ids(start_date='2024-01-01', end_date='2024-01-31') == [on_start.id, on_end.id]


def test_end_date_bounds_start_time(db_session, driver):
    route = RouteFactory(
        driver=driver,
        start_datetime=datetime(2024, 1, 10, 8, 0),
        end_datetime=datetime(2024, 1, 12, 8, 0)
    )

    assert _matching_ids(end_date='2024-01-11') == [route.id]


def test_conditions_are_combined_with_and(db_session):
    first_driver = DriverFactory()
    second_driver = DriverFactory()
    wanted = RouteFactory(driver=first_driver, route_status=RouteStatus.COMPLETED)
    RouteFactory(driver=first_driver, route_status=RouteStatus.PENDING)
    RouteFactory(driver=second_driver, route_status=RouteStatus.COMPLETED)

    assert _matching_ids(driver_id=first_driver.id, route_status='completed') == [wanted.id]


def test_joined_query_populates_driver(db_session, route, driver):
    fetched = joined_route_query().filter(Route.id == route.id).one()

    assert fetched.driver is driver
