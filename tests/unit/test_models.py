"""
Unit tests for database models
"""

import pytest
from datetime import datetime
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from models import Driver, Route, AvailabilityStatus, RouteStatus, apply_changes
from tests.factories import UserFactory, DriverFactory, UnavailableDriverFactory, RouteFactory


class TestUserModel:
    """Test User model functionality"""

    def test_create_user(self, db_session):
        """Test user creation"""
        user = UserFactory(name='Test User')

        assert user.id is not None
        assert user.created_at is not None
        assert user.to_dict()['name'] == 'Test User'

    def test_user_string_representation(self, db_session):
        user = UserFactory(email='someone@example.com')

        assert repr(user) == f'<User {user.id} someone@example.com>'


class TestDriverModel:
    """Test Driver model functionality"""

    def test_default_availability(self, db_session):
        """Drivers saved without a status are available"""
        driver = Driver(
            name='Plain Driver', email='plain@example.com', phone='555-0000',
            license_number='DL000001', vehicle_make='Honda', vehicle_model='Civic',
            vehicle_license_plate='KA01ZZ0001'
        )
        db_session.add(driver)
        db_session.commit()

        assert driver.availability_status == AvailabilityStatus.AVAILABLE
        assert driver.is_available is True

    def test_unavailable_driver(self, db_session):
        driver = UnavailableDriverFactory()

        assert driver.is_available is False
        assert driver.to_dict()['availability_status'] == 'unavailable'

    def test_to_dict_fields(self, db_session):
        driver = DriverFactory()
        data = driver.to_dict()

        assert set(data) == {
            'id', 'name', 'email', 'phone', 'license_number', 'vehicle_make',
            'vehicle_model', 'vehicle_license_plate', 'availability_status', 'created_at'
        }
        assert data['vehicle_make'] == 'Toyota'


class TestRouteModel:
    """Test Route model functionality"""

    def test_create_route(self, db_session, route, driver):
        assert route.id is not None
        assert route.driver_id == driver.id
        assert route.route_status == RouteStatus.PENDING
        assert route.created_at is not None

    def test_distance_is_exact_decimal(self, db_session, driver):
        route = RouteFactory(driver=driver, distance=Decimal('7.95'))
        db_session.expire_all()

        stored = db_session.get(Route, route.id)

        assert stored.distance == Decimal('7.95')
        assert stored.to_dict()['distance'] == 7.95

    @pytest.mark.parametrize('status, deletable', [
        (RouteStatus.PENDING, True),
        (RouteStatus.CANCELLED, True),
        (RouteStatus.IN_PROGRESS, False),
        (RouteStatus.COMPLETED, False),
    ])
    def test_is_deletable(self, db_session, driver, status, deletable):
        route = RouteFactory(driver=driver, route_status=status)

        assert route.is_deletable is deletable

    def test_to_dict_with_driver(self, db_session, route, driver):
        data = route.to_dict(include_driver=True)

        assert data['driver']['id'] == driver.id
        assert data['start_datetime'] == '2024-01-15T09:00:00'
        assert data['end_datetime'] is None
        assert 'driver' not in route.to_dict()

    def test_positive_distance_constraint(self, db_session, driver):
        db_session.add(Route(
            driver_id=driver.id, origin='A', destination='B', distance=Decimal('0'),
            estimated_duration=10, start_datetime=datetime(2024, 1, 1, 8, 0)
        ))

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_apply_changes_only_touches_given_keys(self, db_session, driver):
        route = RouteFactory(driver=driver, end_datetime=datetime(2024, 1, 15, 11, 0))

        apply_changes(route, {'origin': 'Depot', 'end_datetime': None})

        assert route.origin == 'Depot'
        assert route.end_datetime is None
        assert route.estimated_duration == 30
