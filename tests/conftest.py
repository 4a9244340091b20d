"""
Pytest configuration and fixtures for Fleet Manager testing
"""

import pytest
import os

# Set test environment before importing app
os.environ.update({
    'FLASK_ENV': 'testing',
    'TESTING': 'true',
    'DATABASE_URL': 'sqlite:///:memory:',
    'APP_TIMEZONE': 'UTC',
    'LOG_LEVEL': 'WARNING'
})

from app import create_app, db
from tests.factories import DriverFactory, UnavailableDriverFactory, RouteFactory


@pytest.fixture(scope='function')
def app():
    """Create application for testing"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create database session for testing"""
    yield db.session
    db.session.rollback()


# Fixtures for test data
@pytest.fixture
def driver(db_session):
    """Create an available driver"""
    return DriverFactory()


@pytest.fixture
def unavailable_driver(db_session):
    """Create an unavailable driver"""
    return UnavailableDriverFactory()


@pytest.fixture
def route(db_session, driver):
    """Create a pending route for the available driver"""
    return RouteFactory(driver=driver)


@pytest.fixture
def driver_payload():
    """Valid driver creation payload"""
    return {
        'name': 'John Doe',
        'email': 'john@example.com',
        'phone': '123-456-7890',
        'license_number': 'DL123456',
        'vehicle_make': 'Toyota',
        'vehicle_model': 'Camry',
        'vehicle_license_plate': 'ABC123'
    }


@pytest.fixture
def route_payload(driver):
    """Valid route creation payload for the available driver"""
    return {
        'driver_id': driver.id,
        'origin': 'Warehouse A',
        'destination': 'Store B',
        'distance': 25.5,
        'estimated_duration': 45,
        'start_datetime': '2024-01-15T09:00:00'
    }
