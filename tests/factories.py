"""
factory_boy factories for Fleet Manager models
"""

from datetime import datetime
from decimal import Decimal

import factory
from factory import Faker

from app import db
from models import User, Driver, Route, AvailabilityStatus, RouteStatus


class UserFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        model = User
        sqlalchemy_session = db.session
        sqlalchemy_session_persistence = "commit"

    name = Faker('name')
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    phone = Faker('phone_number')
    address = Faker('address')


class DriverFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        model = Driver
        sqlalchemy_session = db.session
        sqlalchemy_session_persistence = "commit"

    name = Faker('name')
    email = factory.Sequence(lambda n: f"driver{n}@example.com")
    phone = Faker('phone_number')
    license_number = factory.Sequence(lambda n: f"DL{n:06d}")
    vehicle_make = "Toyota"
    vehicle_model = "Camry"
    vehicle_license_plate = factory.Sequence(lambda n: f"KA01AB{n:04d}")
    availability_status = AvailabilityStatus.AVAILABLE


class UnavailableDriverFactory(DriverFactory):
    availability_status = AvailabilityStatus.UNAVAILABLE


class RouteFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        model = Route
        sqlalchemy_session = db.session
        sqlalchemy_session_persistence = "commit"

    driver = factory.SubFactory(DriverFactory)
    origin = Faker('city')
    destination = Faker('city')
    distance = Decimal('10.50')
    estimated_duration = 30
    start_datetime = datetime(2024, 1, 15, 9, 0)
    end_datetime = None
    route_status = RouteStatus.PENDING
