from enum import Enum
from app import db
from sqlalchemy import Index, CheckConstraint
from timezone_utils import get_local_time_naive

# Enums for better data integrity
class AvailabilityStatus(Enum):
    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'

class RouteStatus(Enum):
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

# Routes in these states are kept as historical record
PROTECTED_ROUTE_STATUSES = (RouteStatus.IN_PROGRESS, RouteStatus.COMPLETED)

def _enum_values(enum_cls):
    return [member.value for member in enum_cls]

def _isoformat(value):
    return value.isoformat() if value else None

class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    phone = db.Column(db.Text, nullable=False)
    address = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=get_local_time_naive, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'created_at': _isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<User {self.id} {self.email}>'

class Driver(db.Model):
    __tablename__ = 'drivers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    phone = db.Column(db.Text, nullable=False)
    license_number = db.Column(db.Text, nullable=False)

    # Vehicle details
    vehicle_make = db.Column(db.Text, nullable=False)
    vehicle_model = db.Column(db.Text, nullable=False)
    vehicle_license_plate = db.Column(db.Text, nullable=False)

    availability_status = db.Column(
        db.Enum(AvailabilityStatus, name='driver_availability_status', values_callable=_enum_values),
        nullable=False, default=AvailabilityStatus.AVAILABLE, index=True
    )
    created_at = db.Column(db.DateTime, default=get_local_time_naive, nullable=False)

    routes = db.relationship('Route', back_populates='driver', passive_deletes='all')

    @property
    def is_available(self):
        return self.availability_status == AvailabilityStatus.AVAILABLE

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'license_number': self.license_number,
            'vehicle_make': self.vehicle_make,
            'vehicle_model': self.vehicle_model,
            'vehicle_license_plate': self.vehicle_license_plate,
            'availability_status': self.availability_status.value,
            'created_at': _isoformat(self.created_at)
        }

    def __repr__(self):
        return f'<Driver {self.id} {self.name}>'

class Route(db.Model):
    __tablename__ = 'routes'

    id = db.Column(db.Integer, primary_key=True)
    driver_id = db.Column(db.Integer, db.ForeignKey('drivers.id'), nullable=False, index=True)
    origin = db.Column(db.Text, nullable=False)
    destination = db.Column(db.Text, nullable=False)
    distance = db.Column(db.Numeric(10, 2), nullable=False)  # km
    estimated_duration = db.Column(db.Integer, nullable=False)  # minutes
    start_datetime = db.Column(db.DateTime, nullable=False)
    end_datetime = db.Column(db.DateTime)  # Null while pending or in transit
    route_status = db.Column(
        db.Enum(RouteStatus, name='route_status', values_callable=_enum_values),
        nullable=False, default=RouteStatus.PENDING, index=True
    )
    created_at = db.Column(db.DateTime, default=get_local_time_naive, nullable=False)

    driver = db.relationship('Driver', back_populates='routes')

    __table_args__ = (
        CheckConstraint('distance > 0', name='check_route_distance_positive'),
        CheckConstraint('estimated_duration > 0', name='check_route_duration_positive'),
        Index('idx_route_start_status', 'start_datetime', 'route_status'),
    )

    @property
    def is_deletable(self):
        return self.route_status not in PROTECTED_ROUTE_STATUSES

    def to_dict(self, include_driver=False):
        data = {
            'id': self.id,
            'driver_id': self.driver_id,
            'origin': self.origin,
            'destination': self.destination,
            # float repr is the shortest round-trip text, so 7.95 renders as 7.95
            'distance': float(self.distance),
            'estimated_duration': self.estimated_duration,
            'start_datetime': _isoformat(self.start_datetime),
            'end_datetime': _isoformat(self.end_datetime),
            'route_status': self.route_status.value,
            'created_at': _isoformat(self.created_at)
        }
        if include_driver:
            data['driver'] = self.driver.to_dict() if self.driver else None
        return data

    def __repr__(self):
        return f'<Route {self.id} {self.origin} -> {self.destination}>'

def apply_changes(record, changes):
    """Copy a merge-patch onto a loaded row; keys absent from `changes` are untouched"""
    for field_name, value in changes.items():
        setattr(record, field_name, value)
    return record
