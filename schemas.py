"""
Request Payload Schemas

Each Pydantic model describes one JSON payload accepted by the API.
Create payloads carry every required field; Update payloads are sparse
merge-patches where only the keys the caller sent are applied
(see `UpdatePayload.changes`). A key sent as null is distinct from a key
that was left out.
"""

from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from models import AvailabilityStatus, RouteStatus
from timezone_utils import to_local_naive

TWO_PLACES = Decimal('0.01')
MAX_DISTANCE = Decimal('100000000')  # NUMERIC(10, 2)


def quantize_distance(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round a distance to two places; the rounded value must still be positive"""
    if value is None:
        return value
    quantized = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if quantized <= 0:
        raise ValueError("Distance must be positive")
    return quantized


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("Field may not be null")
    return value


class Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class UpdatePayload(Payload):

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly supplied by the caller, explicit nulls included"""
        return self.model_dump(exclude_unset=True)


# Users

class UserCreate(Payload):
    name: str = Field(..., min_length=1, description="Full name")
    email: EmailStr = Field(..., description="Contact email")
    phone: str = Field(..., min_length=1, description="Contact number")
    address: str = Field(..., min_length=1, description="Postal address")


class UserUpdate(UpdatePayload):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = Field(None, min_length=1)

    @field_validator('name', 'email', 'phone', 'address', mode='before')
    @classmethod
    def reject_null_fields(cls, value):
        return reject_null(value)


# Drivers

class DriverCreate(Payload):
    name: str = Field(..., min_length=1, description="Full name")
    email: EmailStr = Field(..., description="Contact email")
    phone: str = Field(..., min_length=1, description="Contact number")
    license_number: str = Field(..., min_length=1, description="Driving licence number")
    vehicle_make: str = Field(..., min_length=1)
    vehicle_model: str = Field(..., min_length=1)
    vehicle_license_plate: str = Field(..., min_length=1)
    availability_status: AvailabilityStatus = Field(
        AvailabilityStatus.AVAILABLE, description="Whether the driver can take new routes"
    )


class DriverUpdate(UpdatePayload):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    license_number: Optional[str] = Field(None, min_length=1)
    vehicle_make: Optional[str] = Field(None, min_length=1)
    vehicle_model: Optional[str] = Field(None, min_length=1)
    vehicle_license_plate: Optional[str] = Field(None, min_length=1)
    availability_status: Optional[AvailabilityStatus] = None

    @field_validator(
        'name', 'email', 'phone', 'license_number', 'vehicle_make',
        'vehicle_model', 'vehicle_license_plate', 'availability_status', mode='before'
    )
    @classmethod
    def reject_null_fields(cls, value):
        return reject_null(value)


# Routes

class RouteCreate(Payload):
    driver_id: int = Field(..., description="Assigned driver id")
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    distance: Decimal = Field(..., gt=0, lt=MAX_DISTANCE, description="Distance in km")
    estimated_duration: int = Field(..., gt=0, description="Estimated duration in minutes")
    start_datetime: datetime
    end_datetime: Optional[datetime] = None
    route_status: RouteStatus = RouteStatus.PENDING

    @field_validator('distance')
    @classmethod
    def round_distance(cls, value):
        return quantize_distance(value)

    @field_validator('start_datetime', 'end_datetime')
    @classmethod
    def normalize_datetime(cls, value):
        return to_local_naive(value)


class RouteUpdate(UpdatePayload):
    driver_id: Optional[int] = None
    origin: Optional[str] = Field(None, min_length=1)
    destination: Optional[str] = Field(None, min_length=1)
    distance: Optional[Decimal] = Field(None, gt=0, lt=MAX_DISTANCE)
    estimated_duration: Optional[int] = Field(None, gt=0)
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None  # null clears the field
    route_status: Optional[RouteStatus] = None

    @field_validator(
        'driver_id', 'origin', 'destination', 'distance', 'estimated_duration',
        'start_datetime', 'route_status', mode='before'
    )
    @classmethod
    def reject_null_fields(cls, value):
        return reject_null(value)

    @field_validator('distance')
    @classmethod
    def round_distance(cls, value):
        return quantize_distance(value)

    @field_validator('start_datetime', 'end_datetime')
    @classmethod
    def normalize_datetime(cls, value):
        return to_local_naive(value)


# Reports

class RouteReportFilter(Payload):
    driver_id: Optional[int] = None
    start_date: Optional[datetime] = Field(None, description="Routes starting at or after")
    end_date: Optional[datetime] = Field(None, description="Routes starting at or before")
    route_status: Optional[RouteStatus] = None

    @field_validator('start_date', 'end_date', mode='before')
    @classmethod
    def date_means_midnight(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        if isinstance(value, str) and len(value.strip()) == 10:
            return f"{value.strip()}T00:00:00"
        return value

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_datetime(cls, value):
        return to_local_naive(value)


def parse_payload(schema_cls, data):
    """
    Validate raw input against a payload schema.

    Args:
        schema_cls: Payload subclass to validate against
        data: dict from a JSON body / query string, or an already-built payload

    Returns:
        Validated schema instance

    Raises:
        ValidationFailure: with one entry per offending field
    """
    from services.errors import ValidationFailure

    if isinstance(data, schema_cls):
        return data
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationFailure("Payload must be a JSON object")

    try:
        return schema_cls.model_validate(data)
    except ValidationError as e:
        details = [
            {
                'field': '.'.join(str(part) for part in error['loc']) or '__root__',
                'message': error['msg']
            }
            for error in e.errors()
        ]
        raise ValidationFailure(f"Invalid {schema_cls.__name__} payload", details) from e
