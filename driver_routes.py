"""
Driver API Module
Driver registration, profile updates, availability and removal
"""

from flask import Blueprint, request, jsonify

from services.errors import NotFoundError
from services.driver_service import DriverService
from utils.api_helpers import get_json_payload

driver_bp = Blueprint('drivers', __name__, url_prefix='/api/v1/drivers')
driver_service = DriverService()

@driver_bp.route('', methods=['POST'])
def create_driver():
    """Register a driver with vehicle details"""
    driver = driver_service.create_driver(get_json_payload())
    return jsonify({'success': True, 'driver': driver.to_dict()}), 201

@driver_bp.route('', methods=['GET'])
def list_drivers():
    """List drivers, optionally only those with a given availability_status"""
    availability_status = request.args.get('availability_status') or None
    drivers = driver_service.list_drivers(availability_status=availability_status)
    return jsonify({
        'success': True,
        'drivers': [driver.to_dict() for driver in drivers]
    })

@driver_bp.route('/<int:driver_id>', methods=['GET'])
def get_driver(driver_id):
    driver = driver_service.get_driver(driver_id)
    if not driver:
        raise NotFoundError('Driver', driver_id)
    return jsonify({'success': True, 'driver': driver.to_dict()})

@driver_bp.route('/<int:driver_id>', methods=['PATCH'])
def update_driver(driver_id):
    """Partial update: only the fields sent are changed"""
    driver = driver_service.update_driver(driver_id, get_json_payload())
    return jsonify({'success': True, 'driver': driver.to_dict()})

@driver_bp.route('/<int:driver_id>', methods=['DELETE'])
def delete_driver(driver_id):
    """Remove a driver; refused while any route references them"""
    driver_service.delete_driver(driver_id)
    return jsonify({'success': True})
