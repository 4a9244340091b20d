"""
Delivery Route API Module
Endpoints for delivery routes; reads embed the assigned driver
"""

from flask import Blueprint, jsonify

from services.errors import NotFoundError
from services.route_service import RouteService
from utils.api_helpers import get_json_payload

delivery_bp = Blueprint('delivery_routes', __name__, url_prefix='/api/v1/routes')
route_service = RouteService()

@delivery_bp.route('', methods=['POST'])
def create_route():
    """Assign a new route to an available driver"""
    route = route_service.create_route(get_json_payload())
    return jsonify({'success': True, 'route': route.to_dict()}), 201

@delivery_bp.route('', methods=['GET'])
def list_routes():
    routes = route_service.list_routes()
    return jsonify({
        'success': True,
        'routes': [route.to_dict(include_driver=True) for route in routes]
    })

@delivery_bp.route('/<int:route_id>', methods=['GET'])
def get_route(route_id):
    route = route_service.get_route(route_id)
    if not route:
        raise NotFoundError('Route', route_id)
    return jsonify({'success': True, 'route': route.to_dict(include_driver=True)})

@delivery_bp.route('/<int:route_id>', methods=['PATCH'])
def update_route(route_id):
    """Partial update; send end_datetime as null to clear it"""
    route = route_service.update_route(route_id, get_json_payload())
    return jsonify({'success': True, 'route': route.to_dict()})

@delivery_bp.route('/<int:route_id>', methods=['DELETE'])
def delete_route(route_id):
    """Delete a pending or cancelled route"""
    route_service.delete_route(route_id)
    return jsonify({'success': True})
