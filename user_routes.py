"""
User API Module
CRUD endpoints for user records
"""

from flask import Blueprint, jsonify

from services.errors import NotFoundError
from services.user_service import UserService
from utils.api_helpers import get_json_payload

user_bp = Blueprint('users', __name__, url_prefix='/api/v1/users')
user_service = UserService()

@user_bp.route('', methods=['POST'])
def create_user():
    user = user_service.create_user(get_json_payload())
    return jsonify({'success': True, 'user': user.to_dict()}), 201

@user_bp.route('', methods=['GET'])
def list_users():
    users = user_service.list_users()
    return jsonify({'success': True, 'users': [user.to_dict() for user in users]})

@user_bp.route('/<int:user_id>', methods=['GET'])
def get_user(user_id):
    user = user_service.get_user(user_id)
    if not user:
        raise NotFoundError('User', user_id)
    return jsonify({'success': True, 'user': user.to_dict()})

@user_bp.route('/<int:user_id>', methods=['PATCH'])
def update_user(user_id):
    user = user_service.update_user(user_id, get_json_payload())
    return jsonify({'success': True, 'user': user.to_dict()})

@user_bp.route('/<int:user_id>', methods=['DELETE'])
def delete_user(user_id):
    user_service.delete_user(user_id)
    return jsonify({'success': True})
