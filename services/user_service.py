"""
User Service

Plain CRUD for user records. Users are not referenced by drivers or routes,
so deletion is unconditional once the user exists.
"""

from typing import Any, List, Optional
import logging
from models import db, User, apply_changes
from schemas import UserCreate, UserUpdate, parse_payload
from .errors import NotFoundError
from .transaction_helper import TransactionHelper

logger = logging.getLogger(__name__)

class UserService:
    """Service class for user management operations"""

    @TransactionHelper.with_transaction
    def create_user(self, payload: Any) -> User:
        data = parse_payload(UserCreate, payload)

        user = User(**data.model_dump())
        db.session.add(user)
        db.session.flush()

        logger.info(f"User {user.name} (ID: {user.id}) created")
        return user

    @TransactionHelper.with_storage_errors
    def list_users(self) -> List[User]:
        return User.query.order_by(User.id).all()

    @TransactionHelper.with_storage_errors
    def get_user(self, user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    @TransactionHelper.with_transaction
    def update_user(self, user_id: int, payload: Any) -> User:
        """
        Apply a partial update to a user.

        Raises:
            ValidationFailure: malformed patch
            NotFoundError: no user with `user_id`
        """
        changes = parse_payload(UserUpdate, payload).changes()

        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError('User', user_id)

        if changes:
            apply_changes(user, changes)
            logger.info(f"User {user_id} updated: {', '.join(sorted(changes))}")
        return user

    @TransactionHelper.with_transaction
    def delete_user(self, user_id: int) -> bool:
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError('User', user_id)

        db.session.delete(user)
        logger.info(f"User {user_id} deleted")
        return True
