"""
User Administration Services
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quotewall.errors import (
    DuplicateEmail, InvalidRole, SelfDeletion, StoreError, UserNotFound,
)
from quotewall.extensions import db
from quotewall.models import User, Role

logger = logging.getLogger(__name__)


def list_users():
    return User.query.order_by(User.id).all()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise UserNotFound()
    return user


def set_role(user_id, role):
    """Overwrite a user's role; only the known roles are accepted."""
    if role not in Role.values():
        raise InvalidRole(f'Unknown role: {role!r}')

    user = get_user(user_id)
    old_role = user.role
    user.role = role
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not change role of user %s', user_id)
        raise StoreError() from e

    logger.info('User %s role changed from %s to %s', user_id, old_role, role)
    return user


def delete_user(user_id, acting_user_id):
    """Delete a user other than the acting admin.

    The user's likes go with them; quotes they wrote stay, with their
    author reset to NULL.
    """
    if user_id == acting_user_id:
        raise SelfDeletion()

    user = get_user(user_id)
    try:
        db.session.delete(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not delete user %s', user_id)
        raise StoreError() from e

    logger.info('User %s deleted by %s', user_id, acting_user_id)


def update_profile(user_id, username, email):
    """Overwrite username and email, keeping emails unique."""
    user = get_user(user_id)
    clash = User.query.filter(User.email == email, User.id != user_id).first()
    if clash is not None:
        raise DuplicateEmail()

    user.username = username
    user.email = email
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateEmail()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Could not update user %s', user_id)
        raise StoreError() from e

    logger.info('User %s profile updated', user_id)
    return user
