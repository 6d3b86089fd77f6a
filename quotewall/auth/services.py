"""
Auth Services

Registration, login and logout. Routes call these and turn the raised
errors into form messages.
"""

import logging

from flask import session
from flask_login import login_user, logout_user
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from quotewall.errors import DuplicateEmail, InvalidCredentials, StoreError
from quotewall.extensions import db
from quotewall.models import User, Role

logger = logging.getLogger(__name__)

# Checked when the email is unknown so both failure paths cost one hash check
_DUMMY_HASH = generate_password_hash('not-a-real-password')


def find_user_by_email(email):
    return User.query.filter_by(email=email).first()


def register(username, email, password):
    """Create an account with the default ``user`` role.

    Raises ``DuplicateEmail`` when the email is taken; the store is left
    untouched in that case.
    """
    if find_user_by_email(email):
        raise DuplicateEmail()

    user = User(
        username=username,
        email=email,
        password_hash=generate_password_hash(password),
        role=Role.USER.value,
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Lost a race with another registration for the same email
        db.session.rollback()
        raise DuplicateEmail()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Registration failed for %s', email)
        raise StoreError() from e

    logger.info('Registered user %s (id=%s)', email, user.id)
    return user


def login(email, password):
    """Verify credentials and start a session for the user.

    Unknown email and wrong password raise the same ``InvalidCredentials``.
    """
    user = find_user_by_email(email)
    password_hash = user.password_hash if user is not None else _DUMMY_HASH
    if not check_password_hash(password_hash, password) or user is None:
        logger.info('Failed login for %s', email)
        raise InvalidCredentials()

    session.clear()
    session.regenerate()
    session.permanent = True
    login_user(user)
    session['user'] = user.session_payload()
    logger.info('User %s logged in as %s', user.id, user.role)
    return user


def logout():
    """Destroy the session, whether or not anyone is logged in."""
    logout_user()
    session.clear()
    session.regenerate()
