import pytest
from werkzeug.security import generate_password_hash

from quotewall import create_app
from quotewall.config import TestConfig
from quotewall.extensions import db
from quotewall.models import User, Quote


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Create a user and return its id."""
    def _make_user(username, email, password='pass', role='user'):
        with app.app_context():
            u = User(username=username, email=email,
                     password_hash=generate_password_hash(password), role=role)
            db.session.add(u)
            db.session.commit()
            return u.id
    return _make_user


@pytest.fixture()
def make_quote(app):
    """Create a quote and return its id."""
    def _make_quote(body, created_at=None):
        with app.app_context():
            q = Quote(quote=body)
            if created_at is not None:
                q.created_at = created_at
            db.session.add(q)
            db.session.commit()
            return q.id
    return _make_quote


@pytest.fixture()
def login(client):
    def _login(email, password='pass'):
        return client.post('/login', data={'email': email, 'password': password})
    return _login
