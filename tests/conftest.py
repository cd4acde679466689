from unittest.mock import Mock

import pytest

from app import create_app
from config import TestConfig
from extensions import db, notifier
from services.credentials import CredentialStore
from services.tickets import TicketService


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
    yield app
    notifier.flush(timeout=5)
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Application context for tests that call services directly.

    HTTP tests must not use it: requests would share its ``g`` and with it
    Flask-Login's cached user.
    """
    with app.app_context():
        yield
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mailer(app):
    mailer = Mock()
    notifier.mailer = mailer
    return mailer


@pytest.fixture
def broadcaster(app):
    broadcaster = Mock()
    notifier.broadcaster = broadcaster
    return broadcaster


@pytest.fixture
def store(ctx):
    return CredentialStore()


@pytest.fixture
def tickets(ctx, mailer, broadcaster):
    return TicketService(notifier)


@pytest.fixture
def make_user(store):
    counter = iter(range(1, 1000))

    def _make_user(role='customer', email=None, password='secret123'):
        email = email or f'{role}{next(counter)}@example.com'
        return store.register(role.title(), email, password, role)
    return _make_user


@pytest.fixture
def register(client):
    """Register through the API and return ``(headers, profile)``."""
    counter = iter(range(1, 1000))

    def _register(role='customer', email=None, password='secret123'):
        email = email or f'{role}{next(counter)}@example.com'
        resp = client.post('/api/auth/register', json={
            'name': role.title(),
            'email': email,
            'password': password,
            'role': role,
        })
        assert resp.status_code == 201, resp.get_json()
        headers = {'Authorization': f"Bearer {resp.get_json()['token']}"}
        profile = client.get('/api/users/profile', headers=headers).get_json()
        return headers, profile
    return _register
