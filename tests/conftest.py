"""
Shared fixtures: an app on in-memory sqlite, a test client and two users
with bearer tokens.

No app context stays pushed while the client runs; a pushed context would be
reused by every request and leak the logged-in user between them. Tests that
touch the database directly open their own ``app.app_context()``.
"""
import pytest

from jobsearch_crm import create_app
from jobsearch_crm.models import db, User
from jobsearch_crm.utils.auth import create_access_token


def make_user(app, email, name):
    with app.app_context():
        user = User(email=email, name=name)
        user.set_password('secret123')
        db.session.add(user)
        db.session.commit()
        return user.id


def bearer(app, user_id):
    with app.app_context():
        return {'Authorization': f'Bearer {create_access_token(user_id)}'}


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    """Id of the main test user."""
    return make_user(app, 'alice@example.com', 'Alice')


@pytest.fixture
def auth_headers(app, user):
    return bearer(app, user)


@pytest.fixture
def other_user(app):
    return make_user(app, 'bob@example.com', 'Bob')


@pytest.fixture
def other_headers(app, other_user):
    return bearer(app, other_user)
