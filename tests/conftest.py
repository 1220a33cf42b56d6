"""
Pytest configuration and fixtures
"""
import pytest

from solar_scheduler import create_app, db


@pytest.fixture(scope="function")
def app():
    """Application backed by a fresh in-memory database"""
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client signed in as owner@example.com"""
    response = client.post('/auth/sign-in', json={'email': 'owner@example.com', 'name': 'Owner'})
    assert response.status_code == 200
    return client


@pytest.fixture
def owner(ctx):
    from solar_scheduler.session import UserSession
    return UserSession().sign_in('owner@example.com', 'Owner')
