import pytest

from backoffice import create_app, db
from backoffice.store import get_store


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return get_store()


@pytest.fixture
def auth_headers(app):
    return {'Authorization': f"Bearer {app.config['DEMO_TOKEN']}"}


@pytest.fixture
def room(store):
    return store.add_room(number='101', room_type='double', capacity=2, base_price=100)
