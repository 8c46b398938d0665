import pytest

from msfeedback import create_app
from msfeedback.extensions import db
from msfeedback.services import external_service
from tests.helpers import login, register


@pytest.fixture()
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_headers(client):
    r = register(client)
    assert r.status_code == 201, r.data
    token = login(client).get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_api_key(app):
    """Create an external system and return a raw key for it."""
    def _make(name="partner", permissions=("feedback:submit", "feedback:query"), enabled=True):
        with app.app_context():
            system = external_service.create_system(name, permissions)
            if not enabled:
                external_service.set_system_status(system, False)
            _, raw_key = external_service.issue_key(system)
        return raw_key
    return _make
