import pytest

from app import create_app
from models import db


@pytest.fixture()
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, name="Ada Lovelace", email="ada@example.com", password="secret123", **extra):
    payload = {"name": name, "email": email, "password": password, **extra}
    return client.post("/api/auth/register", json=payload)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def learner(client):
    """A registered learner: ``(user_dict, headers)``."""
    response = register(client)
    data = response.get_json()["data"]
    return data["user"], bearer(data["token"])


@pytest.fixture()
def other_learner(client):
    response = register(client, name="Grace Hopper", email="grace@example.com")
    data = response.get_json()["data"]
    return data["user"], bearer(data["token"])
