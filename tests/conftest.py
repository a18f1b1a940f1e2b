import pytest
from werkzeug.security import generate_password_hash

from config import Config
from fitto import create_app
from fitto.extensions import db
from fitto.models.user import User


class ConfigForTests(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    GEMINI_API_KEY = "test-gemini-key"
    NINJAS_API_KEY = "test-ninjas-key"
    USDA_API_KEY = "test-usda-key"
    AI_MAX_RETRIES = 1


@pytest.fixture()
def app():
    app = create_app(ConfigForTests)
    with app.app_context():
        db.create_all()
        # seed user without profile
        db.session.add(User(username="demo", email="demo@example.com", password=generate_password_hash("secret")))
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, username="demo", password="secret"):
    r = client.post("/api/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.data
    return r.get_json()["token"]


@pytest.fixture()
def headers(client):
    return {"Authorization": f"Bearer {login(client)}"}


SETUP_BODY = {
    "age": 30,
    "height": 175,
    "weight": 70,
    "gender": "male",
    "activityLevel": "moderately_active",
    "goal": "maintain",
}


@pytest.fixture()
def setup_user(client, headers):
    r = client.put("/api/user/setup-complete", json=SETUP_BODY, headers=headers)
    assert r.status_code == 200, r.data
    return headers
