from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from budgetplanner import create_app, clock
from budgetplanner.config import TestConfig
from budgetplanner.extensions import db

UTC = ZoneInfo("UTC")


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin the planner clock; returns a setter for changing the instant."""
    state = {"now": datetime(2024, 6, 10, 9, 30, tzinfo=UTC)}
    monkeypatch.setattr(clock, "now", lambda: state["now"])

    def set_now(value):
        state["now"] = value
        return value

    return set_now


@pytest.fixture
def client(app, frozen_now):
    return app.test_client()


def register_and_login(client, username, password="secret"):
    client.post("/api/register", json={"username": username, "email": f"{username}@example.com", "password": password})
    resp = client.post("/api/login", json={"identifier": username, "password": password})
    assert resp.status_code == 200
    return client


@pytest.fixture
def auth_client(client):
    return register_and_login(client, "alice")
