from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import false
from sqlalchemy.exc import OperationalError

from conftest import SETUP_BODY, login
from fitto.controllers import auth_controller, home_controller
from fitto.extensions import db
from fitto.models.food_log import FoodLogEntry
from fitto.models.user import User
from fitto.models.weight_log import WeightLog
from fitto.services.fitness_constants import PLATEAU_ALERT, UNDER_EATING_ALERT


def test_register_and_login(client):
    r = client.post("/api/register", json={"username": "alice", "email": "Alice@Example.com", "password": "hunter22"})
    assert r.status_code == 201, r.data
    assert r.get_json()["user"]["email"] == "alice@example.com"

    r2 = client.post("/api/register", json={"username": "alice", "email": "other@example.com", "password": "hunter22"})
    assert r2.status_code == 409

    token = login(client, "alice", "hunter22")
    assert token


def test_login_rejects_bad_password(client):
    r = client.post("/api/login", json={"username": "demo", "password": "nope"})
    assert r.status_code == 401
    assert r.get_json()["error"]["code"] == "INVALID_CREDENTIALS"


def test_protected_route_requires_token(client):
    assert client.get("/api/user/profile").status_code == 401
    r = client.get("/api/user/profile", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401


def test_bare_token_header_is_accepted(client):
    token = login(client)
    r = client.get("/api/user/profile", headers={"Authorization": token})
    assert r.status_code == 200


def test_setup_complete_returns_budget(client, headers):
    body = dict(SETUP_BODY, goal="lose", rate=20)
    r = client.put("/api/user/setup-complete", json=body, headers=headers)
    assert r.status_code == 200, r.data
    data = r.get_json()
    assert data["bmr"] == pytest.approx(1648.75)
    assert data["tdee"] == pytest.approx(2044.45)


@pytest.mark.parametrize("override", [
    {"age": "30"},
    {"weight": 0},
    {"height": True},
    {"gender": "robot"},
    {"activityLevel": "couch_potato"},
    {"goal": "lose"},
    {"goal": "gain", "rate": 0},
])
def test_setup_rejects_invalid_input(client, headers, override):
    r = client.put("/api/user/setup-complete", json=dict(SETUP_BODY, **override), headers=headers)
    assert r.status_code == 400, r.data
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_profile_recomputes_macros(client, setup_user):
    r = client.get("/api/user/profile", headers=setup_user)
    assert r.status_code == 200
    data = r.get_json()
    assert data["tdee"] == pytest.approx(2555.5625)
    assert data["macros"] == {"carbs_g": 319, "protein_g": 192, "fat_g": 57}
    assert data["weight"] == 70


def test_weight_log_keeps_current_weight_in_sync(client, setup_user):
    r = client.post("/api/user/weight-log", json={"weight": 69.5}, headers=setup_user)
    assert r.status_code == 201, r.data
    data = r.get_json()
    assert data["currentWeight"] == 69.5
    # setup weight started the log
    assert [w["weight"] for w in data["weightLog"]] == [70, 69.5]

    # tdee follows the new weight
    profile = client.get("/api/user/profile", headers=setup_user).get_json()
    assert profile["bmr"] == pytest.approx(1648.75 - 5)

    last_id = data["weightLog"][-1]["id"]
    r2 = client.put(f"/api/user/weight-log/{last_id}", json={"weight": 68.0}, headers=setup_user)
    assert r2.get_json()["currentWeight"] == 68.0

    r3 = client.delete(f"/api/user/weight-log/{last_id}", headers=setup_user)
    assert r3.status_code == 200
    assert r3.get_json()["currentWeight"] == 70


def test_weight_log_uses_log_order_not_date(client, setup_user):
    old = (datetime.utcnow() - timedelta(days=30)).isoformat()
    r = client.post("/api/user/weight-log", json={"weight": 75.0, "date": old}, headers=setup_user)
    assert r.get_json()["currentWeight"] == 75.0


def test_weight_log_rejects_string_weight(client, setup_user):
    r = client.post("/api/user/weight-log", json={"weight": "72"}, headers=setup_user)
    assert r.status_code == 400


def test_weight_entry_not_found(client, setup_user):
    r = client.put("/api/user/weight-log/9999", json={"weight": 70}, headers=setup_user)
    assert r.status_code == 404


def test_target_weight(client, headers):
    r = client.put("/api/user/target-weight", json={"targetWeight": 65}, headers=headers)
    assert r.status_code == 200
    assert client.get("/api/user/target-weight", headers=headers).get_json()["targetWeight"] == 65


def test_food_log_add_list_delete(client, headers):
    r = client.post("/api/user/food-log", json={
        "meal": "breakfast", "name": "Oatmeal", "calories": 300, "carbs": 54, "protein": 10, "fat": 5
    }, headers=headers)
    assert r.status_code == 201, r.data
    entry_id = r.get_json()["entry"]["id"]

    today = datetime.utcnow().date().isoformat()
    log = client.get(f"/api/user/food-log?date={today}", headers=headers).get_json()
    assert [f["name"] for f in log["foodLog"]["breakfast"]] == ["Oatmeal"]
    assert log["foodLog"]["snacks"] == []
    assert log["totals"]["calories"] == 300

    assert client.delete(f"/api/user/food-log/lunch/{entry_id}", headers=headers).status_code == 404
    assert client.delete(f"/api/user/food-log/breakfast/{entry_id}", headers=headers).status_code == 200


def test_food_log_rejects_unknown_meal(client, headers):
    r = client.post("/api/user/food-log", json={"meal": "brunch", "name": "Eggs", "calories": 200}, headers=headers)
    assert r.status_code == 400


def test_food_log_bad_date(client, headers):
    assert client.get("/api/user/food-log?date=yesterday", headers=headers).status_code == 400


def test_dashboard_summary_rules(client, setup_user, app):
    with app.app_context():
        user = User.query.filter_by(username="demo").first()
        now = datetime.utcnow()
        for i, cals in enumerate([500, 600, 550]):
            db.session.add(FoodLogEntry(user_id=user.id, meal="lunch", name="Salad", calories=cals, date=now - timedelta(days=i)))
        db.session.add(WeightLog(user_id=user.id, weight=69.8, date=now))
        db.session.commit()

    r = client.get("/api/user/dashboard-summary", headers=setup_user)
    assert r.status_code == 200
    assert r.get_json()["alerts"] == [UNDER_EATING_ALERT, PLATEAU_ALERT]


def test_dashboard_summary_well_fed(client, setup_user, app):
    with app.app_context():
        user = User.query.filter_by(username="demo").first()
        now = datetime.utcnow()
        for i in range(3):
            db.session.add(FoodLogEntry(user_id=user.id, meal="dinner", name="Pasta", calories=2500, date=now - timedelta(days=i)))
        db.session.commit()

    r = client.get("/api/user/dashboard-summary", headers=setup_user)
    assert r.get_json()["alerts"] == []


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["database"] == "healthy"


def test_dashboard_plateau_ignores_weights_older_than_window(client, headers, app):
    with app.app_context():
        user = User.query.filter_by(username="demo").first()
        now = datetime.utcnow()
        # first in log order; counted, it would break the plateau
        db.session.add(WeightLog(user_id=user.id, weight=75.0, date=now - timedelta(days=30)))
        db.session.commit()
        db.session.add(WeightLog(user_id=user.id, weight=70.0, date=now - timedelta(days=3)))
        db.session.commit()
        db.session.add(WeightLog(user_id=user.id, weight=70.1, date=now))
        db.session.commit()

    alerts = client.get("/api/user/dashboard-summary", headers=headers).get_json()["alerts"]
    assert PLATEAU_ALERT in alerts


def test_dashboard_plateau_not_created_by_old_weights(client, headers, app):
    with app.app_context():
        user = User.query.filter_by(username="demo").first()
        now = datetime.utcnow()
        db.session.add(WeightLog(user_id=user.id, weight=80.0, date=now - timedelta(days=40)))
        db.session.commit()
        # inside the window the weight moved 2 kg; the full log starts and ends near 80
        db.session.add(WeightLog(user_id=user.id, weight=78.0, date=now - timedelta(days=5)))
        db.session.commit()
        db.session.add(WeightLog(user_id=user.id, weight=80.05, date=now))
        db.session.commit()

    alerts = client.get("/api/user/dashboard-summary", headers=headers).get_json()["alerts"]
    assert PLATEAU_ALERT not in alerts


def test_register_race_returns_conflict(client, monkeypatch):
    # the duplicate check misses, so the unique constraint is what catches it
    monkeypatch.setattr(auth_controller, "or_", lambda *clauses: false())
    r = client.post("/api/register", json={"username": "demo", "email": "other@example.com", "password": "secret1"})
    assert r.status_code == 409
    assert r.get_json()["error"]["code"] == "USER_EXISTS"


def test_health_hides_database_error(client, monkeypatch):
    def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("password authentication failed for fitto"))

    fake_db = SimpleNamespace(text=db.text, session=SimpleNamespace(execute=failing_execute, rollback=lambda: None))
    monkeypatch.setattr(home_controller, "db", fake_db)
    r = client.get("/health")
    assert r.status_code == 503
    assert r.get_json()["database"] == "unhealthy"
