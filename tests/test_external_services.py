from types import SimpleNamespace

import pytest
import requests

from fitto.services import ai_service, exercise_lookup_service, food_search_service


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


# ============================================================================
# Exercise lookup
# ============================================================================

def test_lookup_scales_api_result(client, setup_user, monkeypatch):
    def fake_get(url, params=None, headers=None, timeout=None):
        assert params == {"activity": "running"}
        assert headers["X-Api-Key"] == "test-ninjas-key"
        assert timeout
        return FakeResponse([{"name": "Running, 6 mph", "total_calories": 600, "duration_minutes": 60}])

    monkeypatch.setattr(exercise_lookup_service.requests, "get", fake_get)
    r = client.get("/api/exercise-lookup?activity=running&duration=30", headers=setup_user)
    assert r.status_code == 200, r.data
    data = r.get_json()
    assert data["source"] == "api"
    assert data["caloriesBurned"] == pytest.approx(300)


def test_lookup_falls_back_to_met_table(client, setup_user, monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(exercise_lookup_service.requests, "get", failing_get)
    r = client.get("/api/exercise-lookup?activity=yoga&duration=60", headers=setup_user)
    assert r.status_code == 200, r.data
    data = r.get_json()
    assert data["source"] == "met_table"
    # 3.0 MET * 70 kg * 3.5 / 200 * 60 min
    assert data["caloriesBurned"] == pytest.approx(220.5)


def test_lookup_empty_api_result_uses_default_duration(client, setup_user, monkeypatch):
    monkeypatch.setattr(exercise_lookup_service.requests, "get", lambda *a, **k: FakeResponse([]))
    r = client.get("/api/exercise-lookup", query_string={"activity": "I went swimming"}, headers=setup_user)
    assert r.status_code == 200
    data = r.get_json()
    assert data["exerciseName"] == "swimming"
    assert data["duration"] == 30


def test_lookup_keeps_fractional_duration(client, setup_user, monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(exercise_lookup_service.requests, "get", failing_get)
    r = client.get("/api/exercise-lookup?activity=yoga&duration=12.5", headers=setup_user)
    assert r.status_code == 200, r.data
    data = r.get_json()
    assert data["duration"] == 12.5
    # 3.0 MET * 70 kg * 3.5 / 200 * 12.5 min
    assert data["caloriesBurned"] == pytest.approx(45.9375)


@pytest.mark.parametrize("duration", ["abc", "nan", "1e999"])
def test_lookup_rejects_non_numeric_duration(client, setup_user, monkeypatch, duration):
    monkeypatch.setattr(exercise_lookup_service.requests, "get", lambda *a, **k: FakeResponse([]))
    r = client.get("/api/exercise-lookup", query_string={"activity": "yoga", "duration": duration}, headers=setup_user)
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_lookup_non_positive_duration_uses_default(client, setup_user, monkeypatch):
    monkeypatch.setattr(exercise_lookup_service.requests, "get", lambda *a, **k: FakeResponse([]))
    r = client.get("/api/exercise-lookup?activity=yoga&duration=-5", headers=setup_user)
    assert r.get_json()["duration"] == 30


def test_lookup_sends_gerund_to_api(client, setup_user, monkeypatch):
    sent = []

    def fake_get(url, params=None, headers=None, timeout=None):
        sent.append(params["activity"])
        return FakeResponse([{"name": "Running, 5 mph", "total_calories": 480, "duration_minutes": 60}])

    monkeypatch.setattr(exercise_lookup_service.requests, "get", fake_get)
    r = client.get("/api/exercise-lookup?activity=Run", headers=setup_user)
    assert r.status_code == 200
    assert sent == ["running"]


@pytest.mark.parametrize("activity, expected", [
    ("run", "running"),
    ("swim", "swimming"),
    ("bike", "biking"),
    ("walk", "walking"),
    ("row", "rowing"),
    ("is running", "running"),
    ("yoga", "yoga"),
    ("went for a jog", "went for a jog"),
])
def test_to_gerund(activity, expected):
    assert exercise_lookup_service.to_gerund(activity) == expected


def test_lookup_unknown_activity(client, setup_user, monkeypatch):
    monkeypatch.setattr(exercise_lookup_service.requests, "get", lambda *a, **k: FakeResponse([], 500))
    r = client.get("/api/exercise-lookup", query_string={"activity": "underwater basket weaving"}, headers=setup_user)
    assert r.status_code == 404


# ============================================================================
# Food search
# ============================================================================

def test_food_search_maps_nutrients(client, headers, monkeypatch):
    payload = {"foods": [{
        "fdcId": 123,
        "description": "Banana, raw",
        "foodNutrients": [
            {"nutrientNumber": "208", "value": 89},
            {"nutrientNumber": "205", "value": 22.8},
            {"nutrientNumber": "203", "value": 1.1},
            {"nutrientNumber": "204", "value": 0.3},
        ],
    }]}
    monkeypatch.setattr(food_search_service.requests, "get", lambda *a, **k: FakeResponse(payload))
    r = client.get("/api/food-search?query=banana", headers=headers)
    assert r.status_code == 200, r.data
    food = r.get_json()["foods"][0]
    assert food == {"fdcId": 123, "name": "Banana, raw", "brand": None,
                    "calories": 89, "carbs": 22.8, "protein": 1.1, "fat": 0.3}


def test_food_search_upstream_failure(client, headers, monkeypatch):
    def failing_get(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(food_search_service.requests, "get", failing_get)
    r = client.get("/api/food-search?query=banana", headers=headers)
    assert r.status_code == 502
    assert r.get_json()["error"]["code"] == "UPSTREAM_ERROR"


def test_food_search_rejects_non_numeric_limit(client, headers, monkeypatch):
    monkeypatch.setattr(food_search_service.requests, "get", lambda *a, **k: FakeResponse({"foods": []}))
    r = client.get("/api/food-search?query=banana&limit=abc", headers=headers)
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"


# ============================================================================
# AI recommendation
# ============================================================================

class FakeGenaiClient:
    calls = 0
    failures = 0
    answer = "Eat more protein."

    def __init__(self, api_key=None, http_options=None):
        assert api_key == "test-gemini-key"
        assert http_options.timeout > 0
        self.models = SimpleNamespace(generate_content=self._generate)

    def _generate(self, model, contents, config):
        FakeGenaiClient.calls += 1
        if FakeGenaiClient.calls <= FakeGenaiClient.failures:
            raise RuntimeError("temporarily unavailable")
        assert "Protein: 192g" in contents
        return SimpleNamespace(text=FakeGenaiClient.answer)


@pytest.fixture()
def fake_genai(monkeypatch):
    FakeGenaiClient.calls = 0
    FakeGenaiClient.failures = 0
    FakeGenaiClient.answer = "Eat more protein."
    monkeypatch.setattr(ai_service.genai, "Client", FakeGenaiClient)
    return FakeGenaiClient


def test_ai_recommendation_uses_profile_macros(client, setup_user, fake_genai):
    r = client.post("/api/ai-recommendation", json={"question": "What should I eat after a run?"}, headers=setup_user)
    assert r.status_code == 200, r.data
    assert r.get_json()["message"] == "Eat more protein."
    assert fake_genai.calls == 1


def test_ai_recommendation_retries_once(client, setup_user, fake_genai):
    fake_genai.failures = 1
    r = client.post("/api/ai-recommendation", json={"question": "Is creatine useful?"}, headers=setup_user)
    assert r.status_code == 200
    assert fake_genai.calls == 2


def test_ai_recommendation_gives_up_after_retry(client, setup_user, fake_genai):
    fake_genai.failures = 5
    r = client.post("/api/ai-recommendation", json={"question": "Is creatine useful?"}, headers=setup_user)
    assert r.status_code == 502
    assert fake_genai.calls == 2


def test_ai_recommendation_empty_answer(client, setup_user, fake_genai):
    fake_genai.answer = ""
    r = client.post("/api/ai-recommendation", json={"question": "Hello?"}, headers=setup_user)
    assert r.get_json()["message"] == ai_service.EMPTY_ANSWER


def test_ai_recommendation_validates_macros(client, setup_user, fake_genai):
    r = client.post("/api/ai-recommendation", json={
        "question": "Hello?", "userMacros": {"carbs_g": "lots", "protein_g": 100, "fat_g": 50}
    }, headers=setup_user)
    assert r.status_code == 400
    assert fake_genai.calls == 0


def test_ai_recommendation_needs_setup_or_macros(client, headers, fake_genai):
    r = client.post("/api/ai-recommendation", json={"question": "Hello?"}, headers=headers)
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "SETUP_INCOMPLETE"
