from fastapi.testclient import TestClient

from conftest import StubGenaiClient
from liftlog.deps.state import get_interpreter
from liftlog.errors import InferenceError
from liftlog.main import app
from liftlog.services.interpreter import CommandInterpreter, GeminiInferenceClient

client = TestClient(app)

def start(name=None):
    r = client.post("/workout", json={"name": name} if name else None)
    assert r.status_code == 201
    return r.json()

def test_log_manual_and_voice_then_finish():
    w = start()
    assert w["status"] == "active"
    assert w["session"]["name"] == "Evening Workout"

    # manual exercise, then a repeated set
    r = client.post("/workout/exercises", json={"name": "Overhead Press", "weight": 40, "reps": 8})
    assert r.status_code == 201
    ex = r.json()
    assert ex["sets"][0]["completed"] is False

    r = client.post(f"/workout/exercises/{ex['id']}/sets")
    assert r.status_code == 201
    assert (r.json()["weight"], r.json()["reps"]) == (40, 8)

    r = client.post(f"/workout/exercises/{ex['id']}/sets/{ex['sets'][0]['id']}/toggle")
    assert r.json()["completed"] is True

    # voice/typed command goes through the (fake) inference client
    r = client.post("/workout/command", json={"text": "3 sets of bench 100kg for 8", "source": "voice"})
    assert r.status_code == 200
    body = r.json()
    assert body["applied"] is True
    assert body["exercises"][0]["name"] == "Bench Press"

    r = client.post("/workout/finish")
    assert r.status_code == 200
    finished = r.json()
    assert finished["end_time"] is not None
    assert [e["name"] for e in finished["exercises"]] == ["Overhead Press", "Bench Press"]

    assert client.get("/workout").status_code == 404
    history = client.get("/sessions").json()
    assert [s["id"] for s in history] == [finished["id"]]
    assert client.get(f"/sessions/{finished['id']}").json()["name"] == "Evening Workout"

    stats = client.get("/dashboard").json()
    assert stats["total_workouts"] == 1
    assert stats["volume_series"][0]["volume"] == 40 * 8 * 2 + 100 * 8 * 3
    assert stats["recent"][0]["set_count"] == 5

def test_finish_empty_workout_is_rejected():
    start()
    r = client.post("/workout/finish")
    assert r.status_code == 400
    assert client.get("/sessions").json() == []
    assert client.get("/workout").status_code == 200

def test_rename_pause_resume_and_discard():
    start("Morning")
    r = client.patch("/workout", json={"name": "  Leg Day "})
    assert r.json()["session"]["name"] == "Leg Day"
    assert client.patch("/workout", json={"name": "   "}).status_code == 422

    assert client.post("/workout/pause").json()["status"] == "paused"
    assert client.post("/workout/resume").json()["status"] == "active"

    assert client.delete("/workout").status_code == 204
    assert client.get("/workout").status_code == 404

def test_second_start_conflicts():
    start()
    assert client.post("/workout").status_code == 409

def test_command_failure_adds_nothing(llm):
    start()
    llm.error = InferenceError("service unavailable")
    r = client.post("/workout/command", json={"text": "bench 100kg for 8"})
    assert r.status_code == 200
    assert r.json() == {"applied": False, "exercises": []}
    assert client.get("/workout").json()["session"]["exercises"] == []

def test_command_validation():
    start()
    assert client.post("/workout/command", json={"text": "   "}).status_code == 422
    assert client.post("/workout/command", json={}).status_code == 422

def test_command_without_workout_is_404(llm):
    r = client.post("/workout/command", json={"text": "bench 100kg for 8"})
    assert r.status_code == 404
    assert llm.calls == []

def test_invalid_manual_entry_rejected():
    start()
    assert client.post("/workout/exercises", json={"name": "  "}).status_code == 422
    assert client.post("/workout/exercises", json={"name": "Squat", "weight": -5}).status_code == 422
    assert client.get("/workout").json()["session"]["exercises"] == []

def test_update_and_remove_set():
    start()
    ex = client.post("/workout/exercises", json={"name": "Row"}).json()
    set_id = ex["sets"][0]["id"]
    r = client.patch(f"/workout/exercises/{ex['id']}/sets/{set_id}", json={"weight": 55, "unit": "lbs"})
    assert r.status_code == 200
    assert (r.json()["weight"], r.json()["unit"], r.json()["reps"]) == (55, "lbs", 10)

    r = client.delete(f"/workout/exercises/{ex['id']}/sets/{set_id}")
    assert r.json()["session"]["exercises"][0]["sets"] == []

    r = client.delete(f"/workout/exercises/{ex['id']}")
    assert r.json()["session"]["exercises"] == []
    assert client.delete(f"/workout/exercises/{ex['id']}").status_code == 404

def test_missing_session_is_404():
    assert client.get("/sessions/does-not-exist").status_code == 404

def test_command_transport_failure_is_not_a_server_error():
    gemini = GeminiInferenceClient(api_key="test-key", model="gemini-test")
    gemini._client = StubGenaiClient(error=ConnectionResetError("peer reset"))
    app.dependency_overrides[get_interpreter] = lambda: CommandInterpreter(gemini, timeout=2)
    start()
    r = client.post("/workout/command", json={"text": "bench 100kg for 8"})
    assert r.status_code == 200
    assert r.json() == {"applied": False, "exercises": []}
    assert len(gemini._client.calls) == 1
