import asyncio

import pytest
from google.genai import errors as genai_errors

from conftest import FakeInferenceClient, StubGenaiClient, bench_reply
from liftlog.errors import InferenceError
from liftlog.schemas import WeightUnit
from liftlog.services.interpreter import (
    WORKOUT_PARSER_SCHEMA,
    CommandInterpreter,
    GeminiInferenceClient,
    build_prompt,
)

def run(interpreter, text):
    return asyncio.run(interpreter.interpret(text))

def test_maps_response_to_completed_logs():
    client = FakeInferenceClient(bench_reply())
    logs = run(CommandInterpreter(client), "3 sets of bench press 100kg for 8 reps")

    assert len(logs) == 1
    assert logs[0].name == "Bench Press"
    assert [(s.weight, s.reps, s.unit, s.completed) for s in logs[0].sets] == [(100, 8, WeightUnit.kg, True)] * 3
    ids = [logs[0].id] + [s.id for s in logs[0].sets]
    assert len(set(ids)) == len(ids)

def test_request_is_deterministic_and_carries_schema():
    client = FakeInferenceClient(bench_reply())
    run(CommandInterpreter(client), "bench 100kg for 8")
    call = client.calls[0]
    assert call["temperature"] == 0.0
    assert call["schema"] is WORKOUT_PARSER_SCHEMA
    assert "bench 100kg for 8" in call["prompt"]

def test_prompt_states_the_parsing_rules():
    prompt = build_prompt('squat "heavy" 5 reps')
    assert "one set" in prompt
    assert "standard gym terminology" in prompt
    assert '"kg"' in prompt
    assert "squat 'heavy' 5 reps" in prompt

def test_multiple_exercises_keep_order():
    reply = {"exercises": [
        {"name": "Squat", "sets": [{"reps": 5, "weight": 140, "unit": "kg"}]},
        {"name": "Leg Press", "sets": [{"reps": 12, "weight": 200, "unit": "kg"}, {"reps": 10, "weight": 220, "unit": "kg"}]},
    ]}
    logs = run(CommandInterpreter(FakeInferenceClient(reply)), "squat then leg press")
    assert [l.name for l in logs] == ["Squat", "Leg Press"]
    assert [s.weight for s in logs[1].sets] == [200, 220]

def test_pounds_preserved_and_unknown_units_default_to_kg():
    reply = {"exercises": [{"name": "Curl", "sets": [
        {"reps": 10, "weight": 30, "unit": "lbs"},
        {"reps": 10, "weight": 15, "unit": "furlongs"},
        {"reps": 10, "weight": 15},
        {"reps": 10, "weight": 15, "unit": None},
    ]}]}
    logs = run(CommandInterpreter(FakeInferenceClient(reply)), "curls")
    assert [s.unit for s in logs[0].sets] == [WeightUnit.lbs, WeightUnit.kg, WeightUnit.kg, WeightUnit.kg]

def test_integral_float_reps_accepted():
    reply = {"exercises": [{"name": "Row", "sets": [{"reps": 8.0, "weight": 62.5, "unit": "kg"}]}]}
    logs = run(CommandInterpreter(FakeInferenceClient(reply)), "rows")
    assert logs[0].sets[0].reps == 8
    assert logs[0].sets[0].weight == 62.5

def test_missing_exercises_field_is_failure():
    assert run(CommandInterpreter(FakeInferenceClient({"workout": []})), "bench") is None

def test_set_missing_reps_or_weight_is_failure():
    no_reps = {"exercises": [{"name": "Bench", "sets": [{"weight": 100, "unit": "kg"}]}]}
    no_weight = {"exercises": [{"name": "Bench", "sets": [{"reps": 8, "unit": "kg"}]}]}
    assert run(CommandInterpreter(FakeInferenceClient(no_reps)), "bench") is None
    assert run(CommandInterpreter(FakeInferenceClient(no_weight)), "bench") is None

def test_one_bad_exercise_rejects_whole_response():
    reply = {"exercises": [
        {"name": "Squat", "sets": [{"reps": 5, "weight": 140, "unit": "kg"}]},
        {"name": "  ", "sets": [{"reps": 5, "weight": 100, "unit": "kg"}]},
    ]}
    assert run(CommandInterpreter(FakeInferenceClient(reply)), "squat") is None

def test_negative_or_fractional_reps_rejected():
    neg = {"exercises": [{"name": "Bench", "sets": [{"reps": -1, "weight": 100, "unit": "kg"}]}]}
    frac = {"exercises": [{"name": "Bench", "sets": [{"reps": 7.5, "weight": 100, "unit": "kg"}]}]}
    assert run(CommandInterpreter(FakeInferenceClient(neg)), "bench") is None
    assert run(CommandInterpreter(FakeInferenceClient(frac)), "bench") is None

def test_malformed_or_empty_text_is_failure():
    assert run(CommandInterpreter(FakeInferenceClient("{not json")), "bench") is None
    assert run(CommandInterpreter(FakeInferenceClient("")), "bench") is None
    assert run(CommandInterpreter(FakeInferenceClient(None)), "bench") is None

def test_blank_utterance_skips_the_service():
    client = FakeInferenceClient(bench_reply())
    assert run(CommandInterpreter(client), "   ") is None
    assert client.calls == []

def test_service_error_is_failure():
    client = FakeInferenceClient(error=InferenceError("503 unavailable"))
    assert run(CommandInterpreter(client), "bench") is None

def test_timeout_is_failure():
    client = FakeInferenceClient(bench_reply(), delay=1.0)
    assert run(CommandInterpreter(client, timeout=0.01), "bench") is None

def test_empty_exercise_list_is_not_an_error():
    assert run(CommandInterpreter(FakeInferenceClient({"exercises": []})), "nothing") == []

def gemini(stub, model="gemini-test"):
    client = GeminiInferenceClient(api_key="test-key", model=model)
    client._client = stub
    return client

def test_gemini_request_config():
    stub = StubGenaiClient(bench_reply())
    logs = run(CommandInterpreter(gemini(stub)), "bench 100kg for 8")

    assert [l.name for l in logs] == ["Bench Press"]
    call = stub.calls[0]
    assert call["model"] == "gemini-test"
    assert "bench 100kg for 8" in call["contents"]
    config = call["config"]
    assert config.response_mime_type == "application/json"
    assert config.response_schema == WORKOUT_PARSER_SCHEMA
    assert config.temperature == 0.0
    assert config.candidate_count == 1

def test_gemini_api_error_is_failure():
    error = genai_errors.ServerError(503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})
    assert run(CommandInterpreter(gemini(StubGenaiClient(error=error))), "bench") is None

@pytest.mark.parametrize(
    "error",
    [
        ConnectionResetError("peer reset"),
        OSError("Cannot connect to host 127.0.0.1:1"),
        ValueError("unknown response"),
    ],
)
def test_gemini_transport_errors_are_failures(error):
    assert run(CommandInterpreter(gemini(StubGenaiClient(error=error))), "bench") is None

def test_gemini_errors_surface_as_inference_errors():
    client = gemini(StubGenaiClient(error=ConnectionResetError("peer reset")))
    with pytest.raises(InferenceError) as info:
        asyncio.run(client.generate_json("bench", schema=WORKOUT_PARSER_SCHEMA, temperature=0.0))
    assert isinstance(info.value.__cause__, ConnectionResetError)

def test_gemini_without_api_key_is_failure():
    client = GeminiInferenceClient(api_key="", model="gemini-test")
    assert run(CommandInterpreter(client), "bench") is None
    assert client._client is None
