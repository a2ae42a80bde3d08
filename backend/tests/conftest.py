"""
Every test gets a fresh in-memory AppState and a scripted inference client
in place of Gemini, wired into the app through dependency overrides.
"""
import asyncio
import json
import os
from types import SimpleNamespace

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest

from liftlog.deps.state import get_interpreter, get_state
from liftlog.main import app
from liftlog.services.interpreter import CommandInterpreter
from liftlog.state import AppState
from liftlog.store import MemoryStore


class FakeInferenceClient:
    """Returns `reply` (dict is JSON-encoded), or raises `error`; optionally waits on `gate`."""

    def __init__(self, reply=None, *, error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.gate: asyncio.Event | None = None
        self.calls = []

    async def generate_json(self, prompt, *, schema, temperature):
        self.calls.append({"prompt": prompt, "schema": schema, "temperature": temperature})
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, (dict, list)):
            return json.dumps(self.reply)
        return self.reply


class StubGenaiClient:
    """Stands in for `genai.Client`: only `aio.models.generate_content` is provided."""

    def __init__(self, text=None, *, error=None):
        self.text = json.dumps(text) if isinstance(text, (dict, list)) else text
        self.error = error
        self.calls = []
        self.aio = SimpleNamespace(models=SimpleNamespace(generate_content=self._generate_content))

    async def _generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def bench_reply(unit="kg"):
    return {
        "exercises": [
            {"name": "Bench Press", "sets": [{"reps": 8, "weight": 100, "unit": unit}] * 3},
        ]
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state(clock):
    return AppState(MemoryStore(), clock=clock)


@pytest.fixture
def llm():
    return FakeInferenceClient(bench_reply())


@pytest.fixture(autouse=True)
def _wire_app(state, llm):
    app.dependency_overrides[get_state] = lambda: state
    app.dependency_overrides[get_interpreter] = lambda: CommandInterpreter(llm, timeout=2)
    yield
    app.dependency_overrides.clear()
