"""
Natural-language workout entry.

A transcript such as "3 sets of bench press 100kg for 8 reps" is sent to the
inference service together with a strict JSON schema. The reply is validated
and mapped to ExerciseLog entries; any failure yields None and leaves the
caller's workout untouched.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from liftlog.errors import InferenceError
from liftlog.schemas.command import ParseResult
from liftlog.schemas.workout import ExerciseLog, WorkoutSet
from liftlog.settings import Settings, get_settings

logger = logging.getLogger(__name__)

WORKOUT_PARSER_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "exercises": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": types.Schema(
                        type=types.Type.STRING,
                        description="The standardized name of the exercise (e.g. 'Bench Press')",
                    ),
                    "sets": types.Schema(
                        type=types.Type.ARRAY,
                        items=types.Schema(
                            type=types.Type.OBJECT,
                            properties={
                                "reps": types.Schema(type=types.Type.NUMBER, description="Number of repetitions"),
                                "weight": types.Schema(type=types.Type.NUMBER, description="Weight used"),
                                "unit": types.Schema(type=types.Type.STRING, description="Unit of weight (kg or lbs)"),
                            },
                            required=["reps", "weight", "unit"],
                        ),
                    ),
                },
                required=["name", "sets"],
            ),
        ),
    },
    required=["exercises"],
)

PROMPT_TEMPLATE = """\
You log gym workouts. Turn the user's command into the JSON structure described by the response schema.

User command: "{command}"

Rules:
1. Extract every exercise with its sets; each set has reps, weight and unit.
2. When the number of sets is not stated (e.g. "100kg for 5 reps"), it is one set.
3. Use standard gym terminology for exercise names.
4. Use "kg" when no unit is given, unless the command clearly implies pounds.
"""


def build_prompt(command: str) -> str:
    return PROMPT_TEMPLATE.format(command=command.replace('"', "'"))


class InferenceClient(Protocol):
    async def generate_json(self, prompt: str, *, schema: types.Schema, temperature: float) -> str | None:
        """Return the raw JSON text produced for `prompt`, or None if empty."""
        ...


class GeminiInferenceClient:
    """InferenceClient backed by the Gemini API through google-genai."""

    def __init__(self, *, api_key: str | None, model: str):
        self.model = model
        self._api_key = api_key
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise InferenceError("Gemini API key not configured. Set GEMINI_API_KEY.")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_json(self, prompt: str, *, schema: types.Schema, temperature: float) -> str | None:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                    temperature=temperature,
                    candidate_count=1,
                ),
            )
        except genai_errors.APIError as e:
            raise InferenceError(f"Gemini request failed: {e.code} {e.status}") from e
        except Exception as e:
            # transport errors depend on the SDK backend (httpx or aiohttp)
            raise InferenceError(f"Gemini request failed: {type(e).__name__}: {e}") from e
        return response.text


class CommandInterpreter:
    def __init__(self, client: InferenceClient, *, temperature: float = 0.0, timeout: float | None = 15.0):
        self.client = client
        self.temperature = temperature
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "CommandInterpreter":
        s = settings or get_settings()
        return cls(
            GeminiInferenceClient(api_key=s.GEMINI_API_KEY, model=s.GEMINI_MODEL),
            temperature=s.INTERPRETER_TEMPERATURE,
            timeout=s.INTERPRETER_TIMEOUT_SECONDS,
        )

    async def interpret(self, utterance: str) -> list[ExerciseLog] | None:
        """
        Parse `utterance` into new exercise logs.

        Returns None on any failure (blank input, service error, timeout,
        malformed or schema-violating reply). Sets parsed from speech describe
        work already done, so they come back completed.
        """
        command = (utterance or "").strip()
        if not command:
            logger.info("ignoring blank workout command")
            return None

        try:
            raw = await asyncio.wait_for(
                self.client.generate_json(
                    build_prompt(command),
                    schema=WORKOUT_PARSER_SCHEMA,
                    temperature=self.temperature,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("workout command timed out after %ss", self.timeout)
            return None
        except InferenceError as e:
            logger.error("error parsing workout command: %s", e)
            return None

        if not raw:
            logger.warning("inference service returned an empty response")
            return None

        try:
            parsed = ParseResult.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("rejected inference response: %s", e.errors(include_url=False))
            return None

        return [
            ExerciseLog(
                name=ex.name,
                sets=[
                    WorkoutSet(reps=s.reps, weight=s.weight, unit=s.unit, completed=True)
                    for s in ex.sets
                ],
            )
            for ex in parsed.exercises
        ]
