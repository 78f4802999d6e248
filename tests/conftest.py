import json

import httpx
import pytest

from mockprep.config.settings import FallbackPolicy, Settings, get_settings
from mockprep.core.ai_reasoning import AIReasoningLayer
from mockprep.core.evaluation_engine import EvaluationEngine
from mockprep.core.feedback_orchestrator import FeedbackOrchestrator
from mockprep.core.feedback_store import FeedbackStore
from mockprep.models.evaluation import EvaluationResult


GOOD_EVALUATION = {
    "communication": 4,
    "technicalKnowledge": 3.5,
    "problemSolving": 4,
    "confidence": 5,
    "overallScore": 4,
    "strengths": ["Clear structure", "Concrete examples"],
    "areasForImprovement": ["Go deeper on trade-offs"],
    "detailedFeedback": "Solid interview overall.",
}


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-key",
        "jwt_secret_key": "test-secret",
        "evaluation_retries": 2,
        "evaluation_retry_delay_seconds": 0,
        "fallback_policy": FallbackPolicy.DEGRADE,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def gemini_payload(text: str) -> dict:
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ]
    }


class SleepRecorder:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeAI:
    """
    Stand-in for AIReasoningLayer.

    Each call to evaluate_interview consumes the next outcome: an exception
    instance is raised, anything else is returned. The last outcome repeats.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def evaluate_interview(self, pairs, job_role, trace_id=None):
        self.calls.append((list(pairs), job_role))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def good_evaluation():
    return EvaluationResult.model_validate(GOOD_EVALUATION)


@pytest.fixture
def make_ai(settings):
    """Build an AIReasoningLayer whose HTTP calls go to ``handler``."""
    def factory(handler, **overrides):
        layer_settings = make_settings(**overrides) if overrides else settings
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            base_url="https://gemini.test",
        )
        return AIReasoningLayer(settings=layer_settings, client=client)
    return factory


@pytest.fixture
def make_orchestrator(sleeper):
    """Build an orchestrator around a FakeAI and a fresh in-memory store."""
    def factory(*outcomes, store=None, **overrides):
        orchestrator_settings = make_settings(**overrides)
        ai = FakeAI(*outcomes)
        engine = EvaluationEngine(ai, settings=orchestrator_settings, sleep=sleeper)
        orchestrator = FeedbackOrchestrator(
            evaluation_engine=engine,
            store=store or FeedbackStore(),
            settings=orchestrator_settings,
        )
        return orchestrator, ai
    return factory


@pytest.fixture
def app_env(monkeypatch):
    """Configure the cached settings used by the FastAPI app."""
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret")
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("EVALUATION_RETRY_DELAY_SECONDS", "0")
    monkeypatch.setenv("VOICE_ASSISTANT_ID", "assistant-123")
    monkeypatch.setenv("VOICE_WEB_TOKEN", "web-token-456")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def gemini_reply():
    """Build a generateContent HTTP response carrying ``text`` (dicts are JSON-encoded)."""
    def factory(text, status_code=200):
        if not isinstance(text, str):
            text = json.dumps(text)
        return httpx.Response(status_code, json=gemini_payload(text))
    return factory


@pytest.fixture
def evaluation_data():
    """A well-formed evaluation as the model would return it."""
    return dict(GOOD_EVALUATION)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def fake_ai():
    return FakeAI
