import pytest
from fastapi.testclient import TestClient

from main import app
from mockprep.api.dependencies import get_ai_reasoning, get_orchestrator
from mockprep.config.settings import get_settings
from mockprep.core.ai_reasoning import EvaluationError
from mockprep.core.security import create_access_token


TRANSCRIPT = [
    {"role": "assistant", "content": "Tell me about a project you led."},
    {"role": "user", "content": "I led the billing migration."},
    {"role": "interviewer", "text": "What went wrong?"},
    {"role": "candidate", "text": "We underestimated data cleanup."},
]


@pytest.fixture
def client(app_env):
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth(app_env):
    def headers(user_id="user-1"):
        return {"Authorization": f"Bearer {create_access_token(user_id, settings=app_env)}"}
    return headers


@pytest.fixture
def use_orchestrator(make_orchestrator):
    def install(*outcomes, **overrides):
        orchestrator, ai = make_orchestrator(*outcomes, **overrides)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return orchestrator, ai
    return install


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.parametrize("method,path", [
    ("post", "/api/feedback"),
    ("get", "/api/feedback/latest"),
    ("get", "/api/feedback/by-interview/interview-1"),
    ("post", "/api/interview/questions"),
    ("get", "/api/interview/voice-config"),
])
def test_routes_require_session(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/api/feedback/latest", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_token_signed_with_other_secret_is_rejected(client, settings_factory):
    token = create_access_token("user-1", settings=settings_factory(jwt_secret_key="other-secret"))

    response = client.get("/api/feedback/latest", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_generate_then_fetch_feedback(client, auth, use_orchestrator, good_evaluation):
    _, ai = use_orchestrator(good_evaluation)

    response = client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": TRANSCRIPT, "jobRole": "Product Engineer"},
        headers=auth(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    record_id = body["recordId"]

    pairs, job_role = ai.calls[0]
    assert job_role == "Product Engineer"
    assert [(p.question, p.answer) for p in pairs] == [
        ("Tell me about a project you led.", "I led the billing migration."),
        ("What went wrong?", "We underestimated data cleanup."),
    ]

    by_interview = client.get("/api/feedback/by-interview/interview-1", headers=auth())
    assert by_interview.status_code == 200
    record = by_interview.json()
    assert record["id"] == record_id
    assert record["status"] == "completed"
    assert record["source"] == "model"
    assert record["overallScore"] == 4
    assert record["areasForImprovement"] == ["Go deeper on trade-offs"]

    assert client.get(f"/api/feedback/{record_id}", headers=auth()).json()["id"] == record_id
    assert client.get("/api/feedback/latest", headers=auth()).json()["id"] == record_id


def test_session_cookie_is_accepted(client, app_env, use_orchestrator, good_evaluation):
    use_orchestrator(good_evaluation)
    client.cookies.set(app_env.session_cookie_name, create_access_token("user-1", settings=app_env))

    response = client.post("/api/feedback", json={"interviewId": "interview-1", "transcript": []})

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_failed_generation_still_answers_200(client, auth, use_orchestrator):
    use_orchestrator(EvaluationError("provider down"), fallback_policy="strict")

    response = client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": TRANSCRIPT},
        headers=auth(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert "provider down" in body["error"]
    record = client.get(f"/api/feedback/{body['recordId']}", headers=auth()).json()
    assert record["status"] == "error"


def test_missing_transcript_is_reported(client, auth, use_orchestrator, good_evaluation):
    use_orchestrator(good_evaluation)

    response = client.post("/api/feedback", json={"interviewId": "interview-1"}, headers=auth())

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert client.get("/api/feedback/latest", headers=auth()).status_code == 404


def test_feedback_is_scoped_to_user(client, auth, use_orchestrator, good_evaluation):
    use_orchestrator(good_evaluation)
    record_id = client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": TRANSCRIPT},
        headers=auth("user-1"),
    ).json()["recordId"]

    assert client.get(f"/api/feedback/{record_id}", headers=auth("user-2")).status_code == 404
    assert client.get("/api/feedback/by-interview/interview-1", headers=auth("user-2")).status_code == 404
    assert client.get("/api/feedback/latest", headers=auth("user-2")).status_code == 404


def test_unknown_interview_does_not_fall_back_to_latest(client, auth, use_orchestrator, good_evaluation):
    use_orchestrator(good_evaluation)
    client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": TRANSCRIPT},
        headers=auth(),
    )

    response = client.get("/api/feedback/by-interview/interview-2", headers=auth())

    assert response.status_code == 404


def test_generate_questions(client, auth, make_ai, gemini_reply):
    app.dependency_overrides[get_ai_reasoning] = lambda: make_ai(
        lambda request: gemini_reply(["Walk me through your last system design.", "How do you test async code?"])
    )

    response = client.post(
        "/api/interview/questions",
        json={"role": "Backend Engineer", "level": "mid", "techstack": "Python,FastAPI", "type": "technical", "amount": 2},
        headers=auth(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "Backend Engineer"
    assert body["questions"] == ["Walk me through your last system design.", "How do you test async code?"]


def test_generate_questions_provider_failure(client, auth, make_ai, gemini_reply):
    app.dependency_overrides[get_ai_reasoning] = lambda: make_ai(lambda request: gemini_reply("oops", status_code=500))

    response = client.post(
        "/api/interview/questions",
        json={"role": "Backend Engineer", "level": "mid"},
        headers=auth(),
    )

    assert response.status_code == 502


def test_voice_config(client, auth):
    response = client.get("/api/interview/voice-config", headers=auth())

    assert response.status_code == 200
    assert response.json() == {"assistantId": "assistant-123", "webToken": "web-token-456"}


def test_voice_config_not_configured(client, auth, monkeypatch):
    monkeypatch.delenv("VOICE_WEB_TOKEN")
    get_settings.cache_clear()

    response = client.get("/api/interview/voice-config", headers=auth())

    assert response.status_code == 503


def test_feedback_id_of_another_user_cannot_be_reused(client, auth, use_orchestrator, good_evaluation):
    use_orchestrator(good_evaluation)
    record_id = client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": TRANSCRIPT},
        headers=auth("user-1"),
    ).json()["recordId"]

    response = client.post(
        "/api/feedback",
        json={"interviewId": "interview-9", "feedbackId": record_id, "transcript": []},
        headers=auth("user-2"),
    )

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["recordId"] is None
    assert client.get(f"/api/feedback/{record_id}", headers=auth("user-2")).status_code == 404
    owned = client.get("/api/feedback/by-interview/interview-1", headers=auth("user-1"))
    assert owned.status_code == 200
    assert owned.json()["id"] == record_id
    assert owned.json()["status"] == "completed"


def test_tool_turns_in_transcript_are_ignored(client, auth, use_orchestrator, good_evaluation):
    _, ai = use_orchestrator(good_evaluation)
    transcript = TRANSCRIPT[:2] + [{"role": "tool", "content": "calendar lookup"}] + TRANSCRIPT[2:]

    response = client.post(
        "/api/feedback",
        json={"interviewId": "interview-1", "transcript": transcript},
        headers=auth(),
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    pairs, _ = ai.calls[0]
    assert len(pairs) == 2
