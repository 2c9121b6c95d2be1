"""
Test API Routes Module

This module exercises the HTTP surface end to end with FastAPI's TestClient. The
shared model gateway is replaced through dependency overrides, so no request ever
leaves the process.

Dependencies:
- pytest: For testing framework
- fastapi.testclient: For calling the application in-process
- interviewee.main: The application under test
"""

import json

import pytest
from fastapi.testclient import TestClient

from interviewee.core.ai_client_manager import build_model_gateway, get_model_gateway
from interviewee.core.route_limiters import limiter
from interviewee.core.settings import ModelGatewaySettings
from interviewee.main import app
from interviewee.services.interview.session_store import session_store
from interviewee.services.model_gateway.model_gateway import ModelGateway
from interviewee.test.fakes import FakeClient, RecordingSleep, api_error

ANSWER = "I led the redesign project; as a result we increased signups by 20%."


@pytest.fixture
def fake_client():
    return FakeClient(model_ids=["model-b", "model-a"])


@pytest.fixture
def client(settings, fake_client):
    gateway = ModelGateway(settings, client=fake_client, sleep=RecordingSleep())
    app.dependency_overrides[get_model_gateway] = lambda: gateway
    limiter.enabled = False
    session_store.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True
    session_store.clear()


class TestHealthRoutes:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_models(self, client):
        response = client.get("/api/models")
        assert response.status_code == 200
        assert response.json() == {"models": ["model-a", "model-b"]}


class TestBlueprintRoute:
    """Test POST /api/blueprint."""

    def payload(self, **overrides):
        body = {"company": "Acme", "resumeText": "Python engineer", "jobDescription": "Backend role"}
        body.update(overrides)
        return body

    def test_success(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append("```json\n" + json.dumps(blueprint_data) + "\n```")
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"blueprint"}
        assert body["blueprint"]["likely_interview_type"] == "behavioral_technical"

    def test_accepts_jd_text_alias(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append(json.dumps(blueprint_data))
        body = {"company": "Acme", "resumeText": "Python engineer", "jdText": "Backend role"}
        response = client.post("/api/blueprint", json=body)
        assert response.status_code == 200
        assert "Backend role" in fake_client.calls[0]["prompt"]

    def test_missing_inputs(self, client, fake_client):
        response = client.post("/api/blueprint", json=self.payload(resumeText=""))
        assert response.status_code == 400
        assert response.json() == {"error": "Missing inputs"}
        assert fake_client.calls == []

    def test_unparseable_output(self, client, fake_client):
        fake_client.outcomes.append("not json at all")
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 200
        body = response.json()
        assert body["raw"] == "not json at all"
        assert body["parseError"]
        assert "blueprint" not in body

    def test_no_model_available(self, client, fake_client):
        fake_client.outcomes.extend([api_error(404)] * 3)
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 500
        assert "No model succeeded" in response.json()["error"]

    def test_model_busy(self, client, fake_client):
        fake_client.outcomes.extend([api_error(429, "Please retry in 1s")] * 3)
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 503
        assert "error" in response.json()

    def test_missing_credential(self, client):
        app.dependency_overrides[get_model_gateway] = lambda: ModelGateway(ModelGatewaySettings(api_key=None))
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 500
        assert "OPENAI_API_KEY" in response.json()["error"]

    def test_invalid_configuration_names_the_variable(self, client, fake_client, monkeypatch):
        monkeypatch.setattr("interviewee.core.settings.load_dotenv", lambda *args, **kwargs: False)
        monkeypatch.setenv("LLM_MAX_RETRIES", "lots")
        app.dependency_overrides[get_model_gateway] = lambda: build_model_gateway()
        response = client.post("/api/blueprint", json=self.payload())
        assert response.status_code == 500
        assert "Invalid LLM_MAX_RETRIES" in response.json()["error"]
        assert fake_client.calls == []


class TestInterviewStepRoute:
    """Test POST /api/interview."""

    def test_start(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append("Tell me about a conflict you resolved.")
        response = client.post("/api/interview", json={
            "step": "start", "company": "Acme", "blueprint": blueprint_data, "mode": "technical",
        })
        assert response.status_code == 200
        assert response.json() == {"interviewer": "Tell me about a conflict you resolved."}
        assert "Mode: TECHNICAL" in fake_client.calls[0]["prompt"]

    def test_null_mode_means_behavioral(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append("Tell me about a conflict you resolved.")
        response = client.post("/api/interview", json={
            "step": "start", "company": "Acme", "blueprint": blueprint_data, "mode": None,
        })
        assert response.status_code == 200
        assert "Mode: BEHAVIORAL" in fake_client.calls[0]["prompt"]

    def test_followup(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append("How did you measure that?")
        response = client.post("/api/interview", json={
            "step": "followup",
            "company": "Acme",
            "blueprint": blueprint_data,
            "mode": "behavioral",
            "transcript": f"INTERVIEWER: Tell me about a redesign.\nCANDIDATE: {ANSWER}",
            "candidateAnswer": ANSWER,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["interviewer"] == "How did you measure that?"
        assert body["scorecard"]["scores"]["overall"] == 66
        assert body["coach"]["star"] == "S:N T:N A:Y R:Y"

    def test_followup_without_model_still_scores(self, client, fake_client, blueprint_data):
        fake_client.outcomes.extend([api_error(503)] * 3)
        response = client.post("/api/interview", json={
            "step": "followup", "company": "Acme", "blueprint": blueprint_data,
            "transcript": f"CANDIDATE: {ANSWER}", "candidateAnswer": ANSWER,
        })
        assert response.status_code == 200
        assert response.json()["interviewer"] == "What was the biggest challenge, and how did you handle it?"

    def test_followup_without_credential_still_scores(self, client, blueprint_data):
        app.dependency_overrides[get_model_gateway] = lambda: ModelGateway(ModelGatewaySettings(api_key=None))
        response = client.post("/api/interview", json={
            "step": "followup", "company": "Acme", "blueprint": blueprint_data, "mode": None,
            "transcript": f"CANDIDATE: {ANSWER}", "candidateAnswer": ANSWER,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["interviewer"] == "What was the biggest challenge, and how did you handle it?"
        assert body["scorecard"]["scores"]["overall"] == 66

    def test_followup_control_character_answer(self, client, fake_client, blueprint_data):
        response = client.post("/api/interview", json={
            "step": "followup", "company": "Acme", "blueprint": blueprint_data,
            "transcript": "INTERVIEWER: hi", "candidateAnswer": "\u0001\u0002",
        })
        assert response.status_code == 400
        assert fake_client.calls == []

    def test_missing_fields(self, client):
        response = client.post("/api/interview", json={"step": "start"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields: step, company, blueprint"}

    def test_followup_requires_answer(self, client, blueprint_data):
        response = client.post("/api/interview", json={
            "step": "followup", "company": "Acme", "blueprint": blueprint_data, "transcript": "INTERVIEWER: hi",
        })
        assert response.status_code == 400

    def test_disallowed_mode(self, client, blueprint_data):
        blueprint_data["likely_interview_type"] = "behavioral_case"
        response = client.post("/api/interview", json={
            "step": "start", "company": "Acme", "blueprint": blueprint_data, "mode": "technical",
        })
        assert response.status_code == 400
        assert "not available" in response.json()["error"]

    def test_unknown_step(self, client, blueprint_data):
        response = client.post("/api/interview", json={"step": "finish", "company": "Acme", "blueprint": blueprint_data})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request"


class TestSessionRoutes:
    """Test the server-side session endpoints."""

    def start(self, client, fake_client, blueprint_data):
        fake_client.outcomes.append("Why this role?")
        response = client.post("/api/interview/sessions", json={"company": "Acme", "blueprint": blueprint_data})
        assert response.status_code == 201
        return response.json()["sessionId"]

    def test_full_session(self, client, fake_client, blueprint_data):
        session_id = self.start(client, fake_client, blueprint_data)

        fake_client.outcomes.append("What did you measure?")
        response = client.post(f"/api/interview/sessions/{session_id}/answers", json={"candidateAnswer": ANSWER})
        assert response.status_code == 200
        assert response.json()["scorecard"]["scores"]["overall"] == 66

        view = client.get(f"/api/interview/sessions/{session_id}").json()
        assert view["status"] == "awaiting_answer"
        assert [turn["role"] for turn in view["transcript"]] == ["interviewer", "candidate", "interviewer"]
        assert view["scorecard"]["scores"]["overall"] == 66

    def test_reset(self, client, fake_client, blueprint_data):
        session_id = self.start(client, fake_client, blueprint_data)
        view = client.post(f"/api/interview/sessions/{session_id}/reset").json()
        assert view["status"] == "not_started"
        assert view["transcript"] == []
        assert view["scorecard"] is None

    def test_answer_after_reset_is_conflict(self, client, fake_client, blueprint_data):
        session_id = self.start(client, fake_client, blueprint_data)
        client.post(f"/api/interview/sessions/{session_id}/reset")
        response = client.post(f"/api/interview/sessions/{session_id}/answers", json={"candidateAnswer": ANSWER})
        assert response.status_code == 409
        assert fake_client.calls and len(fake_client.calls) == 1

    def test_control_character_answer_is_rejected(self, client, fake_client, blueprint_data):
        session_id = self.start(client, fake_client, blueprint_data)
        response = client.post(f"/api/interview/sessions/{session_id}/answers", json={"candidateAnswer": "\u0001\u0002"})
        assert response.status_code == 409
        view = client.get(f"/api/interview/sessions/{session_id}").json()
        assert len(view["transcript"]) == 1
        assert len(fake_client.calls) == 1

    def test_delete(self, client, fake_client, blueprint_data):
        session_id = self.start(client, fake_client, blueprint_data)
        assert client.delete(f"/api/interview/sessions/{session_id}").status_code == 204
        assert client.get(f"/api/interview/sessions/{session_id}").status_code == 404

    def test_unknown_session(self, client):
        response = client.get("/api/interview/sessions/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Session 'does-not-exist' not found."}

    def test_failed_start_is_not_stored(self, client, fake_client, blueprint_data):
        fake_client.outcomes.extend([api_error(404)] * 3)
        response = client.post("/api/interview/sessions", json={"company": "Acme", "blueprint": blueprint_data})
        assert response.status_code == 500
        assert len(session_store) == 0
