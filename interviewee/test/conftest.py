"""
Shared fixtures for the interviewee test suite.
"""

from typing import Any, List

import pytest

from interviewee.core.settings import ModelGatewaySettings
from interviewee.schemas.blueprint.blueprint import Blueprint
from interviewee.services.model_gateway.model_gateway import ModelGateway
from interviewee.test.fakes import FakeClient, RecordingSleep


@pytest.fixture
def settings() -> ModelGatewaySettings:
    return ModelGatewaySettings(
        api_key="test-key",
        model_candidates=["model-a", "model-b", "model-c"],
        max_retries=2,
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_gateway(settings, sleep):
    def _make(outcomes: List[Any] = None, model_ids: List[str] = None):
        client = FakeClient(outcomes, model_ids)
        return ModelGateway(settings, client=client, sleep=sleep), client
    return _make


@pytest.fixture
def blueprint_data() -> dict:
    return {
        "role_focus": ["distributed systems", "Python", "incident response"],
        "likely_interview_type": "behavioral_technical",
        "risk_gaps": ["No Kubernetes experience"],
        "company_notes": ["Values ownership", "Runs a bar-raiser round"],
        "sample_questions": [
            {"type": "behavioral", "question": "Tell me about a time you disagreed with a teammate."},
            {"type": "technical", "question": "How would you design a rate limiter?"},
            {"type": "behavioral", "question": "Describe a project you are proud of."},
            {"type": "behavioral", "question": "Tell me about a missed deadline."},
        ],
    }


@pytest.fixture
def blueprint(blueprint_data) -> Blueprint:
    return Blueprint.model_validate(blueprint_data)


@pytest.fixture
def case_blueprint(blueprint_data) -> Blueprint:
    data = dict(blueprint_data, likely_interview_type="behavioral_case")
    data["sample_questions"] = [
        {"type": "behavioral", "question": "Tell me about a launch that went wrong."},
        {"type": "case", "question": "How would you grow weekly active users by 10%?"},
    ]
    return Blueprint.model_validate(data)
