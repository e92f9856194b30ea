"""Shared fixtures: a fake language model wired into the FastAPI app."""

import json
from dataclasses import dataclass
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from interview_prep.api.coaching_service import CoachingService
from interview_prep.api.main import app
from interview_prep.api.routes import get_coaching_service
from interview_prep.roles import Role
from interview_prep.session.models import Feedback, ScoreCategory, Session


WELL_FORMED_REPLY = {"score": 4, "summary": "S", "improvedAnswer": "I", "watchouts": ["a", "b"]}

QUESTIONS = [f"Question {i}?" for i in range(1, 6)]


class FakeLLM:
    """Stands in for crewai.LLM; returns a canned reply or raises."""

    def __init__(self, reply: Optional[str] = None, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.messages: List[list] = []

    def call(self, messages):
        self.messages.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@dataclass
class LLMRequest:
    temperature: float
    api_key: Optional[str]


class FakeProvider:
    """Records get_llm() calls and hands out one shared FakeLLM."""

    def __init__(self):
        self.llm = FakeLLM(reply="What is the hardest trade-off you made last year?")
        self.requests: List[LLMRequest] = []

    def get_llm(self, temperature, api_key=None):
        self.requests.append(LLMRequest(temperature=temperature, api_key=api_key))
        return self.llm

    def reply_with(self, reply) -> None:
        self.llm.reply = reply if isinstance(reply, str) else json.dumps(reply)
        self.llm.error = None

    def fail_with(self, error: Exception) -> None:
        self.llm.error = error


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def api_client(provider):
    app.dependency_overrides[get_coaching_service] = lambda: CoachingService(provider=provider)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def question_payload():
    return {
        "role": "ai_pm",
        "resumeText": "Shipped a retrieval-augmented support bot used by 40k customers.",
        "blurb": "PM moving into AI products.",
        "jobDescription": "Own the roadmap for our AI copilot.",
    }


@pytest.fixture
def coach_payload(question_payload):
    return {
        **question_payload,
        "question": "Tell me about a launch that went sideways.",
        "answer": "We shipped late because evaluation data was missing, so I set up a labeling sprint.",
    }


def make_feedback(verdict: str = "Solid story.", improved_answer: str = "A. B. C.") -> Feedback:
    return Feedback(
        score=ScoreCategory.STRONG,
        verdict=verdict,
        improved_answer=improved_answer,
        improvements=["Lead with the outcome"],
    )


def make_started_session() -> Session:
    return Session(
        role=Role.ENG_MANAGER,
        resume="Managed a platform team.",
        short_blurb="EM focused on developer experience.",
        job_description="Lead our infrastructure org.",
        questions=list(QUESTIONS),
    )
