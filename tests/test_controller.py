"""Tests for the session controller state machine."""

from typing import List, Optional

import pytest

from interview_prep.roles import Role
from interview_prep.session.client import CoachClientError
from interview_prep.session.controller import SessionController
from interview_prep.session.models import Session, SessionStatus
from interview_prep.session.reducer import RewriteMode
from interview_prep.session.store import SessionStore
from interview_prep.session.transforms import METRICS_SENTENCE

from conftest import QUESTIONS, make_feedback, make_started_session


class FakeCoachClient:
    """Scripted stand-in for CoachClient."""

    def __init__(self):
        self.controller: Optional[SessionController] = None
        self.question_calls: List[dict] = []
        self.coach_calls: List[dict] = []
        self.fail_question_call: Optional[int] = None
        self.fail_coaching = False
        self.feedback = make_feedback()
        self.busy_flags: List[bool] = []

    def generate_question(self, **kwargs):
        self.question_calls.append(kwargs)
        if self.controller is not None:
            self.busy_flags.append(self.controller.is_generating_questions)
        if self.fail_question_call == len(self.question_calls):
            raise CoachClientError("Something went wrong. Please try again.")
        return QUESTIONS[len(self.question_calls) - 1]

    def coach_answer(self, **kwargs):
        self.coach_calls.append(kwargs)
        if self.controller is not None:
            self.busy_flags.append(self.controller.is_generating_feedback)
        if self.fail_coaching:
            raise CoachClientError("Answer is required.")
        return self.feedback


@pytest.fixture
def client():
    return FakeCoachClient()


@pytest.fixture
def store(tmp_path):
    return SessionStore(directory=tmp_path)


@pytest.fixture
def notices():
    return []


@pytest.fixture
def controller(client, store, notices):
    controller = SessionController(client, store, notify=notices.append)
    client.controller = controller
    return controller


@pytest.fixture
def ready_controller(controller):
    controller.update_context(
        role=Role.AI_PM,
        resume="Shipped an LLM support bot.",
        short_blurb="AI PM.",
        job_description="Own the copilot roadmap.",
    )
    return controller


@pytest.fixture
def interviewing(ready_controller, client):
    assert ready_controller.start_interview()
    client.question_calls.clear()
    client.busy_flags.clear()
    return ready_controller


# ============================================================================
# Setup -> Interviewing
# ============================================================================

@pytest.mark.parametrize("missing", ["role", "resume", "job_description"])
def test_start_with_missing_field_makes_no_calls(controller, client, store, notices, missing):
    fields = {"role": Role.DESIGNER, "resume": "r", "job_description": "jd"}
    fields.pop(missing)
    controller.update_context(**fields)

    assert controller.start_interview() is False

    assert client.question_calls == []
    assert controller.status == SessionStatus.SETUP
    assert notices == ["Please complete all required fields before starting"]


def test_start_with_blank_job_description_makes_no_calls(controller, client):
    controller.update_context(role=Role.DESIGNER, resume="r", job_description="   ")

    assert controller.start_interview() is False
    assert client.question_calls == []


def test_start_generates_five_questions_in_order(ready_controller, client, store):
    assert ready_controller.start_interview() is True

    assert len(client.question_calls) == 5
    assert client.question_calls[0] == {
        "role": Role.AI_PM,
        "resume_text": "Shipped an LLM support bot.",
        "blurb": "AI PM.",
        "job_description": "Own the copilot roadmap.",
    }
    assert ready_controller.state.questions == QUESTIONS
    assert ready_controller.state.current_question_index == 0
    assert ready_controller.status == SessionStatus.INTERVIEWING
    assert store.load() == ready_controller.state


def test_busy_flag_is_set_during_question_generation(ready_controller, client):
    ready_controller.start_interview()

    assert client.busy_flags == [True] * 5
    assert ready_controller.is_generating_questions is False


@pytest.mark.parametrize("failing_call", [1, 3, 5])
def test_start_failure_commits_nothing(ready_controller, client, store, notices, failing_call):
    client.fail_question_call = failing_call

    assert ready_controller.start_interview() is False

    assert len(client.question_calls) == failing_call
    assert ready_controller.state.questions is None
    assert ready_controller.status == SessionStatus.SETUP
    assert store.load().questions is None
    assert notices == ["Something went wrong while generating questions. Please try again."]
    assert ready_controller.is_generating_questions is False


def test_start_twice_keeps_original_questions(interviewing, client):
    assert interviewing.start_interview() is False
    assert client.question_calls == []


def test_context_is_frozen_after_start(interviewing):
    assert interviewing.update_context(role=Role.DESIGNER) is False
    assert interviewing.state.role == Role.AI_PM


# ============================================================================
# Answers
# ============================================================================

def test_submit_answer_stores_feedback(interviewing, client, store):
    assert interviewing.submit_answer("  I ran a labeling sprint.  ") is True

    call = client.coach_calls[0]
    assert call["question"] == QUESTIONS[0]
    assert call["answer"] == "I ran a labeling sprint."
    answer = interviewing.state.answers[0]
    assert answer.text == "I ran a labeling sprint."
    assert answer.feedback == client.feedback
    assert store.load() == interviewing.state
    assert client.busy_flags == [True]


def test_submit_blank_answer_makes_no_call(interviewing, client, notices):
    assert interviewing.submit_answer("   ") is False

    assert client.coach_calls == []
    assert notices == ["Please write an answer before submitting"]


def test_submit_failure_changes_nothing(interviewing, client, notices):
    before = interviewing.state
    client.fail_coaching = True

    assert interviewing.submit_answer("An answer.") is False

    assert interviewing.state == before
    assert notices == ["Something went wrong while coaching your answer. Please try again."]
    assert interviewing.is_generating_feedback is False


def test_submit_before_start_is_ignored(controller, client):
    assert controller.submit_answer("Anything") is False
    assert client.coach_calls == []


def test_answers_follow_current_question(interviewing, client):
    interviewing.next_question()
    interviewing.next_question()
    interviewing.submit_answer("Third answer.")

    assert client.coach_calls[0]["question"] == QUESTIONS[2]
    assert interviewing.state.answer_at(2).text == "Third answer."
    assert interviewing.state.answer_at(0) is None


def test_completion_in_any_order(interviewing):
    for index in [4, 2, 0, 1, 3]:
        while interviewing.state.current_question_index > index:
            interviewing.previous_question()
        while interviewing.state.current_question_index < index:
            interviewing.next_question()
        assert interviewing.status == SessionStatus.INTERVIEWING
        interviewing.submit_answer(f"Answer {index}")

    assert interviewing.status == SessionStatus.COMPLETED


def test_navigation_is_clamped(interviewing):
    interviewing.previous_question()
    assert interviewing.state.current_question_index == 0

    for _ in range(7):
        interviewing.next_question()
    assert interviewing.state.current_question_index == 4


# ============================================================================
# Feedback rework
# ============================================================================

def test_regenerate_replaces_feedback(interviewing, client):
    interviewing.submit_answer("My answer.")
    client.feedback = make_feedback(verdict="Better.", improved_answer="Fresh.")

    assert interviewing.regenerate_feedback(RewriteMode.REGENERATE) is True

    assert client.coach_calls[-1]["answer"] == "My answer."
    assert interviewing.state.answers[0].feedback.verdict == "Better."


def test_regenerate_failure_keeps_prior_feedback(interviewing, client, notices):
    interviewing.submit_answer("My answer.")
    prior = interviewing.state.answers[0].feedback
    client.fail_coaching = True

    assert interviewing.regenerate_feedback("regenerate") is False

    assert interviewing.state.answers[0].feedback == prior
    assert notices == ["Something went wrong while regenerating feedback. Please try again."]


def test_local_rewrites_make_no_calls(interviewing, client):
    interviewing.submit_answer("My answer.")
    calls = len(client.coach_calls)

    interviewing.regenerate_feedback("shorten")
    assert interviewing.state.answers[0].feedback.improved_answer == "A. B."

    interviewing.regenerate_feedback(RewriteMode.ADD_METRICS)
    assert interviewing.state.answers[0].feedback.improved_answer == f"A. B. {METRICS_SENTENCE}"

    assert len(client.coach_calls) == calls


def test_rework_without_feedback_is_ignored(interviewing, client):
    assert interviewing.regenerate_feedback(RewriteMode.REGENERATE) is False
    assert interviewing.regenerate_feedback(RewriteMode.SHORTEN) is False
    assert client.coach_calls == []


# ============================================================================
# Clear and restore
# ============================================================================

def test_clear_requires_confirmation(interviewing, store):
    before = interviewing.state

    assert interviewing.clear(lambda prompt: False) is False

    assert interviewing.state == before
    assert store.exists()


def test_clear_erases_everything(interviewing, store):
    prompts = []

    assert interviewing.clear(lambda prompt: prompts.append(prompt) or True) is True

    assert prompts == ["Clear all progress and start over?"]
    assert interviewing.state == Session()
    assert interviewing.status == SessionStatus.SETUP
    assert not store.exists()


def test_controller_restores_saved_session(client, store):
    saved = make_started_session()
    store.save(saved)

    controller = SessionController(client, store)

    assert controller.state == saved
    assert controller.status == SessionStatus.INTERVIEWING
