# Session Reducer
"""
Pure transition function for the interview session.

reduce(state, action) returns a new Session and never mutates its input.
Actions that make no sense in the current state (editing context after the
interview started, rewriting feedback that does not exist, moving past the
last question) return the state unchanged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

from interview_prep.config import CLIENT_CONFIG
from interview_prep.roles import Role
from interview_prep.session import transforms
from interview_prep.session.models import Answer, Feedback, Session

logger = logging.getLogger(__name__)


class RewriteMode(str, Enum):
    """Ways to rework the improved answer for the current question."""
    REGENERATE = "regenerate"
    SHORTEN = "shorten"
    ADD_METRICS = "add-metrics"


# ============================================================================
# Actions
# ============================================================================

@dataclass(frozen=True)
class UpdateContext:
    """Edit setup fields. None means leave the field alone."""
    role: Optional[Role] = None
    resume: Optional[str] = None
    short_blurb: Optional[str] = None
    job_description: Optional[str] = None


@dataclass(frozen=True)
class QuestionsGenerated:
    questions: Sequence[str]


@dataclass(frozen=True)
class AnswerCoached:
    index: int
    text: str
    feedback: Feedback


@dataclass(frozen=True)
class FeedbackRegenerated:
    index: int
    feedback: Feedback


@dataclass(frozen=True)
class ImprovedAnswerRewritten:
    """Local rewrite; mode is SHORTEN or ADD_METRICS."""
    index: int
    mode: RewriteMode


@dataclass(frozen=True)
class NextQuestion:
    pass


@dataclass(frozen=True)
class PreviousQuestion:
    pass


@dataclass(frozen=True)
class Clear:
    pass


Action = Union[
    UpdateContext,
    QuestionsGenerated,
    AnswerCoached,
    FeedbackRegenerated,
    ImprovedAnswerRewritten,
    NextQuestion,
    PreviousQuestion,
    Clear,
]


# ============================================================================
# Reducer
# ============================================================================

def _with_answer(answers: List[Optional[Answer]], index: int, answer: Answer) -> List[Optional[Answer]]:
    updated = list(answers)
    if len(updated) <= index:
        updated.extend([None] * (index + 1 - len(updated)))
    updated[index] = answer
    return updated


def _evolve(state: Session, **updates) -> Session:
    # model_copy(update=...) does not validate
    return Session.model_validate({**state.model_dump(), **updates})


def _check_index(state: Session, index: int) -> None:
    if state.questions is None or not 0 <= index < len(state.questions):
        raise ValueError(f"No question at index {index}")


def reduce(state: Session, action: Action) -> Session:
    """Apply one action to the session and return the new session."""
    if isinstance(action, UpdateContext):
        if state.has_started:
            logger.debug("Ignoring context update: interview already started")
            return state
        updates = {
            name: value
            for name, value in (
                ("role", action.role),
                ("resume", action.resume),
                ("short_blurb", action.short_blurb),
                ("job_description", action.job_description),
            )
            if value is not None
        }
        return _evolve(state, **updates)

    if isinstance(action, QuestionsGenerated):
        if state.has_started:
            logger.debug("Ignoring generated questions: questions already set")
            return state
        expected = CLIENT_CONFIG["question_count"]
        if len(action.questions) != expected:
            raise ValueError(f"Expected {expected} questions, got {len(action.questions)}")
        return _evolve(
            state,
            questions=list(action.questions),
            current_question_index=0,
            answers=[],
        )

    if isinstance(action, AnswerCoached):
        _check_index(state, action.index)
        answer = Answer(text=action.text, feedback=action.feedback)
        return _evolve(
            state,
            answers=_with_answer(state.answers, action.index, answer),
        )

    if isinstance(action, FeedbackRegenerated):
        _check_index(state, action.index)
        existing = state.answer_at(action.index)
        if existing is None or existing.feedback is None:
            return state
        answer = existing.model_copy(update={"feedback": action.feedback})
        return _evolve(
            state,
            answers=_with_answer(state.answers, action.index, answer),
        )

    if isinstance(action, ImprovedAnswerRewritten):
        _check_index(state, action.index)
        existing = state.answer_at(action.index)
        if existing is None or existing.feedback is None:
            return state
        if action.mode == RewriteMode.SHORTEN:
            rewritten = transforms.shorten(existing.feedback.improved_answer)
        elif action.mode == RewriteMode.ADD_METRICS:
            rewritten = transforms.add_metrics(existing.feedback.improved_answer)
        else:
            raise ValueError(f"{action.mode.value} is not a local rewrite")
        feedback = existing.feedback.model_copy(update={"improved_answer": rewritten})
        answer = existing.model_copy(update={"feedback": feedback})
        return _evolve(
            state,
            answers=_with_answer(state.answers, action.index, answer),
        )

    if isinstance(action, NextQuestion):
        if state.questions is None:
            return state
        last_index = len(state.questions) - 1
        if state.current_question_index >= last_index:
            return state
        return _evolve(state, current_question_index=state.current_question_index + 1)

    if isinstance(action, PreviousQuestion):
        if state.questions is None or state.current_question_index <= 0:
            return state
        return _evolve(state, current_question_index=state.current_question_index - 1)

    if isinstance(action, Clear):
        return Session()

    raise TypeError(f"Unknown action: {action!r}")
