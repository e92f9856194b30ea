# Session Models
"""
Pydantic models for the client-side interview session.

Attribute names are snake_case; the persisted JSON uses camelCase keys.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from interview_prep.config import CLIENT_CONFIG
from interview_prep.roles import Role


# ============================================================================
# Enums
# ============================================================================

class ScoreCategory(str, Enum):
    """Coarse rating shown to the user."""
    STRONG = "strong"
    GOOD = "good"
    NEEDS_WORK = "needs-work"


class SessionStatus(str, Enum):
    """Where the session is in the interview. Computed, never stored."""
    SETUP = "setup"
    INTERVIEWING = "interviewing"
    COMPLETED = "completed"


def map_score(score: float) -> ScoreCategory:
    """Map the model's 1-5 rating onto a category."""
    if score >= 4:
        return ScoreCategory.STRONG
    if score >= 3:
        return ScoreCategory.GOOD
    return ScoreCategory.NEEDS_WORK


# ============================================================================
# Session State
# ============================================================================

class Feedback(BaseModel):
    """Coaching feedback attached to one answer."""
    score: ScoreCategory
    verdict: str
    improved_answer: str = Field(..., alias="improvedAnswer")
    improvements: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}


class Answer(BaseModel):
    """A submitted answer and, once coached, its feedback."""
    text: str
    feedback: Optional[Feedback] = None

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}


class Session(BaseModel):
    """
    Complete state of an interview session.

    questions is None until the interview starts, then holds exactly
    question_count entries. answers is sparse: answers[i] is None until
    question i has been answered.
    """
    role: Optional[Role] = None
    resume: str = ""
    short_blurb: str = Field("", alias="shortBlurb")
    job_description: str = Field("", alias="jobDescription")
    questions: Optional[List[str]] = None
    current_question_index: int = Field(0, alias="currentQuestionIndex")
    answers: List[Optional[Answer]] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def check_interview_shape(self) -> "Session":
        if self.questions is None:
            if self.answers or self.current_question_index != 0:
                raise ValueError("answers and question index require questions")
            return self

        expected = CLIENT_CONFIG["question_count"]
        if len(self.questions) != expected:
            raise ValueError(f"expected {expected} questions, got {len(self.questions)}")
        if not 0 <= self.current_question_index < len(self.questions):
            raise ValueError(f"question index {self.current_question_index} out of range")
        if len(self.answers) > len(self.questions):
            raise ValueError("more answers than questions")
        return self

    @property
    def has_started(self) -> bool:
        return self.questions is not None

    @property
    def total_questions(self) -> int:
        return len(self.questions) if self.questions else 0

    @property
    def current_question(self) -> Optional[str]:
        if self.questions is None:
            return None
        return self.questions[self.current_question_index]

    @property
    def current_answer(self) -> Optional[Answer]:
        return self.answer_at(self.current_question_index)

    def answer_at(self, index: int) -> Optional[Answer]:
        if 0 <= index < len(self.answers):
            return self.answers[index]
        return None

    @property
    def questions_completed(self) -> int:
        return sum(1 for a in self.answers if a is not None and a.feedback is not None)

    @property
    def all_answered(self) -> bool:
        if not self.questions:
            return False
        answers = [self.answer_at(i) for i in range(len(self.questions))]
        return all(a is not None and a.feedback is not None for a in answers)

    @property
    def status(self) -> SessionStatus:
        if self.questions is None:
            return SessionStatus.SETUP
        if self.all_answered:
            return SessionStatus.COMPLETED
        return SessionStatus.INTERVIEWING
