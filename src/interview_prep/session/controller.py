# Session Controller
"""
Drives one interview session: calls the coaching API, feeds results through
the reducer, and persists the session after every change.

Network failures never leave a half-applied change behind. The user is told
which action failed and can try again; nothing is retried automatically.
"""

import logging
from typing import Callable, Optional, Union

from interview_prep.config import CLIENT_CONFIG
from interview_prep.roles import Role
from interview_prep.session.client import CoachClient, CoachClientError
from interview_prep.session.models import Session, SessionStatus
from interview_prep.session.reducer import (
    Action,
    AnswerCoached,
    Clear,
    FeedbackRegenerated,
    ImprovedAnswerRewritten,
    NextQuestion,
    PreviousQuestion,
    QuestionsGenerated,
    RewriteMode,
    UpdateContext,
    reduce,
)
from interview_prep.session.store import SessionStore

logger = logging.getLogger(__name__)


MISSING_FIELDS_MESSAGE = "Please complete all required fields before starting"
EMPTY_ANSWER_MESSAGE = "Please write an answer before submitting"
CLEAR_PROMPT = "Clear all progress and start over?"


def _failure_message(action: str) -> str:
    return f"Something went wrong while {action}. Please try again."


class SessionController:
    """
    Client-side interview state machine.

    Setup -> Interviewing: start_interview() once role, resume and job
    description are filled in. Interviewing -> Completed happens on its own
    when every question has feedback. clear() returns to Setup from anywhere.
    """

    def __init__(
        self,
        client: CoachClient,
        store: SessionStore,
        notify: Optional[Callable[[str], None]] = None
    ):
        """
        Args:
            client: Coaching API client
            store: Local session store; a stored session is restored
            notify: Shows a message to the user (defaults to logging it)
        """
        self.client = client
        self.store = store
        self.notify = notify or logger.warning

        self._state = store.load() or Session()
        self.is_generating_questions = False
        self.is_generating_feedback = False

    # ========================================================================
    # State
    # ========================================================================

    @property
    def state(self) -> Session:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def can_start_interview(self) -> bool:
        state = self._state
        return bool(
            state.role
            and state.resume.strip()
            and state.job_description.strip()
            and not state.has_started
        )

    def dispatch(self, action: Action) -> Session:
        """Apply an action and persist the result."""
        new_state = reduce(self._state, action)

        if isinstance(action, Clear):
            self._state = new_state
            self.store.clear()
        elif new_state is not self._state:
            self._state = new_state
            self.store.save(new_state)

        return self._state

    # ========================================================================
    # Setup
    # ========================================================================

    def update_context(
        self,
        role: Optional[Role] = None,
        resume: Optional[str] = None,
        short_blurb: Optional[str] = None,
        job_description: Optional[str] = None
    ) -> bool:
        """Edit setup fields. Returns False once the interview has started."""
        if self._state.has_started:
            return False

        self.dispatch(UpdateContext(
            role=role,
            resume=resume,
            short_blurb=short_blurb,
            job_description=job_description,
        ))
        return True

    def start_interview(self) -> bool:
        """
        Generate the interview questions, one request at a time.

        Nothing is committed unless every request succeeds.
        """
        if self._state.has_started:
            return False

        if not self.can_start_interview:
            self.notify(MISSING_FIELDS_MESSAGE)
            return False

        state = self._state
        question_count = CLIENT_CONFIG["question_count"]
        self.is_generating_questions = True
        try:
            questions = []
            for i in range(question_count):
                question = self.client.generate_question(
                    role=state.role,
                    resume_text=state.resume,
                    blurb=state.short_blurb,
                    job_description=state.job_description,
                )
                questions.append(question)
                logger.info(f"❓ Question {i + 1}/{question_count} ready")
        except CoachClientError as e:
            logger.error(f"Error generating questions: {e}")
            self.notify(_failure_message("generating questions"))
            return False
        finally:
            self.is_generating_questions = False

        self.dispatch(QuestionsGenerated(questions=questions))
        logger.info(f"✅ Interview started with {question_count} questions")
        return True

    # ========================================================================
    # Interview
    # ========================================================================

    def submit_answer(self, text: str) -> bool:
        """Coach an answer to the current question and store the feedback."""
        state = self._state
        if not state.has_started:
            return False

        answer = text.strip()
        if not answer:
            self.notify(EMPTY_ANSWER_MESSAGE)
            return False

        index = state.current_question_index
        self.is_generating_feedback = True
        try:
            feedback = self.client.coach_answer(
                role=state.role,
                resume_text=state.resume,
                blurb=state.short_blurb,
                job_description=state.job_description,
                question=state.questions[index],
                answer=answer,
            )
        except CoachClientError as e:
            logger.error(f"Error coaching answer: {e}")
            self.notify(_failure_message("coaching your answer"))
            return False
        finally:
            self.is_generating_feedback = False

        self.dispatch(AnswerCoached(index=index, text=answer, feedback=feedback))
        return True

    def next_question(self) -> Session:
        return self.dispatch(NextQuestion())

    def previous_question(self) -> Session:
        return self.dispatch(PreviousQuestion())

    def regenerate_feedback(self, mode: Union[RewriteMode, str]) -> bool:
        """
        Rework the current question's feedback.

        REGENERATE asks the API again with the stored answer; SHORTEN and
        ADD_METRICS rewrite the improved answer locally.
        """
        mode = RewriteMode(mode)
        state = self._state
        index = state.current_question_index
        current = state.current_answer
        if current is None or current.feedback is None:
            return False

        if mode != RewriteMode.REGENERATE:
            self.dispatch(ImprovedAnswerRewritten(index=index, mode=mode))
            return True

        self.is_generating_feedback = True
        try:
            feedback = self.client.coach_answer(
                role=state.role,
                resume_text=state.resume,
                blurb=state.short_blurb,
                job_description=state.job_description,
                question=state.questions[index],
                answer=current.text,
            )
        except CoachClientError as e:
            logger.error(f"Error regenerating feedback: {e}")
            self.notify(_failure_message("regenerating feedback"))
            return False
        finally:
            self.is_generating_feedback = False

        self.dispatch(FeedbackRegenerated(index=index, feedback=feedback))
        return True

    def clear(self, confirm: Callable[[str], bool]) -> bool:
        """Erase all progress after the user confirms."""
        if not confirm(CLEAR_PROMPT):
            return False

        self.dispatch(Clear())
        logger.info("🔄 Session cleared")
        return True
