# Coaching Service
"""
Service for generating interview questions and coaching answers.

Both operations are stateless: validate the request, build a role-aware
prompt, make one language-model call, and check the result. Request
validation raises ValueError (a client error); everything that goes wrong
after that raises from the backend side and is reported as a server error.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from interview_prep.api.llm import LLMProvider, llm_provider
from interview_prep.api.models import CoachAnswerRequest, GenerateQuestionRequest
from interview_prep.api.validation import CoachingReply, Invalid, validate_coaching_reply
from interview_prep.config import LLM_CONFIG
from interview_prep.roles import Role

logger = logging.getLogger(__name__)


GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."
INVALID_JSON_MESSAGE = "Invalid JSON payload."
INVALID_ROLE_MESSAGE = "Invalid role provided."

QUESTION_SYSTEM_PROMPT = (
    "You are an interview prep coach for tech roles. The user will give you a "
    "target role, resume text, short blurb, and job description. Output ONE "
    "high-signal interview question that is relevant to the role, aligns with "
    "the job description, and is behavioral or scenario-based. Respond with "
    "only the question text."
)

COACH_SYSTEM_PROMPT = (
    "You are an expert interview coach for tech roles. You will receive a role, "
    "candidate resume text, blurb, job description, interview question, and the "
    "candidate's answer. Respond ONLY with valid JSON: "
    "{ \"score\": <integer 1-5>, \"summary\": \"<1-2 sentence verdict>\", "
    "\"improvedAnswer\": \"<rewritten answer>\", "
    "\"watchouts\": [\"<short bullet about what to improve or avoid>\", ...] }."
)


class CoachingError(RuntimeError):
    """The language model could not produce a usable result."""


# ============================================================================
# Data Models
# ============================================================================

@dataclass
class CoachingContext:
    """Validated, normalized inputs for a prompt."""
    role: Role
    resume_text: str
    blurb: str
    job_description: str
    question: str = ""
    answer: str = ""


# ============================================================================
# Request Validation
# ============================================================================

def _require_role(role: Any) -> Role:
    if not role or not isinstance(role, str):
        raise ValueError(INVALID_ROLE_MESSAGE)
    try:
        return Role(role)
    except ValueError:
        raise ValueError(INVALID_ROLE_MESSAGE) from None


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value


def _optional_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def validate_question_request(request: GenerateQuestionRequest) -> CoachingContext:
    """Check a generate-question request. First failing field wins."""
    role = _require_role(request.role)
    job_description = _require_text(request.job_description, "Job description is required.")

    return CoachingContext(
        role=role,
        resume_text=_optional_text(request.resume_text),
        blurb=_optional_text(request.blurb),
        job_description=job_description,
    )


def validate_coach_request(request: CoachAnswerRequest) -> CoachingContext:
    """Check a coach-answer request in order: role, job description, question, answer."""
    role = _require_role(request.role)
    job_description = _require_text(request.job_description, "Job description is required.")
    question = _require_text(request.question, "Question is required.")
    answer = _require_text(request.answer, "Answer is required.")

    return CoachingContext(
        role=role,
        resume_text=_optional_text(request.resume_text),
        blurb=_optional_text(request.blurb),
        job_description=job_description,
        question=question,
        answer=answer,
    )


# ============================================================================
# Prompt Building
# ============================================================================

def build_question_messages(context: CoachingContext) -> List[Dict[str, str]]:
    user_message = (
        f"Role: {context.role.label}\n"
        f"Resume: {context.resume_text}\n"
        f"Blurb: {context.blurb}\n"
        f"Job Description: {context.job_description}"
    )
    return [
        {"role": "system", "content": QUESTION_SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]


def build_coach_messages(context: CoachingContext) -> List[Dict[str, str]]:
    user_message = (
        f"Role: {context.role.label}\n"
        f"Resume: {context.resume_text}\n"
        f"Blurb: {context.blurb}\n"
        f"Job Description: {context.job_description}\n"
        f"Question: {context.question}\n"
        f"Answer: {context.answer}"
    )
    return [
        {"role": "system", "content": COACH_SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]


# ============================================================================
# Coaching Service
# ============================================================================

class CoachingService:
    """
    Runs the two coaching operations against the language model.

    Usage:
        service = CoachingService()
        context = validate_question_request(request)
        question = await service.generate_question(context)
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self.provider = provider or llm_provider

    async def _complete(self, messages: List[Dict[str, str]], temperature: float,
                        api_key: Optional[str] = None) -> str:
        llm = self.provider.get_llm(temperature, api_key=api_key)
        # crewai's LLM.call blocks; keep it off the event loop
        response = await asyncio.to_thread(llm.call, messages)
        return response.strip() if isinstance(response, str) else ""

    async def generate_question(self, context: CoachingContext) -> str:
        """
        Generate one behavioral or scenario interview question.

        Always uses the default credential.

        Raises:
            CoachingError: If the model returns nothing
        """
        question = await self._complete(
            build_question_messages(context),
            temperature=LLM_CONFIG["question_temperature"],
        )
        if not question:
            raise CoachingError("No question returned from model")

        logger.info(f"📝 Generated {context.role.value} question: {question[:80]}")
        return question

    async def coach_answer(
        self,
        context: CoachingContext,
        api_key: Optional[str] = None
    ) -> CoachingReply:
        """
        Score an answer and produce an improved rewrite.

        Args:
            context: Validated request context (question and answer set)
            api_key: Optional per-request credential

        Raises:
            CoachingError: If the reply is empty, not JSON, or not the
                           expected shape
        """
        raw_content = await self._complete(
            build_coach_messages(context),
            temperature=LLM_CONFIG["coaching_temperature"],
            api_key=api_key,
        )
        if not raw_content:
            raise CoachingError("Empty response from model")

        try:
            parsed = json.loads(raw_content)
        except json.JSONDecodeError as e:
            logger.error(f"coach-answer parse error: {e}; raw reply: {raw_content!r}")
            raise CoachingError("Model reply is not valid JSON") from e

        result = validate_coaching_reply(parsed)
        if isinstance(result, Invalid):
            logger.error(f"coach-answer reply rejected: {result.reason}; raw reply: {raw_content!r}")
            raise CoachingError(f"Model reply has the wrong shape: {result.reason}")

        logger.info(f"✅ Coached {context.role.value} answer, score={result.reply.score}")
        return result.reply


# Global service instance (singleton)
coaching_service = CoachingService()
