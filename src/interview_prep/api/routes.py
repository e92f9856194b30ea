# API Routes
"""
FastAPI route handlers for the coaching API.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from .coaching_service import (
    GENERIC_ERROR_MESSAGE,
    CoachingService,
    coaching_service,
    validate_coach_request,
    validate_question_request,
)
from .models import (
    CoachAnswerRequest,
    CoachAnswerResponse,
    ErrorResponse,
    GenerateQuestionRequest,
    GenerateQuestionResponse,
)
from interview_prep.config import LLM_CONFIG, SERVER_CONFIG

logger = logging.getLogger(__name__)

router = APIRouter(prefix=SERVER_CONFIG["api_prefix"], tags=["coaching"])


def get_coaching_service() -> CoachingService:
    """Dependency to get the global coaching service singleton."""
    return coaching_service


@router.post(
    "/generate-question",
    response_model=GenerateQuestionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generate an interview question",
    description="Generate one behavioral or scenario question for the role and job description."
)
async def generate_question(
    request: GenerateQuestionRequest,
    service: CoachingService = Depends(get_coaching_service)
) -> GenerateQuestionResponse:
    """
    Generate a single interview question.

    The client calls this once per question; nothing is stored server-side.
    """
    try:
        context = validate_question_request(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        question = await service.generate_question(context)
    except Exception as e:
        logger.exception(f"/generate-question error: {e}")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)

    return GenerateQuestionResponse(question=question)


@router.post(
    "/coach-answer",
    response_model=CoachAnswerResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Coach an answer",
    description="Score an answer to an interview question and suggest an improved version."
)
async def coach_answer(
    request: CoachAnswerRequest,
    api_key: Optional[str] = Header(None, alias=LLM_CONFIG["api_key_header"]),
    service: CoachingService = Depends(get_coaching_service)
) -> CoachAnswerResponse:
    """
    Score and rewrite a candidate answer.

    An API key passed in the request header is used instead of the
    server's default credential for this call only.
    """
    try:
        context = validate_coach_request(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        reply = await service.coach_answer(context, api_key=api_key)
    except Exception as e:
        logger.exception(f"/coach-answer error: {e}")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR_MESSAGE)

    return CoachAnswerResponse(
        score=reply.score,
        summary=reply.summary,
        improved_answer=reply.improved_answer,
        watchouts=reply.watchouts,
    )
