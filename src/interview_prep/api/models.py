# API Request/Response Models
"""
Pydantic models for API request and response schemas.
"""

from datetime import datetime
from typing import Any, List, Union

from pydantic import BaseModel, Field


# ============================================================================
# Request Models
# ============================================================================

# Request fields are typed loosely on purpose: validation happens in the
# coaching service so that errors are reported one field at a time, in order.

class GenerateQuestionRequest(BaseModel):
    """Request to generate a single interview question."""
    role: Any = None
    resume_text: Any = Field("", alias="resumeText")
    blurb: Any = ""
    job_description: Any = Field("", alias="jobDescription")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "role": "ai_pm",
                "resumeText": "Led the launch of an LLM-powered support assistant...",
                "blurb": "PM with 6 years in B2B SaaS, moving into AI products.",
                "jobDescription": "We are hiring an AI Product Manager to own our copilot roadmap..."
            }
        }
    }


class CoachAnswerRequest(GenerateQuestionRequest):
    """Request to score and coach an answer to an interview question."""
    question: Any = ""
    answer: Any = ""

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "role": "eng_manager",
                "resumeText": "Managed a platform team of 8 engineers...",
                "blurb": "Engineering manager focused on developer experience.",
                "jobDescription": "Seeking an Engineering Manager for our infrastructure org...",
                "question": "Tell me about a time you turned around an underperforming team.",
                "answer": "When I joined, deploys took a week..."
            }
        }
    }


# ============================================================================
# Response Models
# ============================================================================

class GenerateQuestionResponse(BaseModel):
    """A generated interview question."""
    question: str


class CoachAnswerResponse(BaseModel):
    """Structured coaching feedback for one answer."""
    score: Union[int, float]
    summary: str
    improved_answer: str = Field(..., alias="improvedAnswer")
    watchouts: List[Any]

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "score": 4,
                "summary": "Clear story with a strong result; the setup runs long.",
                "improvedAnswer": "When I joined, deploys took a week. I...",
                "watchouts": ["Lead with the outcome", "Name the metric you moved"]
            }
        }
    }


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Job description is required."
            }
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
    model: str
    default_credential_configured: bool
