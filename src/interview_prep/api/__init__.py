# Interview Prep API Package
"""
FastAPI backend for the Interview Prep coach.

Provides REST API endpoints for:
- Generating role-specific interview questions
- Scoring and rewriting candidate answers
"""

from .main import app
from .coaching_service import CoachingService, coaching_service
from .llm import LLMProvider, llm_provider

__all__ = [
    "app",
    "CoachingService",
    "coaching_service",
    "LLMProvider",
    "llm_provider",
]
