"""
Interview Prep Configuration

Centralized configuration for the coaching API and the session client.
Values can be overridden through environment variables (or a .env file).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


# ============================================================================
# Language Model Configuration
# ============================================================================

LLM_CONFIG = {
    # Chat model used for both question generation and coaching
    "model": os.getenv("INTERVIEW_PREP_MODEL", "gpt-4o-mini"),

    # Environment variable holding the default (process-wide) credential
    "api_key_env": "OPENAI_API_KEY",

    # Header carrying an optional per-request credential for coaching
    "api_key_header": "x-openai-api-key",

    # Higher temperature gives more varied questions
    "question_temperature": 0.7,

    # Lower temperature keeps scoring consistent
    "coaching_temperature": 0.4,
}

# ============================================================================
# Server Configuration
# ============================================================================

SERVER_CONFIG = {
    "host": os.getenv("INTERVIEW_PREP_HOST", "0.0.0.0"),
    "port": int(os.getenv("INTERVIEW_PREP_PORT", "8000")),

    # Route prefix, matching the paths the browser client calls
    "api_prefix": "/api",

    "version": "1.0.0",
}

# ============================================================================
# Session Client Configuration
# ============================================================================

CLIENT_CONFIG = {
    # Base URL of the coaching API
    "base_url": os.getenv("INTERVIEW_PREP_API_URL", "http://localhost:8000"),

    # Number of questions generated per interview
    "question_count": 5,
}

# ============================================================================
# Local Storage Configuration
# ============================================================================

STORAGE_CONFIG = {
    # Directory holding the persisted session record
    "directory": os.getenv(
        "INTERVIEW_PREP_HOME", str(Path.home() / ".interview_prep")
    ),

    # Fixed storage key (the file name is derived from it)
    "session_key": "interviewPrepSession",
}
