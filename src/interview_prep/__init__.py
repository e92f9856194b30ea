# Interview Prep
"""
Role-specific interview practice: an LLM-backed coaching API and the
client-side session that drives it.
"""

__version__ = "1.0.0"
