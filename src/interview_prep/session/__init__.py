# Interview Session Package
"""
Client-side interview session: state, transitions, persistence, and the
controller that ties them to the coaching API.
"""

from .client import CoachClient, CoachClientError
from .controller import SessionController
from .models import Answer, Feedback, ScoreCategory, Session, SessionStatus, map_score
from .reducer import RewriteMode, reduce
from .store import SessionStore

__all__ = [
    "Answer",
    "CoachClient",
    "CoachClientError",
    "Feedback",
    "RewriteMode",
    "ScoreCategory",
    "Session",
    "SessionController",
    "SessionStatus",
    "SessionStore",
    "map_score",
    "reduce",
]
