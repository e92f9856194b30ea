# Coaching Reply Validation
"""
Schema check for the JSON object the model returns to coach-answer.

The parsed object is either accepted whole (Valid) or rejected with a reason
(Invalid). Fields are never picked out of a partially valid object.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class CoachingReply:
    """A structurally valid coaching reply."""
    score: Union[int, float]
    summary: str
    improved_answer: str
    watchouts: List[Any]


@dataclass(frozen=True)
class Valid:
    reply: CoachingReply


@dataclass(frozen=True)
class Invalid:
    reason: str


ValidationResult = Union[Valid, Invalid]


def validate_coaching_reply(parsed: Any) -> ValidationResult:
    """
    Check a parsed model reply against the coaching schema.

    Expected shape:
        {"score": <number>, "summary": <str>, "improvedAnswer": <str>,
         "watchouts": [...]}

    The score is not range-checked; out-of-range values pass through.
    """
    if not isinstance(parsed, dict):
        return Invalid(f"expected a JSON object, got {type(parsed).__name__}")

    score = parsed.get("score")
    # bool is an int subclass but not a number in the reply schema
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return Invalid("score must be a number")
    if isinstance(score, float) and not math.isfinite(score):
        return Invalid("score must be finite")

    summary = parsed.get("summary")
    if not isinstance(summary, str):
        return Invalid("summary must be a string")

    improved_answer = parsed.get("improvedAnswer")
    if not isinstance(improved_answer, str):
        return Invalid("improvedAnswer must be a string")

    watchouts = parsed.get("watchouts")
    if not isinstance(watchouts, list):
        return Invalid("watchouts must be an array")

    return Valid(CoachingReply(
        score=score,
        summary=summary,
        improved_answer=improved_answer,
        watchouts=watchouts,
    ))
