"""Tests for the coaching reply schema check."""

import pytest

from interview_prep.api.validation import CoachingReply, Invalid, Valid, validate_coaching_reply

from conftest import WELL_FORMED_REPLY


def test_well_formed_reply_is_valid():
    result = validate_coaching_reply(dict(WELL_FORMED_REPLY))

    assert result == Valid(CoachingReply(score=4, summary="S", improved_answer="I", watchouts=["a", "b"]))


def test_float_score_and_extra_fields_are_accepted():
    result = validate_coaching_reply({**WELL_FORMED_REPLY, "score": 3.5, "confidence": "high"})

    assert isinstance(result, Valid)
    assert result.reply.score == 3.5


@pytest.mark.parametrize("score", [0, -2, 11])
def test_out_of_range_score_passes_through(score):
    result = validate_coaching_reply({**WELL_FORMED_REPLY, "score": score})

    assert isinstance(result, Valid)
    assert result.reply.score == score


@pytest.mark.parametrize("parsed, reason", [
    ({**WELL_FORMED_REPLY, "score": "4"}, "score"),
    ({**WELL_FORMED_REPLY, "score": None}, "score"),
    ({**WELL_FORMED_REPLY, "score": False}, "score"),
    ({**WELL_FORMED_REPLY, "score": float("nan")}, "score"),
    ({**WELL_FORMED_REPLY, "summary": 1}, "summary"),
    ({**WELL_FORMED_REPLY, "improvedAnswer": ["I"]}, "improvedAnswer"),
    ({**WELL_FORMED_REPLY, "watchouts": {"a": 1}}, "watchouts"),
    ({"score": 4}, "summary"),
])
def test_malformed_reply_is_invalid(parsed, reason):
    result = validate_coaching_reply(parsed)

    assert isinstance(result, Invalid)
    assert reason in result.reason


@pytest.mark.parametrize("parsed", [None, "text", 4, [WELL_FORMED_REPLY]])
def test_non_object_reply_is_invalid(parsed):
    assert isinstance(validate_coaching_reply(parsed), Invalid)
