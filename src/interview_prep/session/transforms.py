# Improved Answer Transforms
"""
Local rewrites of an improved answer. No model call involved.
"""

METRICS_SENTENCE = (
    "I also quantified the impact by tying outcomes to metrics like activation, "
    "velocity, and adoption so stakeholders saw clear results."
)


def shorten(improved_answer: str) -> str:
    """Keep the first two sentence segments (split on '.')."""
    shortened = ".".join(improved_answer.split(".")[:2]).strip()
    if not shortened.endswith("."):
        shortened = f"{shortened}."
    return shortened


def add_metrics(improved_answer: str) -> str:
    """Append the metrics sentence. Not idempotent: each call appends again."""
    return f"{improved_answer} {METRICS_SENTENCE}"
