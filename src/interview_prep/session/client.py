# Coaching API Client
"""
HTTP client the session controller uses to reach the coaching API.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from interview_prep.config import CLIENT_CONFIG, LLM_CONFIG, SERVER_CONFIG
from interview_prep.roles import Role
from interview_prep.session.models import Feedback, map_score

logger = logging.getLogger(__name__)


class CoachClientError(RuntimeError):
    """A coaching request failed: transport error, non-OK status, or bad body."""


class CoachClient:
    """
    Thin client for POST /generate-question and POST /coach-answer.

    Calls block until the server answers; there is no timeout and no retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.Client] = None
    ):
        """
        Args:
            base_url: API base URL (defaults to value from config)
            api_key: Optional per-request model credential, sent with
                     coach-answer calls only
            http_client: Pre-built client (e.g. a TestClient); takes
                         precedence over base_url
        """
        self.api_key = api_key
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(
            base_url=base_url or CLIENT_CONFIG["base_url"],
            timeout=None,
        )
        self._prefix = SERVER_CONFIG["api_prefix"]

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "CoachClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(
        self,
        path: str,
        payload: Dict[str, Any],
        fallback_error: str,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        url = f"{self._prefix}{path}"
        try:
            response = self.http.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise CoachClientError(f"{fallback_error}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success or not isinstance(body, dict) or "error" in body:
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning(f"POST {url} failed with {response.status_code}: {message or fallback_error}")
            raise CoachClientError(message or fallback_error)

        return body

    def generate_question(
        self,
        role: Role,
        resume_text: str,
        blurb: str,
        job_description: str
    ) -> str:
        """Ask the API for one interview question."""
        body = self._post(
            "/generate-question",
            {
                "role": role.value,
                "resumeText": resume_text,
                "blurb": blurb,
                "jobDescription": job_description,
            },
            fallback_error="Failed to generate a question",
        )

        question = body.get("question")
        if not isinstance(question, str) or not question:
            raise CoachClientError("Failed to generate a question")
        return question

    def coach_answer(
        self,
        role: Role,
        resume_text: str,
        blurb: str,
        job_description: str,
        question: str,
        answer: str
    ) -> Feedback:
        """Ask the API to coach an answer and map the reply to Feedback."""
        headers = {LLM_CONFIG["api_key_header"]: self.api_key} if self.api_key else None
        body = self._post(
            "/coach-answer",
            {
                "role": role.value,
                "resumeText": resume_text,
                "blurb": blurb,
                "jobDescription": job_description,
                "question": question,
                "answer": answer,
            },
            fallback_error="Failed to coach answer",
            headers=headers,
        )

        score = body.get("score")
        summary = body.get("summary")
        improved_answer = body.get("improvedAnswer")
        if (
            isinstance(score, bool)
            or not isinstance(score, (int, float))
            or not isinstance(summary, str)
            or not isinstance(improved_answer, str)
        ):
            raise CoachClientError("Failed to coach answer")

        watchouts = body.get("watchouts")
        if not isinstance(watchouts, list):
            watchouts = []
        return Feedback(
            score=map_score(score),
            verdict=summary,
            improved_answer=improved_answer,
            improvements=[w for w in watchouts if isinstance(w, str)],
        )
