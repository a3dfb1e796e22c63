"""
clients.py

Thin wrapper around the moot court webhook (n8n):
- /moot/start      -> open a session and fetch the case file
- /moot/utterance  -> get the judge's or opponent's reply
- /moot/evaluate   -> score the finished session

We keep functions simple so it's easy to read and debug.
Every failure is raised as a MootClientError subclass.
"""

from typing import Any, Dict, Optional

import requests
import structlog

from .config import MOOT_BASE_URL, REQUEST_TIMEOUT_SECONDS
from .errors import MalformedResponseError, WebhookStatusError, WebhookTransportError
from .models import EvaluationResult, Reply, Session, StartResult

logger = structlog.get_logger(__name__)


class MootClient:
    """
    One client per controller. Holds a requests.Session so
    consecutive calls reuse the same connection.
    """

    def __init__(
        self,
        base_url: str = MOOT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    # -------------------------------
    # Low-level POST
    # -------------------------------

    def _post(self, path: str, body: Dict[str, Any], failure: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("webhook_request", url=url, session_id=body.get("sessionId"))
        try:
            resp = self.http.post(
                url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise WebhookTransportError(f"{failure}: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise WebhookStatusError(f"{failure}: {resp.status_code}", resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise WebhookTransportError(f"{failure}: response was not valid JSON") from exc

        if not isinstance(data, dict):
            raise MalformedResponseError(f"{failure}: expected a JSON object")
        return data

    # -------------------------------
    # Endpoints
    # -------------------------------

    def start_session(self, session_id: str, case_id: str, role: str, judge_style: str) -> StartResult:
        """
        Ask the backend to open a session.
        Returns the session as echoed by the backend plus the case file.
        """
        data = self._post(
            "/moot/start",
            {
                "sessionId": session_id,
                "caseId": case_id,
                "role": role,
                "judgeStyle": judge_style,
            },
            failure="Start session failed",
        )
        return StartResult.from_payload(data)

    def send_utterance(self, session: Session, transcript: str, last_student_utterance: str) -> Reply:
        """
        Send the full transcript (student's new line included)
        and get back one reply from the bench or the other side.
        """
        data = self._post(
            "/moot/utterance",
            {
                "sessionId": session.session_id,
                "caseId": session.case_id,
                "role": session.role,
                "judgeStyle": session.judge_style,
                "transcript": transcript,
                "lastStudentUtterance": last_student_utterance,
            },
            failure="Utterance failed",
        )
        return Reply.from_payload(data)

    def evaluate(self, session: Session, transcript: str) -> EvaluationResult:
        data = self._post(
            "/moot/evaluate",
            {
                "sessionId": session.session_id,
                "caseId": session.case_id,
                "role": session.role,
                "transcript": transcript,
            },
            failure="Evaluation failed",
        )
        return EvaluationResult.from_payload(data)
