import threading
from typing import Any, Dict, List, Optional

import pytest

from mootcourt.controller import SessionController
from mootcourt.errors import WebhookStatusError
from mootcourt.models import EvaluationResult, Reply, StartResult


def start_payload(**overrides) -> Dict[str, Any]:
    payload = {
        "sessionId": "sess_1_1",
        "caseId": "case_001",
        "role": "petitioner",
        "judgeStyle": "neutral",
        "case": {
            "title": "State v. Speaker",
            "facts": "The petitioner was arrested for a street-corner speech.",
            "issues": ["Is the ordinance overbroad?", "Was the speech protected?"],
            "precedents": ["Brandenburg v. Ohio", "Cohen v. California"],
        },
    }
    payload.update(overrides)
    return payload


def evaluation_payload(score: int = 7, suggestions: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "scores": {
            "legalReasoning": score,
            "precedentUsage": score,
            "clarity": score,
            "responsiveness": score,
            "overallPersuasiveness": score,
        },
        "suggestions": suggestions if suggestions is not None else ["Cite Brandenburg earlier.", "Answer the bench directly."],
    }


class FakeResponse:
    def __init__(self, status_code: int = 200, data: Any = None, invalid_json: bool = False):
        self.status_code = status_code
        self._data = data
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._data


class FakeHttp:
    """
    Stands in for requests.Session. Responses are queued per path suffix
    ("/moot/start", ...); every call is recorded.
    """

    def __init__(self):
        self.responses: Dict[str, List[Any]] = {}
        self.calls: List[Dict[str, Any]] = []

    def queue(self, path: str, response: Any) -> None:
        self.responses.setdefault(path, []).append(response)

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        for path, queued in self.responses.items():
            if url.endswith(path) and queued:
                item = queued.pop(0)
                if isinstance(item, Exception):
                    raise item
                return item
        raise AssertionError(f"no response queued for {url}")

    def bodies(self, path: str) -> List[Dict[str, Any]]:
        return [c["json"] for c in self.calls if c["url"].endswith(path)]


class FakeClient:
    """
    Stands in for MootClient at the controller boundary.

    Set an *_error attribute to make the call raise. Set utterance_gate
    to hold send_utterance until the test releases it.
    """

    def __init__(self):
        self.start_result = StartResult.from_payload(start_payload())
        self.reply = Reply(speaker="judge", text="Counsel, address the overbreadth point.")
        self.evaluation = EvaluationResult.from_payload(evaluation_payload())
        self.start_error: Optional[Exception] = None
        self.utterance_error: Optional[Exception] = None
        self.evaluate_error: Optional[Exception] = None
        self.utterance_gate: Optional[threading.Event] = None
        self.utterance_called = threading.Event()
        self.calls: List[tuple] = []

    def start_session(self, session_id, case_id, role, judge_style):
        self.calls.append(("start", session_id, case_id, role, judge_style))
        if self.start_error:
            raise self.start_error
        return self.start_result

    def send_utterance(self, session, transcript, last_student_utterance):
        self.calls.append(("utterance", session, transcript, last_student_utterance))
        self.utterance_called.set()
        if self.utterance_gate is not None:
            self.utterance_gate.wait(timeout=5)
        if self.utterance_error:
            raise self.utterance_error
        return self.reply

    def evaluate(self, session, transcript):
        self.calls.append(("evaluate", session, transcript))
        if self.evaluate_error:
            raise self.evaluate_error
        return self.evaluation


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def controller(fake_client):
    return SessionController(client=fake_client)


@pytest.fixture
def in_courtroom(controller):
    controller.start("case_001", "petitioner", "neutral")
    return controller


@pytest.fixture
def server_error():
    return WebhookStatusError("Utterance failed: 500", 500)
