"""
models.py

Data model shared by the controller, the webhook client and the views.

All records are frozen dataclasses and all sequences are tuples, so a
value handed to a view can never change underneath it. The from_payload
constructors validate webhook responses and raise MalformedResponseError
when a required field is missing or has the wrong type.
"""

import math
import random
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Literal, Tuple

from .errors import MalformedResponseError

Role = Literal["petitioner", "respondent"]
JudgeStyle = Literal["strict", "neutral", "lenient"]
Sender = Literal["student", "judge", "opponent"]
Phase = Literal["setup", "courtroom", "evaluation"]

ROLES: Tuple[str, ...] = ("petitioner", "respondent")
JUDGE_STYLES: Tuple[str, ...] = ("strict", "neutral", "lenient")

MIN_SCORE = 0
MAX_SCORE = 10


# -------------------------------
# Identifiers
# -------------------------------

def new_session_id() -> str:
    """Locally unique session id: sess_<epoch millis>_<random>."""
    return f"sess_{int(time.time() * 1000)}_{random.randint(0, 999_999)}"


def new_message_id() -> str:
    return str(uuid.uuid4())


# -------------------------------
# Field helpers
# -------------------------------

def _require(payload: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"{where}: expected a JSON object", field=key)
    if key not in payload or payload[key] is None:
        raise MalformedResponseError(f"{where}: missing field '{key}'", field=key)
    return payload[key]


def _require_str(payload: Dict[str, Any], key: str, where: str) -> str:
    value = _require(payload, key, where)
    if not isinstance(value, str):
        raise MalformedResponseError(f"{where}: field '{key}' must be a string", field=key)
    return value


def _require_str_list(payload: Dict[str, Any], key: str, where: str) -> Tuple[str, ...]:
    value = _require(payload, key, where)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedResponseError(
            f"{where}: field '{key}' must be a list of strings", field=key
        )
    return tuple(value)


def _require_choice(payload: Dict[str, Any], key: str, choices: Tuple[str, ...], where: str) -> str:
    value = _require_str(payload, key, where)
    if value not in choices:
        raise MalformedResponseError(
            f"{where}: field '{key}' must be one of {', '.join(choices)}", field=key
        )
    return value


def _require_score(payload: Dict[str, Any], key: str, where: str) -> int:
    value = _require(payload, key, where)
    # bool is an int subclass; a score of True makes no sense
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"{where}: score '{key}' must be a number", field=key)
    # Whole numbers only; 7.0 counts as 7
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise MalformedResponseError(f"{where}: score '{key}' must be a whole number", field=key)
    score = int(value)
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise MalformedResponseError(
            f"{where}: score '{key}' must be between {MIN_SCORE} and {MAX_SCORE}", field=key
        )
    return score


# -------------------------------
# Records
# -------------------------------

@dataclass(frozen=True)
class Session:
    session_id: str
    case_id: str
    role: Role
    judge_style: JudgeStyle


@dataclass(frozen=True)
class CaseData:
    title: str
    facts: str
    issues: Tuple[str, ...] = ()
    precedents: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CaseData":
        where = "case"
        return cls(
            title=_require_str(payload, "title", where),
            facts=_require_str(payload, "facts", where),
            issues=_require_str_list(payload, "issues", where),
            precedents=_require_str_list(payload, "precedents", where),
        )


@dataclass(frozen=True)
class Message:
    id: str
    sender: Sender
    text: str

    @classmethod
    def student(cls, text: str) -> "Message":
        return cls(id=new_message_id(), sender="student", text=text)


@dataclass(frozen=True)
class StartResult:
    """Decoded /moot/start response: the session the backend opened and its case."""

    session: Session
    case: CaseData

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "StartResult":
        where = "start response"
        session = Session(
            session_id=_require_str(payload, "sessionId", where),
            case_id=_require_str(payload, "caseId", where),
            role=_require_choice(payload, "role", ROLES, where),
            judge_style=_require_choice(payload, "judgeStyle", JUDGE_STYLES, where),
        )
        case = CaseData.from_payload(_require(payload, "case", where))
        return cls(session=session, case=case)


@dataclass(frozen=True)
class Reply:
    """Decoded /moot/utterance response."""

    speaker: Sender
    text: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Reply":
        where = "utterance response"
        text = _require_str(payload, "text", where)
        # Anything that is not the judge speaks for the other side
        speaker = "judge" if payload.get("speaker") == "judge" else "opponent"
        return cls(speaker=speaker, text=text)

    def to_message(self) -> Message:
        return Message(id=new_message_id(), sender=self.speaker, text=self.text)


@dataclass(frozen=True)
class EvaluationScores:
    legal_reasoning: int
    precedent_usage: int
    clarity: int
    responsiveness: int
    overall_persuasiveness: int

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "EvaluationScores":
        where = "scores"
        return cls(
            legal_reasoning=_require_score(payload, "legalReasoning", where),
            precedent_usage=_require_score(payload, "precedentUsage", where),
            clarity=_require_score(payload, "clarity", where),
            responsiveness=_require_score(payload, "responsiveness", where),
            overall_persuasiveness=_require_score(payload, "overallPersuasiveness", where),
        )


@dataclass(frozen=True)
class EvaluationResult:
    scores: EvaluationScores
    suggestions: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "EvaluationResult":
        where = "evaluation response"
        return cls(
            scores=EvaluationScores.from_payload(_require(payload, "scores", where)),
            suggestions=_require_str_list(payload, "suggestions", where),
        )
