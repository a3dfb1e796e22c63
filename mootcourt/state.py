"""
state.py

Defines the session state the controller owns, and the pure
transition functions that move it forward.

Each transition takes a MootState and returns a new MootState.
Nothing here touches the network.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .models import CaseData, EvaluationResult, Message, Phase, Session


@dataclass(frozen=True)
class MootState:
    phase: Phase = "setup"
    session: Optional[Session] = None
    case: Optional[CaseData] = None
    messages: Tuple[Message, ...] = ()
    evaluation: Optional[EvaluationResult] = None

    # Transient
    loading: bool = False
    error: Optional[str] = None

    # Bumped on every start and reset; replies tagged with an older epoch are stale
    epoch: int = 0

    @property
    def has_session(self) -> bool:
        return self.session is not None


def initial_state(epoch: int = 0) -> MootState:
    return MootState(epoch=epoch)


# -------------------------------
# Generic action bookkeeping
# -------------------------------

def begin_action(state: MootState) -> MootState:
    """Every action clears the previous error and shows the spinner."""
    return replace(state, loading=True, error=None)


def clear_error(state: MootState) -> MootState:
    return replace(state, error=None)


def action_failed(state: MootState, message: str) -> MootState:
    """Phase stays where it was; the error is surfaced."""
    return replace(state, loading=False, error=message)


# -------------------------------
# Per-action transitions
# -------------------------------

def session_started(state: MootState, session: Session, case: CaseData) -> MootState:
    return replace(
        state,
        phase="courtroom",
        session=session,
        case=case,
        messages=(),
        evaluation=None,
        loading=False,
        error=None,
        epoch=state.epoch + 1,
    )


def student_spoke(state: MootState, message: Message) -> MootState:
    """Append the student's message before the backend answers."""
    return replace(state, messages=state.messages + (message,))


def reply_received(state: MootState, message: Message) -> MootState:
    return replace(state, messages=state.messages + (message,), loading=False)


def evaluation_received(state: MootState, evaluation: EvaluationResult) -> MootState:
    return replace(state, phase="evaluation", evaluation=evaluation, loading=False)


def reset_state(state: MootState) -> MootState:
    return initial_state(epoch=state.epoch + 1)
