"""
controller.py

SessionController drives one moot court session:
start -> send_utterance (repeatable) -> end_session -> reset.

It owns a single MootState. Network calls happen outside the lock;
before a reply is applied we check that the state still belongs to
the same epoch and session the request was issued for, and drop the
reply otherwise. This is what keeps a slow reply from reappearing
after the user pressed "Abort Session".
"""

import threading
from typing import Iterator, Optional

import structlog

from .clients import MootClient
from .errors import MootClientError
from .models import Message, Session, new_session_id
from .state import (
    MootState,
    action_failed,
    begin_action,
    clear_error,
    evaluation_received,
    initial_state,
    reply_received,
    reset_state,
    session_started,
    student_spoke,
)
from .transcript import format_transcript

logger = structlog.get_logger(__name__)


class SessionController:
    def __init__(self, client: Optional[MootClient] = None):
        self.client = client or MootClient()
        self._lock = threading.Lock()
        self._state = initial_state()

    def snapshot(self) -> MootState:
        with self._lock:
            return self._state

    # -------------------------------
    # Helpers
    # -------------------------------

    def _is_current(self, epoch: int, session: Optional[Session]) -> bool:
        # Caller holds the lock
        return self._state.epoch == epoch and self._state.session == session

    def _fail(self, epoch: int, session: Optional[Session], action: str, exc: MootClientError) -> MootState:
        with self._lock:
            if not self._is_current(epoch, session):
                logger.info("stale_failure_discarded", action=action, error=str(exc))
                return self._state
            logger.warning(
                "action_failed",
                action=action,
                session_id=session.session_id if session else None,
                error=str(exc),
            )
            self._state = action_failed(self._state, str(exc))
            return self._state

    # -------------------------------
    # Actions
    # -------------------------------

    def start(self, case_id: str, role: str, judge_style: str) -> MootState:
        """
        Open a new session. On failure we stay on the setup screen
        and no session is created. A blank case id only clears the
        previous error.
        """
        case_id = (case_id or "").strip()
        if not case_id:
            with self._lock:
                self._state = clear_error(self._state)
                return self._state

        with self._lock:
            self._state = begin_action(self._state)
            epoch = self._state.epoch
            prior_session = self._state.session

        session_id = new_session_id()
        logger.info("session_starting", session_id=session_id, case_id=case_id, role=role, judge_style=judge_style)

        try:
            result = self.client.start_session(session_id, case_id, role, judge_style)
        except MootClientError as exc:
            return self._fail(epoch, prior_session, "start", exc)

        with self._lock:
            if not self._is_current(epoch, prior_session):
                logger.info("stale_reply_discarded", action="start", session_id=session_id)
                return self._state
            self._state = session_started(self._state, result.session, result.case)
            logger.info(
                "session_started",
                session_id=result.session.session_id,
                case_id=result.session.case_id,
                title=result.case.title,
            )
            return self._state

    def iter_send_utterance(self, text: str) -> Iterator[MootState]:
        """
        Yields the state with the student's line appended (before the
        backend answers), then the outcome of the call. Ignored input
        yields the unchanged state once.

        The student's line is kept even if the backend call fails.
        """
        if not (text or "").strip():
            yield self.snapshot()
            return

        with self._lock:
            in_courtroom = self._state.has_session and self._state.phase == "courtroom"
            if in_courtroom:
                self._state = begin_action(student_spoke(self._state, Message.student(text)))
            appended = self._state

        yield appended
        if not in_courtroom:
            return

        epoch = appended.epoch
        session = appended.session
        transcript = format_transcript(appended.messages)

        try:
            reply = self.client.send_utterance(session, transcript, text)
        except MootClientError as exc:
            yield self._fail(epoch, session, "utterance", exc)
            return

        with self._lock:
            if not self._is_current(epoch, session) or self._state.phase != "courtroom":
                logger.info("stale_reply_discarded", action="utterance", session_id=session.session_id)
                result = self._state
            else:
                self._state = reply_received(self._state, reply.to_message())
                result = self._state
                logger.info(
                    "utterance_answered",
                    session_id=session.session_id,
                    speaker=reply.speaker,
                    messages=len(result.messages),
                )
        yield result

    def send_utterance(self, text: str) -> MootState:
        state = self.snapshot()
        for state in self.iter_send_utterance(text):
            pass
        return state

    def end_session(self) -> MootState:
        """
        Rest the case and ask the backend for scores. Refused while an
        utterance is still waiting for its reply.
        """
        with self._lock:
            if (
                not self._state.has_session
                or self._state.phase != "courtroom"
                or not self._state.messages
                or self._state.loading
            ):
                return self._state
            self._state = begin_action(self._state)
            epoch = self._state.epoch
            session = self._state.session
            transcript = format_transcript(self._state.messages)

        try:
            evaluation = self.client.evaluate(session, transcript)
        except MootClientError as exc:
            return self._fail(epoch, session, "evaluate", exc)

        with self._lock:
            if not self._is_current(epoch, session):
                logger.info("stale_reply_discarded", action="evaluate", session_id=session.session_id)
                return self._state
            self._state = evaluation_received(self._state, evaluation)
            logger.info(
                "session_evaluated",
                session_id=session.session_id,
                overall=evaluation.scores.overall_persuasiveness,
            )
            return self._state

    def reset(self) -> MootState:
        """Back to setup from anywhere. In-flight replies become stale."""
        with self._lock:
            if self._state.session is not None:
                logger.info("session_reset", session_id=self._state.session.session_id)
            self._state = reset_state(self._state)
            return self._state
