"""
cli.py

Terminal rehearsal mode. Same SessionController as the web UI,
driven by input() prompts.

In the courtroom, type your argument and press Enter. Commands:
  /rest   rest your case and get the evaluation
  /abort  abandon the session and go back to setup
  /quit   leave
"""

from typing import Callable, Optional

from .config import DEFAULT_CASE_ID, DEFAULT_JUDGE_STYLE, DEFAULT_ROLE
from .controller import SessionController
from .models import JUDGE_STYLES, ROLES
from .state import MootState
from .transcript import sender_label
from .views import SCORE_CARDS

REST_COMMAND = "/rest"
ABORT_COMMAND = "/abort"
QUIT_COMMAND = "/quit"


def _choose(get_input: Callable[[str], str], label: str, choices, default: str) -> str:
    answer = get_input(f"{label} ({'/'.join(choices)}) [default: {default}]: ").strip().lower()
    return answer if answer in choices else default


def _print_case(state: MootState, show: Callable[[str], None]) -> None:
    case = state.case
    show(f"\n=== {case.title} ===")
    show(f"Role: {state.session.role} | Judge: {state.session.judge_style}\n")
    show(f"FACTS:\n{case.facts}\n")
    if case.issues:
        show("ISSUES:")
        for issue in case.issues:
            show(f"  - {issue}")
    if case.precedents:
        show("PRECEDENTS:")
        for precedent in case.precedents:
            show(f"  - {precedent}")
    show(f"\nThe court is in session. Type {REST_COMMAND} to rest, {ABORT_COMMAND} to abort.\n")


def _print_evaluation(state: MootState, show: Callable[[str], None]) -> None:
    evaluation = state.evaluation
    show("\n=== Session Evaluation ===")
    for label, attr in SCORE_CARDS:
        show(f"{label}: {getattr(evaluation.scores, attr)}/10")
    show("\nFeedback & Suggestions:")
    for i, suggestion in enumerate(evaluation.suggestions, start=1):
        show(f"{i}. {suggestion}")
    show("")


def run_cli(
    controller: Optional[SessionController] = None,
    get_input: Callable[[str], str] = input,
    show: Callable[[str], None] = print,
) -> MootState:
    """
    Run sessions until the user quits (or input runs out).
    Returns the final state, mainly for tests.
    """
    controller = controller or SessionController()
    show("=== AI Moot Court ===\n")

    try:
        while True:
            state = controller.snapshot()

            if state.phase == "setup":
                case_id = get_input(f"Case identifier [default: {DEFAULT_CASE_ID}]: ").strip() or DEFAULT_CASE_ID
                if case_id == QUIT_COMMAND:
                    break
                role = _choose(get_input, "Your role", ROLES, DEFAULT_ROLE)
                judge_style = _choose(get_input, "Judge persona", JUDGE_STYLES, DEFAULT_JUDGE_STYLE)
                state = controller.start(case_id, role, judge_style)
                if state.error:
                    show(f"Error: {state.error}")
                elif state.phase == "courtroom":
                    _print_case(state, show)

            elif state.phase == "courtroom":
                line = get_input("> ").strip()
                if line == QUIT_COMMAND:
                    break
                if line == ABORT_COMMAND:
                    controller.reset()
                    show("Session aborted.\n")
                    continue
                if line == REST_COMMAND:
                    if not state.messages:
                        show("Present at least one argument before resting your case.")
                        continue
                    state = controller.end_session()
                    if state.error:
                        show(f"Error: {state.error}")
                    elif state.phase == "evaluation":
                        _print_evaluation(state, show)
                    continue

                before = len(state.messages)
                state = controller.send_utterance(line)
                for message in state.messages[before + 1:]:
                    show(f"[{sender_label(message.sender)}] {message.text}\n")
                if state.error:
                    show(f"Error: {state.error}")

            else:
                answer = get_input("Start a new session? (y/n) [default: y]: ").strip().lower()
                if answer in ("n", "no", QUIT_COMMAND):
                    break
                controller.reset()
    except (EOFError, KeyboardInterrupt):
        show("")

    return controller.snapshot()
