"""
ui.py

Defines the Gradio interface: three screens (setup, courtroom,
evaluation) shown one at a time, plus an error banner.

- Every browser tab gets its own SessionController, keyed by the
  Gradio session hash and dropped when the tab closes.
- Handlers never touch the state directly; they call the controller
  and re-render from the snapshot it returns.
"""

import threading
from typing import Dict, Optional

import gradio as gr

from .config import DEFAULT_CASE_ID, DEFAULT_JUDGE_STYLE, DEFAULT_ROLE
from .controller import SessionController
from .models import JUDGE_STYLES, ROLES
from .state import MootState
from .transcript import render_transcript_html
from .views import render_case_file, render_error, render_scores, render_suggestions

_controllers: Dict[str, SessionController] = {}
_controllers_lock = threading.Lock()


def _controller_for(request: Optional[gr.Request]) -> SessionController:
    key = getattr(request, "session_hash", None) or "local"
    with _controllers_lock:
        controller = _controllers.get(key)
        if controller is None:
            controller = SessionController()
            _controllers[key] = controller
        return controller


def _drop_controller(request: gr.Request) -> None:
    key = getattr(request, "session_hash", None) or "local"
    with _controllers_lock:
        _controllers.pop(key, None)


def _render(state: MootState, clear_argument: bool = False) -> tuple:
    """
    Build every screen's output from the current state, in the order
    of the outputs list wired in create_ui().
    """
    in_courtroom = state.phase == "courtroom"
    argument = gr.update(interactive=not state.loading)
    if clear_argument:
        argument = gr.update(value="", interactive=not state.loading)
    return (
        render_error(state.error),
        gr.update(visible=state.phase == "setup"),
        gr.update(visible=in_courtroom),
        gr.update(visible=state.phase == "evaluation"),
        render_case_file(state.case, state.session),
        render_transcript_html(state.messages),
        gr.update(interactive=in_courtroom and bool(state.messages) and not state.loading),
        render_scores(state.evaluation.scores if state.evaluation else None),
        render_suggestions(state.evaluation.suggestions if state.evaluation else ()),
        argument,
        gr.update(interactive=not state.loading),
    )


# -------------------------------
# Event handlers
# -------------------------------

def start_session(case_id: str, role: str, judge_style: str, request: gr.Request):
    controller = _controller_for(request)
    return _render(controller.start(case_id, role, judge_style))


def send_argument(text: str, request: gr.Request):
    """
    Generator: the student's line shows up first,
    then the judge's or opponent's reply.
    """
    controller = _controller_for(request)
    for state in controller.iter_send_utterance(text):
        yield _render(state, clear_argument=True)


def end_session(request: gr.Request):
    controller = _controller_for(request)
    return _render(controller.end_session())


def reset_session(request: gr.Request):
    controller = _controller_for(request)
    return _render(controller.reset())


def create_ui() -> gr.Blocks:
    """
    Build and return the Gradio Blocks app.
    """

    with gr.Blocks(title="AI Moot Court") as demo:
        gr.Markdown(
            """
            # ⚖️ AI Moot Court

            Rehearse oral argument against an AI judge and AI opposing counsel.
            """
        )

        error_box = gr.HTML(value="")

        # Setup screen
        with gr.Column(visible=True) as setup_view:
            gr.Markdown("## Configure Your Session\nSelect your case parameters to begin the simulation.")
            case_id_input = gr.Textbox(
                label="Case Identifier",
                value=DEFAULT_CASE_ID,
                placeholder="e.g. freedom_of_speech_v_state",
            )
            role_radio = gr.Radio(
                label="Your Role",
                choices=[(r.capitalize(), r) for r in ROLES],
                value=DEFAULT_ROLE,
            )
            judge_style_radio = gr.Radio(
                label="Judge Persona",
                choices=[(s.capitalize(), s) for s in JUDGE_STYLES],
                value=DEFAULT_JUDGE_STYLE,
            )
            start_button = gr.Button("Enter Courtroom ➜", variant="primary")

        # Courtroom screen
        with gr.Column(visible=False) as courtroom_view:
            with gr.Row():
                # Left: case file (narrower)
                with gr.Column(scale=1, min_width=280):
                    case_file_md = gr.Markdown()

                # Right: transcript + input (wider)
                with gr.Column(scale=2):
                    transcript_output = gr.HTML(value=render_transcript_html(()))
                    argument_input = gr.Textbox(
                        label="Your Argument",
                        placeholder="Type your argument...",
                        lines=2,
                    )
                    send_button = gr.Button("Send", variant="primary")
                    with gr.Row():
                        abort_button = gr.Button("Abort Session", size="sm")
                        rest_button = gr.Button(
                            "⚖️ Rest Case & Get Evaluation",
                            size="sm",
                            interactive=False,
                        )

        # Evaluation screen
        with gr.Column(visible=False) as evaluation_view:
            gr.Markdown("## 🛡️ Session Evaluation\nHere is the judge's assessment of your performance.")
            scores_output = gr.HTML()
            suggestions_output = gr.Markdown()
            new_session_button = gr.Button("Start New Session", variant="primary")

        outputs = [
            error_box,
            setup_view,
            courtroom_view,
            evaluation_view,
            case_file_md,
            transcript_output,
            rest_button,
            scores_output,
            suggestions_output,
            argument_input,
            send_button,
        ]

        start_button.click(
            fn=start_session,
            inputs=[case_id_input, role_radio, judge_style_radio],
            outputs=outputs,
        )

        for trigger in (send_button.click, argument_input.submit):
            trigger(
                fn=send_argument,
                inputs=[argument_input],
                outputs=outputs,
            )

        rest_button.click(fn=end_session, inputs=None, outputs=outputs)
        abort_button.click(fn=reset_session, inputs=None, outputs=outputs)
        new_session_button.click(fn=reset_session, inputs=None, outputs=outputs)

        demo.unload(_drop_controller)

    return demo
