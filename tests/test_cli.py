from mootcourt.cli import run_cli
from mootcourt.errors import WebhookStatusError
from mootcourt.models import Reply


def _scripted(answers):
    answers = iter(answers)

    def get_input(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError
    return get_input


def test_full_session_in_terminal(controller, fake_client):
    fake_client.reply = Reply(speaker="opponent", text="Overruled.")
    printed = []

    state = run_cli(
        controller,
        get_input=_scripted(["case_042", "respondent", "strict", "Objection", "/rest", "n"]),
        show=printed.append,
    )

    assert fake_client.calls[0][2:] == ("case_042", "respondent", "strict")
    assert state.phase == "evaluation"
    output = "\n".join(printed)
    assert "State v. Speaker" in output
    assert "[OPPONENT] Overruled." in output
    assert "Overall Persuasiveness: 7/10" in output
    assert "1. Cite Brandenburg earlier." in output


def test_defaults_are_used_for_blank_answers(controller, fake_client):
    run_cli(controller, get_input=_scripted(["", "", "", "/quit"]), show=lambda _: None)
    assert fake_client.calls[0][2:] == ("case_001", "petitioner", "neutral")


def test_rest_without_arguments_is_refused(controller, fake_client):
    printed = []
    state = run_cli(controller, get_input=_scripted(["", "", "", "/rest", "/quit"]), show=printed.append)
    assert state.phase == "courtroom"
    assert any("at least one argument" in line for line in printed)


def test_abort_returns_to_setup(controller):
    state = run_cli(controller, get_input=_scripted(["", "", "", "/abort", "/quit"]), show=lambda _: None)
    assert state.phase == "setup"
    assert state.session is None


def test_errors_are_printed(controller, fake_client):
    fake_client.start_error = WebhookStatusError("Start session failed: 500", 500)
    printed = []
    state = run_cli(controller, get_input=_scripted(["", "", ""]), show=printed.append)
    assert state.phase == "setup"
    assert "Error: Start session failed: 500" in printed
