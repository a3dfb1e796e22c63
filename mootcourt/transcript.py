"""
transcript.py

Turns the ordered message list into:
- the plain-text transcript sent to the webhook on every call
- HTML chat blocks for the courtroom screen
"""

import html
from typing import Iterable

from .models import Message

SENDER_LABELS = {
    "student": "STUDENT",
    "judge": "JUDGE",
    "opponent": "OPPONENT",
}

EMPTY_TRANSCRIPT_HTML = (
    '<div class="moot-empty" style="text-align:center;padding:2rem;opacity:0.6;">'
    "⚖️ The court is in session. Present your opening statement."
    "</div>"
)

_BUBBLE_STYLES = {
    "student": "margin-left:auto;background:#4f46e5;color:#ffffff;",
    "judge": "margin-right:auto;background:#1e293b;color:#e2e8f0;border:1px solid #334155;",
    "opponent": "margin-right:auto;background:#450a0a;color:#fecaca;border:1px solid #7f1d1d;",
}


def sender_label(sender: str) -> str:
    # Unknown senders are treated like the backend treats them: as the opponent
    return SENDER_LABELS.get(sender, "OPPONENT")


def format_transcript(messages: Iterable[Message]) -> str:
    """
    One line per message, "[LABEL] text", joined by newlines, no trailing newline.
    """
    return "\n".join(f"[{sender_label(m.sender)}] {m.text}" for m in messages)


def render_message_html(message: Message) -> str:
    style = _BUBBLE_STYLES.get(message.sender, _BUBBLE_STYLES["opponent"])
    return (
        f'<div class="moot-msg moot-{html.escape(message.sender)}" '
        f'style="max-width:80%;width:fit-content;border-radius:14px;padding:0.6rem 0.9rem;margin:0.4rem 0;{style}">'
        f'<div style="font-size:0.7rem;font-weight:700;opacity:0.6;">{sender_label(message.sender)}</div>'
        f"<div>{html.escape(message.text)}</div>"
        "</div>"
    )


def render_transcript_html(messages: Iterable[Message]) -> str:
    blocks = [render_message_html(m) for m in messages]
    if not blocks:
        return EMPTY_TRANSCRIPT_HTML
    return '<div class="moot-transcript">' + "\n".join(blocks) + "</div>"
