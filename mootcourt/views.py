"""
views.py

Pure renderers for the three screens. Each takes plain data from the
session state and returns Markdown or HTML for a Gradio component.
"""

import html
from typing import Iterable, List, Optional, Tuple

from .models import CaseData, EvaluationScores, Session

SCORE_CARDS: List[Tuple[str, str]] = [
    ("Legal Reasoning", "legal_reasoning"),
    ("Precedent Usage", "precedent_usage"),
    ("Clarity", "clarity"),
    ("Responsiveness", "responsiveness"),
    ("Overall Persuasiveness", "overall_persuasiveness"),
]


def render_error(error: Optional[str]) -> str:
    if not error:
        return ""
    return (
        '<div class="moot-error" style="border:1px solid #ef4444;background:#fef2f2;'
        'color:#991b1b;border-radius:8px;padding:0.75rem 1rem;">'
        f"⚠️ {html.escape(error)}</div>"
    )


# -------------------------------
# Courtroom
# -------------------------------

def _bullets(items: Iterable[str]) -> str:
    lines = [f"- {item}" for item in items]
    return "\n".join(lines) if lines else "_None listed._"


def render_case_file(case: Optional[CaseData], session: Optional[Session]) -> str:
    """
    Left-hand case file: title, facts, issues, precedents,
    and the role / judge persona footer.
    """
    if case is None:
        return ""

    sections = [
        "## 📜 Case File",
        f"**Title**\n\n{case.title}",
        f"**Facts**\n\n{case.facts}",
        f"**Issues**\n\n{_bullets(case.issues)}",
        f"**Precedents**\n\n{_bullets(case.precedents)}",
    ]
    if session is not None:
        sections.append(
            f"---\nRole: **{session.role.capitalize()}** · Style: **{session.judge_style.capitalize()}**"
        )
    return "\n\n".join(sections)


# -------------------------------
# Evaluation
# -------------------------------

def render_score_card(label: str, score: int) -> str:
    width = max(0, min(score, 10)) * 10
    return (
        '<div class="moot-score" style="border:1px solid #334155;border-radius:8px;padding:0.75rem;margin:0.25rem 0;">'
        f'<div style="font-size:0.75rem;text-transform:uppercase;opacity:0.7;">{html.escape(label)}</div>'
        f'<div style="font-size:1.5rem;font-weight:700;">{score}<span style="font-size:0.9rem;opacity:0.5;">/10</span></div>'
        '<div style="background:#1e293b;height:6px;border-radius:3px;overflow:hidden;">'
        f'<div style="background:#6366f1;height:100%;width:{width}%;"></div></div>'
        "</div>"
    )


def render_scores(scores: Optional[EvaluationScores]) -> str:
    if scores is None:
        return ""
    cards = [render_score_card(label, getattr(scores, attr)) for label, attr in SCORE_CARDS]
    return '<div class="moot-scores">' + "\n".join(cards) + "</div>"


def render_suggestions(suggestions: Iterable[str]) -> str:
    """Numbered list, in the order the backend gave them."""
    lines = [f"{i}. {s}" for i, s in enumerate(suggestions, start=1)]
    if not lines:
        return "### ⚠️ Feedback & Suggestions\n\n_No suggestions were returned._"
    return "### ⚠️ Feedback & Suggestions\n\n" + "\n".join(lines)
