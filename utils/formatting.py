"""
Display helpers shared by the Streamlit pages.
"""

import math
from datetime import datetime, timezone
from typing import Optional, Union

from models.question import Pillar, QuestionType

PILLAR_LABELS = {
    Pillar.TECH: "Tech",
    Pillar.AI: "AI",
    Pillar.COMMUNICATION: "Communication",
    Pillar.PORTFOLIO: "Portfolio",
}

QUESTION_TYPE_LABELS = {
    QuestionType.LIKERT: "Likert Scale",
    QuestionType.MULTIPLE: "Multiple Choice",
    QuestionType.TEXT: "Text Response",
}

LIKERT_SCALE = (1, 2, 3, 4, 5)


def format_date(value: Optional[Union[str, datetime]]) -> str:
    """e.g. "Jan 15, 2024 10:00"."""
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime("%b %d, %Y %H:%M")


def format_relative_time(value: Optional[Union[str, datetime]], now: Optional[datetime] = None) -> str:
    """
    Short relative time ("just now", "5 minutes ago", "2 days ago").

    Falls back to the absolute date after a week.
    """
    if not value:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - value).total_seconds())
    minutes, hours, days = seconds // 60, seconds // 3600, seconds // 86400

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return format_date(value)


def truncate(text: Optional[str], length: int) -> str:
    text = text or ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def pillar_label(pillar: Union[Pillar, str]) -> str:
    return PILLAR_LABELS.get(Pillar(pillar), str(pillar))


def question_type_label(question_type: Union[QuestionType, str]) -> str:
    return QUESTION_TYPE_LABELS.get(QuestionType(question_type), str(question_type))


def round_percent(score: float) -> int:
    """Round half up to the nearest integer percentage."""
    return int(math.floor(score + 0.5))


def format_percent(score: Optional[float]) -> str:
    if score is None:
        return "N/A"
    return f"{round_percent(score)}%"


def score_label(score: Optional[float]) -> str:
    if score is None:
        return "Not scored"
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Improvement"


def score_color(score: Optional[float]) -> str:
    """Streamlit markdown color name for a score badge."""
    if score is None:
        return "gray"
    if score >= 80:
        return "green"
    if score >= 60:
        return "orange"
    return "red"
