# footcare/utils.py
import re
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

# (keywords, category) evaluated top to bottom, first match wins
ISSUE_CATEGORY_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("ingrown", "toenail"), "Ingrown Toenail"),
    (("heel", "plantar"), "Heel Pain / Plantar Fasciitis"),
    (("athlete", "fungus", "itch"), "Athlete's Foot / Fungal Infection"),
    (("bunion",), "Bunions"),
]
DEFAULT_ISSUE_CATEGORY = "General Foot Issue"

# the days the scripted flow offers slots on, checked after "tomorrow"
SLOT_WEEKDAYS = [
    ("wednesday", 2),
    ("thursday", 3),
    ("friday", 4),
]

RATING_PATTERN = re.compile(r"[1-5]")


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    text = text.lower()
    for kw in keywords:
        if kw in text:
            return True
    return False


def first_matching(text: str, rules: Sequence[Tuple[Tuple[str, ...], str]], default=None):
    for keywords, value in rules:
        if contains_any(text, keywords):
            return value
    return default


def classify_issue(text: str) -> str:
    return first_matching(text, ISSUE_CATEGORY_RULES, DEFAULT_ISSUE_CATEGORY)


def detect_rating(text: str) -> Optional[int]:
    match = RATING_PATTERN.search(text)
    return int(match.group(0)) if match else None


def next_weekday(now: datetime, weekday: int) -> datetime:
    """Next date falling on ``weekday`` (Monday=0), never ``now``'s own day."""
    days_ahead = (weekday - now.weekday() + 7) % 7 or 7
    return now + timedelta(days=days_ahead)


def detect_appointment(text: str, now: datetime) -> Optional[datetime]:
    lower = text.lower()
    if "tomorrow" in lower:
        return now + timedelta(days=1)
    for name, weekday in SLOT_WEEKDAYS:
        if name in lower:
            return next_weekday(now, weekday)
    return None
