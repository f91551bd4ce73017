# footcare/annotator.py
"""Session fields inferred from what the patient just typed.

Runs once per user turn, before the assistant reply is requested. ``history``
is the conversation as it stood before ``user_text`` was added.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Sequence

from .utils import classify_issue, detect_appointment, detect_rating

CATEGORY_TURN = 4
FEEDBACK_TURN = 11
FOLLOW_UP_MIN_MESSAGES = 18
FOLLOW_UP_DAYS = 14


def _role(message) -> str:
    if isinstance(message, dict):
        return message.get("role", "")
    return getattr(message, "role", "")


def annotate_session(
    history: Sequence[Any], user_text: str, now: Optional[datetime] = None
) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    prior_user_turns = sum(1 for m in history if _role(m) == "user")
    lower = user_text.lower()
    rating = detect_rating(user_text)
    updates: Dict[str, Any] = {}

    if prior_user_turns == CATEGORY_TURN:
        updates["issue_category"] = classify_issue(user_text)
        updates["symptoms"] = user_text

    appointment = detect_appointment(user_text, now)
    if appointment is not None:
        updates["appointment_date"] = appointment.isoformat()
        updates["status"] = "scheduled"

    if "yes" in lower and len(history) >= FOLLOW_UP_MIN_MESSAGES:
        updates["follow_up_date"] = (now + timedelta(days=FOLLOW_UP_DAYS)).isoformat()

    if rating is not None:
        updates["satisfaction_score"] = rating

    # any digit-free reply this late is taken as free-text feedback
    if prior_user_turns >= FEEDBACK_TURN and rating is None:
        updates["satisfaction_feedback"] = user_text
        updates["status"] = "completed"

    return updates
