# footcare/analytics.py
from collections import Counter

from .db import RecordStore
from .schemas import Analytics


def compute_analytics(store: RecordStore) -> Analytics:
    sessions = store.list_sessions()
    completed = [s for s in sessions if s.status == "completed"]
    scores = [s.satisfaction_score for s in completed if s.satisfaction_score is not None]
    avg = round(sum(scores) / len(scores), 1) if scores else 0

    return Analytics(
        totalPatients=len(store.list_patients()),
        totalSessions=len(sessions),
        activeSessions=sum(1 for s in sessions if s.status == "active"),
        completedSessions=len(completed),
        avgSatisfaction=avg,
        issueCategories=dict(Counter(s.issue_category for s in sessions)),
    )
