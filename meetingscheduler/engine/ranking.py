"""Ranking logic for meetingscheduler.

Sorts meetings by ranking score, then by deadline urgency among equal scores.
This produces the deterministic order in which the greedy loop places them.
"""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from meetingscheduler.engine.scoring import ScoringConfig, ranking_score
from meetingscheduler.models.meeting import Meeting


def rank_meetings(
    meetings: Sequence[Meeting],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> List[Tuple[Meeting, float]]:
    """Rank meetings by score, highest first.

    Meetings are sorted:
    1. By ranking score (descending)
    2. Among equal scores, by deadline (earliest first)
    3. Meetings without deadlines go after those with deadlines

    The sort is stable, so meetings that tie on everything keep their input order.

    Args:
        meetings: Meetings to rank
        now: Reference time for deadline urgency (defaults to now)
        config: Scoring configuration

    Returns:
        List of (meeting, ranking score) pairs in placement order
    """
    if now is None:
        now = datetime.utcnow()

    scored = [(meeting, ranking_score(meeting, now, config)) for meeting in meetings]
    return sorted(scored, key=lambda x: (-x[1], _deadline_sort_key(x[0])))


def _deadline_sort_key(meeting: Meeting) -> tuple:
    """Get sort key for deadline urgency.

    Deadlines are compared as naive UTC datetimes, never converted through the
    host's local time zone.

    Returns:
        Tuple for sorting: (has_deadline: 0 or 1, deadline or datetime.max)
    """
    if meeting.deadline:
        return (0, meeting.deadline)
    else:
        return (1, datetime.max)
