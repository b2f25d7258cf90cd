"""Greedy placement loop for meetingscheduler.

Ranks pending meetings once, then commits each, in order, to its best
available slot. Every commitment is final: later meetings search around it,
and nothing is revisited or backtracked.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from meetingscheduler.engine.ranking import rank_meetings
from meetingscheduler.engine.scoring import ScoringConfig
from meetingscheduler.engine.slot_finder import find_best_slot
from meetingscheduler.engine.trace import OptimizationTrace, TraceEventKind
from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.constants import EMPTY_OPTIMIZATION_SCORE
from meetingscheduler.models.meeting import Meeting
from meetingscheduler.models.placement import OccupiedInterval, Placement

logger = logging.getLogger(__name__)


class OptimizationResult:
    """Result of an optimization run."""

    def __init__(self, reference_time: Optional[datetime] = None):
        self.placements: List[Placement] = []
        self.unscheduled_meetings: List[Meeting] = []
        self.optimization_score: float = EMPTY_OPTIMIZATION_SCORE
        self.reference_time: Optional[datetime] = reference_time
        self.trace: Optional[OptimizationTrace] = None

    @property
    def scheduled_count(self) -> int:
        return len(self.placements)


def aggregate_score(placements: Sequence[Placement]) -> float:
    """Arithmetic mean of placement scores (0.0 when nothing was placed)."""
    if not placements:
        return EMPTY_OPTIMIZATION_SCORE
    return sum(p.score for p in placements) / len(placements)


def optimize(
    meetings: Sequence[Meeting],
    availability_windows: Sequence[AvailabilityWindow],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
    trace: Optional[OptimizationTrace] = None,
) -> OptimizationResult:
    """Place meetings into availability windows, most desirable first.

    Meetings that cannot be placed are reported in unscheduled_meetings; this
    is a normal outcome, never an error. Empty inputs give an empty result.

    Args:
        meetings: Pending meetings (input order does not matter)
        availability_windows: Open windows, in the order to try them
        now: Reference time for ranking (defaults to now)
        config: Scoring configuration
        trace: Optional trace recorder, attached to the result

    Returns:
        OptimizationResult with placements in commit order
    """
    if now is None:
        now = datetime.utcnow()

    result = OptimizationResult(reference_time=now)
    result.trace = trace

    logger.info(
        "Optimizing %d meetings across %d availability windows",
        len(meetings),
        len(availability_windows),
    )

    occupied: List[OccupiedInterval] = []

    for meeting, score in rank_meetings(meetings, now=now, config=config):
        if trace is not None:
            trace.record(TraceEventKind.MEETING_RANKED, meeting_id=meeting.id, score=score)

        if meeting.duration_minutes <= 0:
            logger.warning("Skipping meeting %s with non-positive duration", meeting.id)
            result.unscheduled_meetings.append(meeting)
            if trace is not None:
                trace.record(
                    TraceEventKind.MEETING_UNSCHEDULED,
                    meeting_id=meeting.id,
                    details={"reason": "invalid_duration"},
                )
            continue

        placement = find_best_slot(meeting, availability_windows, occupied, config=config, trace=trace)

        if placement is None:
            logger.debug("No feasible slot for meeting %s", meeting.id)
            result.unscheduled_meetings.append(meeting)
            if trace is not None:
                trace.record(
                    TraceEventKind.MEETING_UNSCHEDULED,
                    meeting_id=meeting.id,
                    details={"reason": "no_feasible_slot"},
                )
            continue

        result.placements.append(placement)
        occupied.append(placement.to_interval())
        if trace is not None:
            trace.record(
                TraceEventKind.MEETING_PLACED,
                meeting_id=meeting.id,
                start_time=placement.start_time,
                end_time=placement.end_time,
                score=placement.score,
            )

    result.optimization_score = aggregate_score(result.placements)

    logger.info(
        "Optimization placed %d of %d meetings (score %.3f)",
        result.scheduled_count,
        len(meetings),
        result.optimization_score,
    )
    return result
