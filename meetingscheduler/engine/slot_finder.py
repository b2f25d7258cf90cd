"""Slot search for a single meeting.

Walks every availability window at a fixed step, discarding candidates that
miss the deadline or collide with already-committed intervals, and keeps the
candidate with the highest placement score.

Because deadline urgency rises as the candidate start approaches the deadline,
the best slot inside one window is usually the LATEST feasible start, not the
earliest. Once the deadline is beyond the urgency cap all candidates tie and
the first one seen wins.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from meetingscheduler.engine.scoring import ScoringConfig, DEFAULT_SCORING_CONFIG, placement_score
from meetingscheduler.engine.trace import OptimizationTrace, TraceEventKind
from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.meeting import Meeting
from meetingscheduler.models.placement import OccupiedInterval, Placement

logger = logging.getLogger(__name__)


def intervals_overlap(start1: datetime, end1: datetime, start2: datetime, end2: datetime) -> bool:
    """Half-open overlap test: touching endpoints do not overlap."""
    return not (end1 <= start2 or start1 >= end2)


def has_conflict(start: datetime, end: datetime, occupied_intervals: Iterable[OccupiedInterval]) -> bool:
    """Check whether [start, end) overlaps any occupied interval."""
    return any(
        intervals_overlap(start, end, occupied.start_time, occupied.end_time)
        for occupied in occupied_intervals
    )


def find_best_slot(
    meeting: Meeting,
    availability_windows: Sequence[AvailabilityWindow],
    occupied_intervals: Sequence[OccupiedInterval],
    config: Optional[ScoringConfig] = None,
    trace: Optional[OptimizationTrace] = None,
) -> Optional[Placement]:
    """Find the conflict-free candidate with the highest placement score.

    Ties keep the first candidate found, so window order decides between
    equally good windows. Neither input sequence is modified.

    Args:
        meeting: Meeting to place
        availability_windows: Windows to search, in the order to try them
        occupied_intervals: Intervals already committed in this run
        config: Scoring configuration (defaults to the built-in constants)
        trace: Optional trace recorder

    Returns:
        Best Placement, or None if no window has a feasible candidate
    """
    config = config or DEFAULT_SCORING_CONFIG
    if meeting.duration_minutes <= 0:
        return None

    duration = timedelta(minutes=meeting.duration_minutes)
    step = timedelta(minutes=config.slot_step_minutes)

    best: Optional[Placement] = None
    slots_checked = 0
    conflicts_found = 0

    for window in availability_windows:
        if window.end_time <= window.start_time:
            if trace is not None:
                trace.record(
                    TraceEventKind.WINDOW_SKIPPED,
                    meeting_id=meeting.id,
                    start_time=window.start_time,
                    end_time=window.end_time,
                    details={"reason": "empty_window"},
                )
            continue

        candidate = window.start_time
        while candidate + duration <= window.end_time:
            candidate_end = candidate + duration
            slots_checked += 1

            # Later starts in this window only end later.
            if meeting.deadline is not None and candidate_end > meeting.deadline:
                if trace is not None:
                    trace.record(
                        TraceEventKind.DEADLINE_CUTOFF,
                        meeting_id=meeting.id,
                        start_time=candidate,
                        end_time=candidate_end,
                    )
                break

            if has_conflict(candidate, candidate_end, occupied_intervals):
                conflicts_found += 1
                if trace is not None:
                    trace.record(
                        TraceEventKind.CANDIDATE_CONFLICT,
                        meeting_id=meeting.id,
                        start_time=candidate,
                        end_time=candidate_end,
                    )
            else:
                score = placement_score(meeting, candidate, config)
                if best is None or score > best.score:
                    best = Placement(
                        meeting=meeting,
                        start_time=candidate,
                        end_time=candidate_end,
                        score=score,
                    )

            candidate += step

    logger.debug(
        "Searched slots for meeting %s: %d checked, %d conflicts, best=%s",
        meeting.id,
        slots_checked,
        conflicts_found,
        best.start_time if best else None,
    )
    return best
