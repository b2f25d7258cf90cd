"""Optimization engine for meetingscheduler."""

from meetingscheduler.engine.scoring import ScoringConfig, score_meeting, ranking_score, placement_score
from meetingscheduler.engine.ranking import rank_meetings
from meetingscheduler.engine.slot_finder import find_best_slot, has_conflict, intervals_overlap
from meetingscheduler.engine.optimizer import optimize, OptimizationResult
from meetingscheduler.engine.trace import OptimizationTrace, TraceEvent, TraceEventKind

__all__ = [
    "ScoringConfig",
    "score_meeting",
    "ranking_score",
    "placement_score",
    "rank_meetings",
    "find_best_slot",
    "has_conflict",
    "intervals_overlap",
    "optimize",
    "OptimizationResult",
    "OptimizationTrace",
    "TraceEvent",
    "TraceEventKind",
]
