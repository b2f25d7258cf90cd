"""Structured trace output for optimization runs.

A trace is an optional observer: passing one to optimize() or find_best_slot()
records what the engine considered without changing what it decides.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class TraceEventKind(str, Enum):
    """Trace event kind enumeration."""
    MEETING_RANKED = "meeting_ranked"
    CANDIDATE_CONFLICT = "candidate_conflict"
    DEADLINE_CUTOFF = "deadline_cutoff"
    WINDOW_SKIPPED = "window_skipped"
    MEETING_PLACED = "meeting_placed"
    MEETING_UNSCHEDULED = "meeting_unscheduled"


class TraceEvent(BaseModel):
    """One step of an optimization run."""

    kind: TraceEventKind = Field(..., description="What happened")
    meeting_id: Optional[str] = Field(None, description="Meeting the event concerns")
    start_time: Optional[datetime] = Field(None, description="Candidate or committed start")
    end_time: Optional[datetime] = Field(None, description="Candidate or committed end")
    score: Optional[float] = Field(None, description="Score involved, if any")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional event details")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class OptimizationTrace:
    """Collects trace events in the order the engine emits them."""

    def __init__(self):
        self.events: List[TraceEvent] = []

    def record(self, kind: TraceEventKind, **fields) -> TraceEvent:
        event = TraceEvent(kind=kind, **fields)
        self.events.append(event)
        logger.debug(
            "%s meeting=%s start=%s end=%s score=%s",
            event.kind,
            event.meeting_id,
            event.start_time,
            event.end_time,
            f"{event.score:.3f}" if event.score is not None else None,
        )
        return event

    def of_kind(self, kind: TraceEventKind) -> List[TraceEvent]:
        return [e for e in self.events if e.kind == kind]

    def __len__(self) -> int:
        return len(self.events)
