"""Scoring logic for meetingscheduler.

A meeting's desirability is a weighted sum of three components, each in [0, 1]:

- priority: priority / 10
- deadline urgency: rises as the deadline approaches (saturates at 1.0 once passed)
- duration: shorter meetings score higher

The same formula serves two call sites. The ranking score uses "now" as the
reference time and only orders meetings before placement. The placement score
uses a candidate start time as the reference and picks among candidate slots.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from meetingscheduler.config import get_scoring_settings
from meetingscheduler.models import constants
from meetingscheduler.models.meeting import Meeting


class ScoringConfig(BaseModel):
    """Weights, caps and search granularity for one deployment."""

    priority_weight: float = Field(constants.PRIORITY_WEIGHT, ge=0.0, le=1.0)
    deadline_weight: float = Field(constants.DEADLINE_WEIGHT, ge=0.0, le=1.0)
    duration_weight: float = Field(constants.DURATION_WEIGHT, ge=0.0, le=1.0)
    urgent_horizon_hours: float = Field(constants.URGENT_HORIZON_HOURS, gt=0)
    week_horizon_hours: float = Field(constants.WEEK_HORIZON_HOURS, gt=0)
    deadline_cap_hours: float = Field(constants.DEADLINE_CAP_HOURS, gt=0)
    duration_cap_minutes: int = Field(constants.DURATION_CAP_MINUTES, gt=0)
    slot_step_minutes: int = Field(constants.SLOT_STEP_MINUTES, gt=0)

    class Config:
        """Pydantic configuration."""
        frozen = True

    @model_validator(mode="after")
    def _validate_consistency(self):
        total = self.priority_weight + self.deadline_weight + self.duration_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"score weights must sum to 1.0 (got {total:.3f})")
        if not (self.urgent_horizon_hours < self.week_horizon_hours < self.deadline_cap_hours):
            raise ValueError("deadline horizons must satisfy urgent < week < cap")
        return self

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """Build a config from environment overrides (see meetingscheduler.config)."""
        return cls(**get_scoring_settings())


DEFAULT_SCORING_CONFIG = ScoringConfig()


class ScoreBreakdown(BaseModel):
    """Raw components and weighted total of one score evaluation."""

    priority: float
    deadline: float
    duration: float
    total: float


def priority_component(meeting: Meeting) -> float:
    return meeting.priority / constants.MAX_PRIORITY


def hours_until(reference_time: datetime, deadline: datetime) -> float:
    """Fractional hours from reference_time to deadline (negative once passed)."""
    return (deadline - reference_time).total_seconds() / 3600


def deadline_component(
    meeting: Meeting,
    reference_time: datetime,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Deadline urgency in [0, 1], strictly decreasing in hours remaining up to the cap.

    Regimes (h = hours remaining):
        h <= 0                  -> 1.0
        0 < h <= urgent         -> 0.9 .. 1.0
        urgent < h <= week      -> 0.5 .. 0.9
        week < h < cap          -> 0.0 .. 0.5
        h >= cap                -> 0.0
    A meeting without a deadline has no urgency.
    """
    if meeting.deadline is None:
        return 0.0

    hours = hours_until(reference_time, meeting.deadline)
    if hours <= 0:
        return 1.0

    urgent = config.urgent_horizon_hours
    week = config.week_horizon_hours
    cap = config.deadline_cap_hours

    if hours <= urgent:
        return 0.9 + 0.1 * (1.0 - hours / urgent)
    if hours <= week:
        return 0.5 + 0.4 * (1.0 - (hours - urgent) / (week - urgent))
    return max(0.0, 0.5 * (1.0 - (hours - week) / (cap - week)))


def duration_component(meeting: Meeting, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    return 1.0 - min(meeting.duration_minutes / config.duration_cap_minutes, 1.0)


def score_breakdown(
    meeting: Meeting,
    reference_time: datetime,
    config: Optional[ScoringConfig] = None,
) -> ScoreBreakdown:
    """Evaluate every component of the score at reference_time."""
    config = config or DEFAULT_SCORING_CONFIG
    priority = priority_component(meeting)
    deadline = deadline_component(meeting, reference_time, config)
    duration = duration_component(meeting, config)
    total = (
        priority * config.priority_weight
        + deadline * config.deadline_weight
        + duration * config.duration_weight
    )
    return ScoreBreakdown(priority=priority, deadline=deadline, duration=duration, total=total)


def score_meeting(
    meeting: Meeting,
    reference_time: datetime,
    config: Optional[ScoringConfig] = None,
) -> float:
    """Weighted desirability of a meeting relative to reference_time."""
    return score_breakdown(meeting, reference_time, config).total


def ranking_score(meeting: Meeting, now: datetime, config: Optional[ScoringConfig] = None) -> float:
    """Score used only to order meetings before placement (reference = now)."""
    return score_meeting(meeting, now, config)


def placement_score(
    meeting: Meeting,
    candidate_start: datetime,
    config: Optional[ScoringConfig] = None,
) -> float:
    """Score of placing a meeting at candidate_start."""
    return score_meeting(meeting, candidate_start, config)
