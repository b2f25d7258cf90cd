"""Constants for meetingscheduler.

This module centralizes the default weights, caps and granularity used by the
optimization engine. Deployments override them through the environment
(see meetingscheduler.config).
"""

# Score weights (must sum to 1.0)
PRIORITY_WEIGHT = 0.6
DEADLINE_WEIGHT = 0.3
DURATION_WEIGHT = 0.1

# Priority scale
MIN_PRIORITY = 1
MAX_PRIORITY = 10

# Deadline urgency regimes (hours until deadline)
URGENT_HORIZON_HOURS = 24  # score in [0.9, 1.0]
WEEK_HORIZON_HOURS = 168  # score in [0.5, 0.9)
DEADLINE_CAP_HOURS = 504  # score decays to 0.0 here and stays there

# Duration component: meetings this long or longer score 0
DURATION_CAP_MINUTES = 240

# Slot search granularity
SLOT_STEP_MINUTES = 15

# Aggregate score when nothing was placed
EMPTY_OPTIMIZATION_SCORE = 0.0

# Score given to schedules placed by hand rather than by the optimizer
CUSTOM_SCHEDULE_SCORE = 1.0
