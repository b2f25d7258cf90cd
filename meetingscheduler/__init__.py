"""meetingscheduler: greedy priority/deadline meeting placement."""

__version__ = "0.1.0"
