"""Environment-driven configuration for meetingscheduler."""

import os
from dotenv import load_dotenv

from meetingscheduler.models import constants

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def get_scoring_settings() -> dict:
    """Read scoring overrides from the environment.

    Unset variables fall back to the defaults in meetingscheduler.models.constants.
    Values are read on every call so tests can monkeypatch the environment.
    """
    return {
        "priority_weight": _env_float("PRIORITY_WEIGHT", constants.PRIORITY_WEIGHT),
        "deadline_weight": _env_float("DEADLINE_WEIGHT", constants.DEADLINE_WEIGHT),
        "duration_weight": _env_float("DURATION_WEIGHT", constants.DURATION_WEIGHT),
        "deadline_cap_hours": _env_float("DEADLINE_CAP_HOURS", constants.DEADLINE_CAP_HOURS),
        "duration_cap_minutes": _env_int("DURATION_CAP_MINUTES", constants.DURATION_CAP_MINUTES),
        "slot_step_minutes": _env_int("SLOT_STEP_MINUTES", constants.SLOT_STEP_MINUTES),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
