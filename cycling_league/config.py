"""Environment-driven settings."""

from __future__ import annotations

import os
from typing import Optional


def _env_api_key() -> Optional[str]:
    # API_KEY is the variable name used by the web deployment.
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


ADVISOR_API_KEY = _env_api_key()
ADVISOR_MODEL = os.getenv("CYCLING_LEAGUE_ADVISOR_MODEL", "gemini-3-flash-preview")
LOG_LEVEL = os.getenv("CYCLING_LEAGUE_LOG_LEVEL", "INFO").upper()
SEASON = int(os.getenv("CYCLING_LEAGUE_SEASON", "2026"))


__all__ = ["ADVISOR_API_KEY", "ADVISOR_MODEL", "LOG_LEVEL", "SEASON"]
