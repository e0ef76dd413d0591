"""
Configuration constants and environment parsing for rfsurvey Web.

All RFSURVEY_* web settings are parsed here and exported as module-level
constants. Blueprints import from this module rather than reading os.environ.
"""
from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    """Parse an integer from environment, returning default on missing/invalid."""
    val = os.getenv(name)
    if not val:
        return default
    try:
        return max(1, int(float(val)))
    except Exception:
        return default


API_TOKEN: str = os.getenv("RFSURVEY_TOKEN", "")
"""Optional bearer token protecting /api/* endpoints."""

RESULTS_DIR: str = os.getenv("RFSURVEY_RESULTS_DIR", "results")
"""Default results directory when none is passed to create_app."""

BANDPLAN_PATH: str = os.getenv("RFSURVEY_BANDPLAN", "")
"""Optional bandplan CSV replacing the built-in carrier tables."""

ANALYSIS_WORKERS: int = _int_env("RFSURVEY_WORKERS", 1)
"""Thread count used when (re)analyzing the results directory."""

ERROR_RING_MAX: int = _int_env("RFSURVEY_ERROR_RING_MAX", 100)
"""Number of captured request errors kept for /api/debug/errors."""
