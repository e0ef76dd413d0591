"""
Blueprints package for rfsurvey Web.

- api_survey: Survey analysis endpoints (/api/points, /api/presence, /api/wifi, /api/bandplan, /api/reload)
- api_debug: Health and error tracking endpoints (/api/debug/*)
"""
from __future__ import annotations
