"""
Authentication helper for rfsurvey Web.
"""
from __future__ import annotations

from flask import abort, request

from rfsurvey_web import config


def require_auth() -> None:
    """
    Check bearer token authentication for the current request.

    If API_TOKEN is not set, authentication is disabled (open access).

    Raises:
        werkzeug.exceptions.Unauthorized: If token is invalid or missing.
    """
    if not config.API_TOKEN:
        return

    hdr = request.headers.get("Authorization", "")
    if hdr != f"Bearer {config.API_TOKEN}":
        abort(401)
