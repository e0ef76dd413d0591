"""
rfsurvey Web: Flask application serving survey analysis results as JSON.

Usage:
    from rfsurvey_web import create_app
    app = create_app(results_dir="results")
    app.run(host="0.0.0.0", port=8080)
"""
from __future__ import annotations

__version__ = "0.1.0"

from rfsurvey_web.app import create_app

__all__ = ["create_app", "__version__"]
