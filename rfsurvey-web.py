#!/usr/bin/env python3
"""
rfsurvey Web: Entry point.

Thin CLI shim that parses arguments and runs the Flask application.

Run:
    python rfsurvey-web.py --results results --host 0.0.0.0 --port 8080

Environment:
    RFSURVEY_TOKEN       Protect /api/* endpoints (optional)
    RFSURVEY_BANDPLAN    Bandplan CSV replacing the built-in carrier tables
"""
from __future__ import annotations

import argparse


def parse_args():
    ap = argparse.ArgumentParser(
        description="rfsurvey Web: JSON API over analyzed survey results"
    )
    ap.add_argument(
        "--results",
        required=True,
        help="Results directory with one folder per survey point",
    )
    ap.add_argument(
        "--bandplan",
        default=None,
        help="Optional bandplan CSV",
    )
    ap.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind the web server (default: 0.0.0.0)",
    )
    ap.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port to listen on (default: 8080)",
    )
    return ap.parse_args()


def main():
    args = parse_args()

    from rfsurvey_web import create_app

    app = create_app(args.results, args.bandplan)
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
