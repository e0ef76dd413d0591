#!/usr/bin/env python3
"""rfsurvey CLI entrypoint: analyze a results directory of survey points."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from rfsurvey.detection.config import DetectionConfig
from rfsurvey.detection.engine import DetectionEngine
from rfsurvey.io.bandplan import CarrierBandplan
from rfsurvey.io.discovery import load_site
from rfsurvey.io.wifi import export_rows
from rfsurvey.report.presence import (
    presence_table,
    render_presence_text,
    write_presence_csv,
    write_signals_csv,
    write_wifi_csv,
)
from rfsurvey.util.event_log import open_event_log
from rfsurvey.util.exit_codes import ExitCode
from rfsurvey.util.logging import configure_logging, get_logger


def run(args: argparse.Namespace) -> int:
    """Load, analyze and report; returns an ExitCode value."""
    configure_logging(level=args.log_level, json_file=args.log_json)
    logger = get_logger(__name__)

    try:
        bandplan = CarrierBandplan(args.bandplan)
    except FileNotFoundError:
        logger.error("Bandplan file not found: %s", args.bandplan)
        return ExitCode.INVALID_ARGS

    if args.list_bandplan:
        print(json.dumps(bandplan.as_dict(), indent=2, sort_keys=True))
        return ExitCode.SUCCESS

    try:
        site = load_site(args.results, site_ref=args.site)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return ExitCode.RESULTS_NOT_FOUND
    if not site.points:
        logger.error("No survey points below %s", args.results)
        return ExitCode.NO_POINTS

    engine = DetectionEngine(bandplan, DetectionConfig.from_env(), event_log=open_event_log(args.jsonl))
    stats = engine.process_site(site, max_workers=args.workers)
    logger.info(
        "Analyzed %d traces (%d eligible, %d failed): %d LTE and %d GSM signals",
        stats.traces,
        stats.eligible,
        stats.failed,
        stats.lte_signals,
        stats.gsm_signals,
    )

    carriers = bandplan.carriers
    table = presence_table(site, carriers)
    print(f"Mobile network presence for {site.ref}")
    print(render_presence_text(table, carriers))

    if args.csv:
        with open(args.csv, "w", newline="", encoding="utf-8") as fh:
            write_presence_csv(fh, table, carriers)
        logger.info("Presence table written to %s", args.csv)
    if args.signals_csv:
        with open(args.signals_csv, "w", newline="", encoding="utf-8") as fh:
            write_signals_csv(fh, site)
        logger.info("Detected signals written to %s", args.signals_csv)
    if args.wifi_csv:
        with open(args.wifi_csv, "w", newline="", encoding="utf-8") as fh:
            write_wifi_csv(fh, export_rows(site, dedupe=not args.wifi_all))
        logger.info("Wi-Fi networks written to %s", args.wifi_csv)
    return ExitCode.SUCCESS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(
        description="Classify LTE/GSM carrier presence from spectrum analyzer survey exports",
    )
    p.add_argument("--results", type=str, default="results", help="Results directory with one folder per point (default ./results)")
    p.add_argument("--site", type=str, default="Site", help="Site label used in reports")
    p.add_argument("--bandplan", type=str, default=None, help="Optional bandplan CSV replacing the built-in carrier tables")
    p.add_argument("--list-bandplan", dest="list_bandplan", action="store_true", help="Print the active bandplan as JSON and exit")
    p.add_argument("--csv", type=str, default=None, help="Write the per-point carrier presence table to this CSV")
    p.add_argument("--signals-csv", dest="signals_csv", type=str, default=None, help="Write every detected signal to this CSV")
    p.add_argument("--wifi-csv", dest="wifi_csv", type=str, default=None, help="Write Wi-Fi networks to this CSV")
    p.add_argument("--wifi-all", dest="wifi_all", action="store_true", help="Keep every Wi-Fi sighting instead of the strongest per SSID/BSSID")
    p.add_argument("--jsonl", type=str, default=None, help="Append detection events as line-delimited JSON to this path")
    p.add_argument("--workers", type=int, default=1, help="Analyze points in parallel with this many threads (default 1)")
    p.add_argument("--log-level", dest="log_level", type=str, default=None, help="DEBUG, INFO, WARNING or ERROR (default from RFSURVEY_LOG_LEVEL)")
    p.add_argument("--log-json", dest="log_json", type=str, default=None, help="Also write JSON-formatted logs to this file")

    args = p.parse_args(argv)
    if args.workers < 1:
        p.error("--workers must be >= 1")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
