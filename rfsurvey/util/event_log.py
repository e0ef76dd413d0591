"""JSON-lines event log for detection decisions."""

from __future__ import annotations

import copy
import json
import os
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def utc_now_str() -> str:
    return datetime.now(timezone.utc).isoformat()


class EventLog:
    def __init__(self, log_path: Path):
        self.log_path = Path(log_path).expanduser()
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.run_id = f"run-{int(time.time() * 1000)}-pid{os.getpid()}"
        self.context: dict = {}
        self._lock = threading.Lock()

    def bind(self, **fields: Any) -> "EventLog":
        """Return a view of this log that adds ``fields`` to every event."""
        child = copy.copy(self)
        child.context = {**self.context, **fields}
        return child

    def log(self, event: str, **fields: Any) -> None:
        record = {
            "ts": utc_now_str(),
            "run_id": self.run_id,
            "event": event,
            **self.context,
            **fields,
        }
        line = json.dumps(record, default=str) + "\n"
        with self._lock:
            with self.log_path.open("a", encoding="utf-8") as fh:
                fh.write(line)


def open_event_log(path: Optional[str]) -> Optional[EventLog]:
    if not path:
        return None
    return EventLog(Path(path))
