"""
Build event logging utilities for VITAE (Tier 2 logging).

Appends one JSON object per line to build_events.log so that build history
(starts, completions, failures) can be inspected independently of the
detailed per-session logs.

For detailed within-context logging (Tier 1), use vitae.utils.logger instead.

Usage:
    from vitae.utils.event_logging import log_build_event

    log_build_event(
        event_type="build_completed",
        source="pipeline",
        elapsed_s=3.2,
        pdf_path="dist/generated-pdf/Jane_Resume.pdf",
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vitae.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
BUILD_EVENTS_FILE = Path(os.getenv("BUILD_EVENTS_FILE", str(LOGS_PATH / "build_events.log")))


def log_build_event(event_type: str, source: str, **extra_fields) -> None:
    """
    Log an event to the build event log.

    Args:
        event_type: Type of event (e.g., "build_started", "build_failed")
        source: Event source (e.g., "pipeline", "coordinator", "cli")
        **extra_fields: Additional event-specific fields (must be JSON serializable)
    """
    BUILD_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "source": source,
        **extra_fields,
    }

    with open(BUILD_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def get_recent_events(n: int = 10, event_type: Optional[str] = None) -> list[dict]:
    """
    Get the last n events from the build log, optionally filtered by type.

    Args:
        n: Number of recent events to return (default: 10)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if not BUILD_EVENTS_FILE.exists():
        return []

    events = []
    with open(BUILD_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
