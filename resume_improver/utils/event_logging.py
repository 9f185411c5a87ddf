"""
Session event logging utilities.

Appends one JSON object per line to a session events file so submissions can
be reviewed after the fact. This is separate from the loguru session log
(see resume_improver.utils.logger), which holds free-text detail.

Usage:
    from resume_improver.utils.event_logging import log_session_event

    log_session_event(
        events_file=Path("outs/logs/session_events.log"),
        event_type="state_change",
        request_id=3,
        source="analysis",
        old_status="idle",
        new_status="loading",
    )
"""

import json
from pathlib import Path
from typing import Optional

from resume_improver.utils.timestamp import now_exact


def log_session_event(
    events_file: Path, event_type: str, request_id: int, source: str, **extra_fields
) -> None:
    """
    Append an event to the session events file (JSON Lines).

    Args:
        events_file: Target file; parent directories are created
        event_type: Type of event (e.g., "state_change", "input_rejected")
        request_id: Submission number the event belongs to (0 before the first)
        source: Event source (e.g., "analysis", "intake", "cli")
        **extra_fields: Additional event-specific fields
    """
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "request_id": request_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    events_file: Path, n: int = 10, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events, optionally filtered by type.

    Returns:
        List of event dicts (most recent last)
    """
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if n > 0 else []
