"""
Profile event logging utilities for CVFILL.

Appends profile lifecycle events (saved, activated, deleted, migrated) to a
JSON Lines log. This is the cross-session audit trail; for detailed
within-context logging use cvfill.utils.logger instead.

Usage:
    from cvfill.utils.event_logging import log_profile_event

    log_profile_event(
        events_file=Path("outs/logs/profile_events.log"),
        event_type="profile_saved",
        profile_id="3f9a0c1b2d4e",
        source="cli",
        name="Startup CV",
    )
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

BASE_EVENT_FIELDS = ("timestamp", "event_type", "profile_id", "source")
DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_profile_event(
    events_file: Path, event_type: str, profile_id: Optional[str], source: str, **extra_fields
) -> None:
    """
    Append one event to the profile event log (one JSON object per line).

    Args:
        events_file: JSON Lines file to append to (parent dirs are created)
        event_type: Type of event (e.g., "profile_saved", "legacy_migrated")
        profile_id: Profile identifier, or None for store-wide events like "store_cleared"
        source: Event source (e.g., "cli", "autofill", "manual")
        **extra_fields: Additional event-specific fields
    """
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": datetime.now().isoformat(),
        "event_type": event_type,
        "profile_id": profile_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    events_file: Path,
    n: int = 10,
    profile_id: Optional[str] = None,
    event_type: Optional[str] = None,
) -> list[dict]:
    """
    Get the last n events from the profile event log, optionally filtered.

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

    if profile_id:
        events = [e for e in events if e.get("profile_id") == profile_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events


def format_profile_event(event: dict) -> str:
    """
    One display line for a logged profile event.

    Columns are time (to the second), event type and profile id, followed
    by any event-specific fields as key=value. A timestamp that does not
    parse is shown as logged.

    Example:
        2025-11-13 18:45:40  profile_saved      3f9a0c1b2d4e  name='Startup CV' created=True
    """
    logged_at = event.get("timestamp", "")
    try:
        when = datetime.fromisoformat(logged_at).strftime(DISPLAY_TIME_FORMAT)
    except (TypeError, ValueError):
        when = str(logged_at)

    line = f"{when:<19}  {event.get('event_type', '?'):<18} {event.get('profile_id') or '-':<12}"

    extras = [f"{k}={v!r}" for k, v in event.items() if k not in BASE_EVENT_FIELDS]
    if extras:
        line += "  " + " ".join(extras)
    return line.rstrip()
