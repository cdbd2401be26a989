"""
Shared utilities for CVFILL.

Common functionality used across contexts:
- Logger setup
- Profile event logging
"""

from cvfill.utils.event_logging import format_profile_event, get_recent_events, log_profile_event

__all__ = ["format_profile_event", "get_recent_events", "log_profile_event"]
