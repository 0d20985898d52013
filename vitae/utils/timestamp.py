"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Timestamp for session directory names (e.g., "20251114_183040")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")

