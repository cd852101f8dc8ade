"""
Utility helpers
"""

from typing import Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time"""
    return datetime.now(timezone.utc)


def format_timestamp_with_timezone(timestamp: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as ISO-8601 in UTC"""
    if not timestamp:
        return None
    # SQLite hands back naive datetimes that were stored as UTC
    if timestamp.tzinfo is None:
        return timestamp.isoformat() + 'Z'
    return timestamp.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')
