"""DateTime helpers.

Timestamps are stored as offset-naive UTC values so comparisons work the same
on SQLite and on PostgreSQL TIMESTAMP WITHOUT TIME ZONE columns.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC datetime without timezone info."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
