"""Time source shared by services that stamp or compare timestamps."""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Current UTC time as a naive datetime.

    Naive UTC matches what the database columns round-trip, so values read
    back from SQLite and PostgreSQL compare cleanly with fresh ones.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
