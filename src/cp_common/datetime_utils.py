"""UTC datetime utilities."""

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def not_before(candidate: datetime, floor: datetime | None) -> datetime:
    """Return ``candidate`` unless it is earlier than ``floor``.

    Keeps per-user history timestamps non-decreasing when the wall clock steps back.
    """
    if floor is not None and candidate < floor:
        return floor
    return candidate
