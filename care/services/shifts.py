"""
Day/night shift classification for timeline entries.
"""
from __future__ import annotations

from datetime import datetime

from care import constants as c

# 08:31 .. 17:30 inclusive is the day shift
DAYTIME_START_MINUTE = 511
DAYTIME_END_MINUTE = 1050


def to_jst(ts: datetime) -> datetime:
    """Return ``ts`` as JST wall-clock time.  Naive values are taken as JST."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=c.JST)
    return ts.astimezone(c.JST)


def classify_shift(ts: datetime, start: int = DAYTIME_START_MINUTE, end: int = DAYTIME_END_MINUTE) -> str:
    local = to_jst(ts)
    minutes = local.hour * 60 + local.minute
    if start <= minutes <= end:
        return c.DAYTIME
    return c.NIGHT
