# canteen/utils/timezones.py
from datetime import datetime, date
from zoneinfo import ZoneInfo
from typing import Optional

from canteen.core.config import get_settings

UTC = ZoneInfo("UTC")


def canteen_tz() -> ZoneInfo:
    return ZoneInfo(get_settings().timezone)


def local_now(now: Optional[datetime] = None) -> datetime:
    """Wall-clock time at the canteen. Only request handlers and scripts call this;
    the booking engine receives ``now`` as a parameter."""
    tz = canteen_tz()
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def local_today(now: Optional[datetime] = None) -> date:
    return local_now(now).date()


def utc_naive(now: datetime) -> datetime:
    # DateTime columns are stored as naive UTC
    if now.tzinfo is None:
        return now
    return now.astimezone(UTC).replace(tzinfo=None)
