"""Timezone utilities for timestamps and local-date display"""
import os
from datetime import date, datetime
import pytz

# Local timezone of the clinical site (export filenames, display)
LOCAL_TZ = pytz.timezone(os.getenv("APP_TIMEZONE", "Asia/Taipei"))


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(pytz.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix"""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_today(now: datetime | None = None) -> date:
    """
    Today's date in the local timezone.
    
    Args:
        now: Reference time; naive values are assumed to be UTC
        
    Returns:
        Local calendar date
    """
    if now is None:
        now = utc_now()
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(LOCAL_TZ).date()
