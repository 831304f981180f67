# app/utils/clock.py
from datetime import datetime, date
from zoneinfo import ZoneInfo

from app.core.config import APP_TIMEZONE

LOCAL_TZ = ZoneInfo(APP_TIMEZONE)


def now_local() -> datetime:
    """Wall-clock time in the business timezone; cutoffs and "today" use this."""
    return datetime.now(LOCAL_TZ)


def today_local() -> date:
    return now_local().date()
