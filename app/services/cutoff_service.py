# app/services/cutoff_service.py
import logging
from datetime import date, datetime
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order_models import OrderType
from app.models.setting_models import Setting

logger = logging.getLogger(__name__)

SELF_CUTOFF_KEY = "self_cutoff_time"
DONATE_CUTOFF_KEY = "donate_cutoff_time"


def cutoff_key_for(order_type: str) -> str:
    # donate and sponsor share one deadline
    return SELF_CUTOFF_KEY if order_type == OrderType.SELF.value else DONATE_CUTOFF_KEY


def parse_cutoff(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse a 24h "HH:MM" value into (hours, minutes); None when absent or malformed."""
    if not value:
        return None
    try:
        hours_str, minutes_str = value.strip().split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except ValueError:
        logger.warning(f"Ignoring malformed cutoff time setting: {value!r}")
        return None
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        logger.warning(f"Ignoring out-of-range cutoff time setting: {value!r}")
        return None
    return hours, minutes


def format_cutoff(hours: int, minutes: int) -> str:
    period = "PM" if hours >= 12 else "AM"
    hours12 = hours % 12 or 12
    return f"{hours12}:{minutes:02d} {period}"


def evaluate_cutoff(cutoff_value: Optional[str], delivery_date: date, now: datetime) -> Optional[str]:
    """Rejection message when a same-day order arrives at or after the cutoff, else None."""
    if delivery_date != now.date():
        return None

    cutoff = parse_cutoff(cutoff_value)
    if cutoff is None:
        return None

    cutoff_hours, cutoff_minutes = cutoff
    current_total_minutes = now.hour * 60 + now.minute
    cutoff_total_minutes = cutoff_hours * 60 + cutoff_minutes

    if current_total_minutes >= cutoff_total_minutes:
        return (
            f"Orders for today must be placed before {format_cutoff(cutoff_hours, cutoff_minutes)}. "
            "Please select a different delivery date."
        )
    return None


async def get_setting_value(db: AsyncSession, key: str) -> Optional[str]:
    result = await db.execute(select(Setting.value).where(Setting.key == key))
    return result.scalar_one_or_none()


async def check_cutoff_time(db: AsyncSession, order_type: str, delivery_date: date, now: datetime) -> Optional[str]:
    """Reads the configured cutoff fresh on every call; never cached across requests."""
    if delivery_date != now.date():
        return None
    cutoff_value = await get_setting_value(db, cutoff_key_for(order_type))
    return evaluate_cutoff(cutoff_value, delivery_date, now)
