"""Display helpers for job cards: salary text, posting age, distance, deadlines."""

import math
from datetime import datetime
from typing import Optional

from models.schemas import Job

EARTH_RADIUS_KM = 6371
_LAKH = 100_000
_CRORE = 10_000_000


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positive amounts, so 2.5 lakh shows as 3L."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _format_amount(amount: float, currency: str) -> str:
    if currency == "INR":
        if amount >= _CRORE:
            return f"₹{_round_half_up(amount / _CRORE, 1):.1f}Cr"
        return f"₹{_round_half_up(amount / _LAKH):.0f}L"
    return f"${_round_half_up(amount / 1000):.0f}K"


def format_salary(min_amount: float, max_amount: float, currency: str = "INR") -> str:
    """Format a salary range, e.g. ``₹15L-₹25L`` or ``$120K-$150K``."""
    return f"{_format_amount(min_amount, currency)}-{_format_amount(max_amount, currency)}"


def format_posted_date(posted: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    diff_days = math.ceil(abs((now - posted).total_seconds()) / 86400)

    if diff_days == 0:
        return "Posted today"
    if diff_days == 1:
        return "Posted yesterday"
    if diff_days < 7:
        return f"Posted {diff_days} days ago"
    if diff_days < 30:
        return f"Posted {diff_days // 7} weeks ago"
    return f"Posted {diff_days // 30} months ago"


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km, rounded to one decimal."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 1)


def is_job_expiring_soon(job: Job, now: Optional[datetime] = None) -> bool:
    """True when the application deadline falls within the next seven days."""
    if not job.application_deadline:
        return False
    now = now or datetime.now()
    diff_days = math.ceil((job.application_deadline - now).total_seconds() / 86400)
    return 0 < diff_days <= 7
