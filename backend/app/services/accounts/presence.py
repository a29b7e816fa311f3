# app/services/accounts/presence.py
"""
Human-readable presence ("Online", "Last seen 5 minutes ago") and seniority labels.
Pure functions; `now` is injectable for tests.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from app.core.clock import utcnow, as_utc
from app.services.jobs.catalog import SENIORITY_LABELS

ACTIVE_RECENTLY = "Active recently"
ONLINE_MINUTES = 2


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'}"


def _format_date(value: datetime) -> str:
    return value.strftime("%b %d, %Y").replace(" 0", " ")


def calculate_status_indicator(
    show_status: Optional[bool],
    last_seen: Optional[datetime],
    user_status: Optional[str],
    now: Optional[datetime] = None,
) -> Tuple[Optional[str], str]:
    """
    Returns (indicator, text). `indicator` is "Online" / "Away" only while the
    user was seen within the last couple of minutes, otherwise None.
    """
    if not show_status or last_seen is None:
        return None, ACTIVE_RECENTLY

    now = as_utc(now) if now else utcnow()
    minutes = int((now - as_utc(last_seen)).total_seconds() // 60)

    if minutes < ONLINE_MINUTES:
        if user_status == "away":
            return "Away", "Away"
        return "Online", "Online"
    if minutes < 60:
        return None, f"Last seen {_plural(minutes, 'minute')} ago"
    hours = minutes // 60
    if minutes < 24 * 60:
        return None, f"Last seen {_plural(hours, 'hour')} ago"
    if minutes < 48 * 60:
        return None, "Last seen yesterday"
    return None, f"Last seen on {_format_date(as_utc(last_seen))}"


def format_last_seen(last_seen: Optional[datetime], now: Optional[datetime] = None) -> str:
    if last_seen is None:
        return ACTIVE_RECENTLY
    now = as_utc(now) if now else utcnow()
    minutes = int((now - as_utc(last_seen)).total_seconds() // 60)
    if minutes < ONLINE_MINUTES:
        return "Online"
    if minutes < 60:
        return f"{_plural(minutes, 'minute')} ago"
    if minutes < 24 * 60:
        return f"{_plural(minutes // 60, 'hour')} ago"
    if minutes < 48 * 60:
        return "yesterday"
    return _format_date(as_utc(last_seen))


def format_seniority(value: Optional[str]) -> str:
    if not value:
        return ""
    if value in SENIORITY_LABELS:
        return SENIORITY_LABELS[value]
    return value[:1].upper() + value[1:]
