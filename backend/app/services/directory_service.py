"""Headhunter directory: search, filter and sort active headhunters."""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.repositories import profile_repo, saved_repo
from app.services.accounts.service import profile_to_dict

logger = logging.getLogger("directory.service")

MISSING_RESPONSE_TIME = 999


def _matches(profile, needle: str) -> bool:
    haystack = [profile.name or "", profile.bio or ""] + list(profile.expertise or [])
    return any(needle in (s or "").lower() for s in haystack)


def search_directory(
    db: Session,
    *,
    search: Optional[str] = None,
    industry: Optional[str] = None,
    availability: Optional[str] = None,
    sort: str = "rating",
) -> list[dict[str, Any]]:
    profiles = profile_repo.list_headhunters(db)

    needle = (search or "").strip().lower()
    if needle:
        profiles = [p for p in profiles if _matches(p, needle)]
    if industry and industry != "all":
        profiles = [p for p in profiles if industry in (p.industries or [])]
    if availability == "available":
        profiles = [p for p in profiles if p.availability == "available"]

    if sort == "success_rate":
        profiles.sort(key=lambda p: p.success_rate or 0, reverse=True)
    elif sort == "response_time":
        profiles.sort(key=lambda p: p.response_time_hours if p.response_time_hours is not None else MISSING_RESPONSE_TIME)
    else:
        profiles.sort(key=lambda p: p.rating_avg or 0, reverse=True)

    counts = saved_repo.count_saves_for_headhunters(db, [p.id for p in profiles])
    out = []
    for p in profiles:
        data = profile_to_dict(p)
        data["saved_count"] = counts.get(p.id, 0)
        out.append(data)
    logger.debug("Directory search '%s' -> %d headhunters", needle, len(out))
    return out
