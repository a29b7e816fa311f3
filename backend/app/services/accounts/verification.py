# app/services/accounts/verification.py
"""
Reminders for headhunters who never verified their email:
  - 24h after the verification email: one reminder.
  - 7 days after: a final notice and the account is deactivated.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.clock import utcnow, as_utc
from app.models.profile import Profile
from app.repositories import profile_repo
from app.services.common import email_client

logger = logging.getLogger("accounts.verification")

FIRST_REMINDER_AFTER = timedelta(hours=24)
DEACTIVATE_AFTER = timedelta(days=7)


def _send(profile: Profile, subject: str, html: str) -> None:
    try:
        email_client.send_email(profile.email, subject, html)
    except Exception:
        logger.exception("Reminder email to %s failed", profile.email)


def check_unverified_accounts(db: Session, now: Optional[datetime] = None) -> dict[str, int]:
    now = as_utc(now) if now else utcnow()
    counts = {"first_reminders": 0, "second_reminders": 0, "deactivations": 0}

    profiles = profile_repo.list_unverified_headhunters(db)
    logger.info("Found %d unverified accounts", len(profiles))

    for profile in profiles:
        sent_at = as_utc(profile.verification_sent_at)
        if sent_at is None:
            continue
        age = now - sent_at

        if age > DEACTIVATE_AFTER and profile.second_reminder_sent_at is None:
            logger.info("Sending final notice and deactivating %s", profile.id)
            _send(profile, *email_client.deactivation_email(profile.name))
            profile_repo.update(db, profile, account_status="deactivated", second_reminder_sent_at=now)
            counts["deactivations"] += 1
        elif age > FIRST_REMINDER_AFTER and profile.first_reminder_sent_at is None:
            logger.info("Sending first reminder to %s", profile.id)
            _send(profile, *email_client.first_reminder_email(profile.name))
            profile_repo.update(db, profile, first_reminder_sent_at=now)
            counts["first_reminders"] += 1

    logger.info(
        "Verification check done: %d first reminders, %d deactivations",
        counts["first_reminders"], counts["deactivations"],
    )
    return counts
