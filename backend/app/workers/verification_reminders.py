# app/workers/verification_reminders.py
"""
Verification Reminder Worker - periodically reminds headhunters who never
verified their email and deactivates accounts past the grace period.
"""
# Purpose: Run check_unverified_accounts every REMINDER_INTERVAL_SECONDS.
from __future__ import annotations

import logging
import sys
import time

from app.core.config import settings
from app.db.base import SessionLocal
from app.services.accounts.verification import check_unverified_accounts

logger = logging.getLogger("workers.reminders")


def run_once() -> dict[str, int]:
    db = SessionLocal()
    try:
        return check_unverified_accounts(db)
    finally:
        db.close()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger.info("Starting verification reminder worker (every %ss)", settings.REMINDER_INTERVAL_SECONDS)
    try:
        while True:
            try:
                counts = run_once()
                logger.info("Reminder pass: %s", counts)
            except Exception:
                # A failed pass is retried on the next tick
                logger.exception("Reminder pass failed")
            time.sleep(settings.REMINDER_INTERVAL_SECONDS)
    except KeyboardInterrupt:
        logger.info("Reminder worker stopped")


if __name__ == "__main__":
    main()
