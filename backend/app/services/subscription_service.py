"""Plans and application credits."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import utcnow
from app.core.errors import NotFoundError, ValidationFailedError, PaymentRequiredError
from app.models.subscription import Subscription
from app.repositories import subscription_repo

logger = logging.getLogger("subscriptions.service")

YEARLY_MULTIPLIER = 10


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    monthly_price: float
    credits: Optional[int]  # None = unlimited
    locked: bool = False

    @property
    def unlimited(self) -> bool:
        return self.credits is None

    def price(self, billing_cycle: str) -> float:
        return self.monthly_price * YEARLY_MULTIPLIER if billing_cycle == "yearly" else self.monthly_price


PLANS: dict[str, Plan] = {
    "free": Plan("free", "Free", 0, 20),
    "core": Plan("core", "Core", 29, 250),
    "pro": Plan("pro", "Pro", 39, None, locked=True),
    "huntorix": Plan("huntorix", "HuntoriX", 79, None, locked=True),
}
DEFAULT_PLAN_ID = "free"


def list_plans() -> list[Plan]:
    return list(PLANS.values())


def get_plan(plan_id: str) -> Plan:
    plan = PLANS.get(plan_id)
    if not plan:
        raise NotFoundError("Plan not found")
    return plan


def ensure_subscription(db: Session, user_id: UUID) -> Subscription:
    sub = subscription_repo.get_for_user(db, user_id)
    if sub is None:
        plan = PLANS[DEFAULT_PLAN_ID]
        sub = subscription_repo.upsert(
            db, user_id, plan_id=plan.id, billing_cycle="monthly",
            credits_remaining=plan.credits, period_start=utcnow(),
        )
    return sub


def select_plan(db: Session, user_id: UUID, plan_id: str, billing_cycle: str = "monthly") -> Subscription:
    plan = get_plan(plan_id)
    if plan.locked:
        raise ValidationFailedError(f"The {plan.name} plan is not available yet")
    if billing_cycle not in ("monthly", "yearly"):
        raise ValidationFailedError("Billing cycle must be monthly or yearly")
    sub = subscription_repo.upsert(
        db, user_id, plan_id=plan.id, billing_cycle=billing_cycle,
        credits_remaining=plan.credits, period_start=utcnow(),
    )
    logger.info("User %s selected plan %s (%s)", user_id, plan.id, billing_cycle)
    return sub


def get_credits(db: Session, user_id: UUID) -> Optional[int]:
    """Remaining credits, or None for unlimited plans."""
    sub = ensure_subscription(db, user_id)
    if PLANS.get(sub.plan_id, PLANS[DEFAULT_PLAN_ID]).unlimited:
        return None
    return sub.credits_remaining or 0


def require_credit(db: Session, user_id: UUID) -> None:
    credits = get_credits(db, user_id)
    if credits is not None and credits <= 0:
        raise PaymentRequiredError("You have no application credits left. Please upgrade your plan.")


def consume_credit(db: Session, user_id: UUID) -> Optional[int]:
    """Deduct one credit; unlimited plans are untouched. Returns the remaining credits."""
    sub = ensure_subscription(db, user_id)
    if PLANS.get(sub.plan_id, PLANS[DEFAULT_PLAN_ID]).unlimited:
        return None
    remaining = max((sub.credits_remaining or 0) - 1, 0)
    subscription_repo.set_credits(db, sub, remaining)
    return remaining
