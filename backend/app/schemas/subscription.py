from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel

BillingCycle = Literal["monthly", "yearly"]


class PlanOut(BaseModel):
    id: str
    name: str
    monthly_price: float
    yearly_price: float
    credits: Optional[int]  # None = unlimited
    locked: bool


class PlanSelectIn(BaseModel):
    plan_id: str
    billing_cycle: BillingCycle = "monthly"


class SubscriptionOut(BaseModel):
    plan_id: str
    billing_cycle: str
    credits_remaining: Optional[int] = None
    period_start: datetime

    class Config:
        from_attributes = True


class CreditsOut(BaseModel):
    plan_id: str
    credits_remaining: Optional[int] = None
    unlimited: bool
