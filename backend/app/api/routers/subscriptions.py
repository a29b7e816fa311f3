from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.subscription import PlanOut, PlanSelectIn, SubscriptionOut, CreditsOut
from app.services import subscription_service

router = APIRouter(tags=["subscriptions"])


@router.get("/plans", response_model=list[PlanOut])
def list_plans():
    return [
        PlanOut(
            id=p.id,
            name=p.name,
            monthly_price=p.price("monthly"),
            yearly_price=p.price("yearly"),
            credits=p.credits,
            locked=p.locked,
        )
        for p in subscription_service.list_plans()
    ]


@router.get("/subscriptions/me", response_model=SubscriptionOut)
def get_my_subscription(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return subscription_service.ensure_subscription(db, user.id)


@router.post("/subscriptions/select", response_model=SubscriptionOut)
def select_plan(payload: PlanSelectIn, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return subscription_service.select_plan(db, user.id, payload.plan_id, payload.billing_cycle)


@router.get("/subscriptions/credits", response_model=CreditsOut)
def get_credits(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    credits = subscription_service.get_credits(db, user.id)
    sub = subscription_service.ensure_subscription(db, user.id)
    return CreditsOut(plan_id=sub.plan_id, credits_remaining=credits, unlimited=credits is None)
