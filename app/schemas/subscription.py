# app/schemas/subscription.py
import uuid
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import Field, SQLModel

from app.models.product import MAX_PRICE


class SubscriptionPlanCreate(SQLModel):
    """
    Payload for CreateSubscription.

    Field rules (non-empty name, positive duration and price) are enforced
    by SubscriptionService so they surface as INVALID_ARGUMENT.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: str
    plan_name: str = ""
    duration_days: int = 0
    price: Decimal = Field(default=Decimal("0"), ge=-MAX_PRICE, le=MAX_PRICE)


class SubscriptionPlanUpdate(SQLModel):
    """
    Payload for UpdateSubscriptionPlan. Price is rounded to 2 decimals
    by the router before it is stored.
    """

    model_config = ConfigDict(extra="forbid")

    plan_name: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=-MAX_PRICE, le=MAX_PRICE)
    duration_days: int = 0


class SubscriptionPlanRead(SQLModel):
    id: uuid.UUID
    product_id: uuid.UUID
    plan_name: str
    price: Decimal
    duration_days: int


class CreateSubscriptionPlanResponse(SQLModel):
    subscription_plan: SubscriptionPlanRead


class ListSubscriptionPlansResponse(SQLModel):
    subscription_plans: list[SubscriptionPlanRead]
