# app/models/subscription.py
import uuid
from decimal import Decimal

from sqlmodel import SQLModel, Field


class SubscriptionPlan(SQLModel, table=True):
    """
    Pricing/duration offer attached to a product.

    product_id is indexed but not a foreign key; the product is checked
    when the plan is created, not by the database.
    """

    __tablename__ = "subscription_plans"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_id: uuid.UUID = Field(
        index=True,
        description="Referenced products.id (not enforced)",
    )

    plan_name: str = Field(max_length=255)

    duration_days: int = Field(description="Plan length in days")

    price: Decimal = Field(
        max_digits=12,
        decimal_places=2,
        description="Plan price",
    )
