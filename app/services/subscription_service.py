# app/services/subscription_service.py
import logging
import uuid
from decimal import Decimal

from sqlmodel import Session

from app.core.errors import InvalidArgumentError
from app.models.subscription import SubscriptionPlan
from app.repositories.subscription_repo import SubscriptionRepository


class SubscriptionService:
    """
    Business logic for subscription plans.

    Responsibilities:
      - validate new plans (name, duration, price)
      - CRUD over SubscriptionRepository

    Checking that the referenced product exists is the caller's job
    (see routers/subscriptions.py).
    """

    def __init__(
        self,
        repo: SubscriptionRepository,
        logger: logging.Logger | None = None,
    ):
        self.repo = repo
        self.logger = logger or logging.getLogger(__name__)

    def create_subscription_plan(
        self,
        session: Session,
        product_id: uuid.UUID,
        plan_name: str,
        duration_days: int,
        price: Decimal,
    ) -> SubscriptionPlan:
        """
        Create a plan for an existing product.

        Rules:
          - plan_name must not be empty
          - duration_days > 0
          - price > 0
        """
        if not plan_name or not plan_name.strip():
            raise InvalidArgumentError("subscription plan name cannot be empty")

        if duration_days <= 0:
            raise InvalidArgumentError(
                "subscription plan duration must be greater than zero"
            )

        if price <= 0:
            raise InvalidArgumentError(
                "subscription plan price must be greater than zero"
            )

        plan = SubscriptionPlan(
            id=uuid.uuid4(),
            product_id=product_id,
            plan_name=plan_name,
            duration_days=duration_days,
            price=price,
        )
        saved = self.repo.save(session, plan)
        self.logger.info(
            "Created subscription plan %s for product %s", saved.id, product_id
        )
        return saved

    def get_subscription_plan_by_id(
        self,
        session: Session,
        plan_id: uuid.UUID,
    ) -> SubscriptionPlan:
        return self.repo.find_by_id(session, plan_id)

    def list_subscription_plans(
        self,
        session: Session,
        product_id: uuid.UUID | None = None,
    ) -> list[SubscriptionPlan]:
        """
        Every plan, or only the plans of one product when product_id is set.
        """
        if product_id is not None:
            return self.repo.find_by_product_id(session, product_id)
        return self.repo.list_all(session)

    def delete_subscription_plan(self, session: Session, plan_id: uuid.UUID) -> None:
        self.repo.delete(session, plan_id)
        self.logger.info("Deleted subscription plan %s", plan_id)

    def update_subscription_plan(
        self,
        session: Session,
        plan_id: uuid.UUID,
        plan_name: str,
        price: Decimal,
        duration_days: int,
    ) -> SubscriptionPlan:
        """
        Overwrite name, price and duration of an existing plan.
        """
        plan = self.repo.find_by_id(session, plan_id)

        plan.plan_name = plan_name
        plan.price = price
        plan.duration_days = duration_days

        updated = self.repo.update(session, plan)
        self.logger.info("Updated subscription plan %s", plan_id)
        return updated
