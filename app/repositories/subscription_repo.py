# app/repositories/subscription_repo.py
import uuid

from sqlmodel import Session, select

from app.core.errors import NotFoundError
from app.database import store_operation
from app.models.subscription import SubscriptionPlan


class SubscriptionRepository:
    """
    Data access layer for SubscriptionPlan.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def save(self, session: Session, plan: SubscriptionPlan) -> SubscriptionPlan:
        """Insert a new plan; its id is assigned by the caller."""
        with store_operation(session, f"save subscription plan {plan.id}"):
            session.add(plan)
            session.commit()
            session.refresh(plan)
        return plan

    def find_by_id(self, session: Session, plan_id: uuid.UUID) -> SubscriptionPlan:
        with store_operation(session, f"fetch subscription plan {plan_id}"):
            plan = session.get(SubscriptionPlan, plan_id)
        if plan is None:
            raise NotFoundError("subscription plan not found")
        return plan

    def find_by_product_id(
        self,
        session: Session,
        product_id: uuid.UUID,
    ) -> list[SubscriptionPlan]:
        stmt = (
            select(SubscriptionPlan)
            .where(SubscriptionPlan.product_id == product_id)
            .order_by(SubscriptionPlan.id)
        )
        with store_operation(session, f"list subscription plans for product {product_id}"):
            return list(session.exec(stmt).all())

    def delete(self, session: Session, plan_id: uuid.UUID) -> None:
        with store_operation(session, f"delete subscription plan {plan_id}"):
            plan = session.get(SubscriptionPlan, plan_id)
            if plan is None:
                raise NotFoundError("subscription plan not found")
            session.delete(plan)
            session.commit()

    def update(self, session: Session, plan: SubscriptionPlan) -> SubscriptionPlan:
        """Persist changes to an existing plan."""
        with store_operation(session, f"update subscription plan {plan.id}"):
            session.add(plan)
            session.commit()
            session.refresh(plan)
        return plan

    def list_all(self, session: Session) -> list[SubscriptionPlan]:
        """Every plan, ordered by id."""
        stmt = select(SubscriptionPlan).order_by(SubscriptionPlan.id)
        with store_operation(session, "list subscription plans"):
            return list(session.exec(stmt).all())
