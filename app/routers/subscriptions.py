# app/routers/subscriptions.py
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.errors import (
    CatalogError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    parse_uuid,
)
from app.database import get_session
from app.models.subscription import SubscriptionPlan
from app.repositories.product_repo import ProductRepository
from app.repositories.subscription_repo import SubscriptionRepository
from app.schemas.subscription import (
    CreateSubscriptionPlanResponse,
    ListSubscriptionPlansResponse,
    SubscriptionPlanCreate,
    SubscriptionPlanRead,
    SubscriptionPlanUpdate,
)
from app.services.product_service import ProductService
from app.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])

logger = logging.getLogger(__name__)

subscription_repo = SubscriptionRepository()
product_repo = ProductRepository()
service = SubscriptionService(
    subscription_repo, logger=logging.getLogger("app.services.subscriptions")
)
product_service = ProductService(
    product_repo, logger=logging.getLogger("app.services.products")
)

CENT = Decimal("0.01")


def round_price(price: Decimal) -> Decimal:
    """
    Round to 2 decimal places, halves away from zero (19.995 -> 20.00).

    Values that cannot be represented with cent precision raise
    InvalidArgumentError.
    """
    try:
        return price.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidArgumentError(f"invalid price {price}: out of range") from exc


def _to_read(plan: SubscriptionPlan) -> SubscriptionPlanRead:
    return SubscriptionPlanRead(
        id=plan.id,
        product_id=plan.product_id,
        plan_name=plan.plan_name,
        price=plan.price,
        duration_days=plan.duration_days,
    )


@router.post(
    "",
    response_model=CreateSubscriptionPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_subscription(
    payload: SubscriptionPlanCreate,
    session: Session = Depends(get_session),
):
    """
    Create a subscription plan for an existing product.

    - Unknown / malformed product_id => 404.
    - Empty name, duration <= 0 or price <= 0 => 400.
    """
    try:
        product = product_service.find_product_by_id(session, payload.product_id)
    except CatalogError as exc:
        logger.warning("Product lookup failed for %r: %s", payload.product_id, exc)
        raise NotFoundError(f"Product not found: {exc.message}") from exc

    try:
        plan = service.create_subscription_plan(
            session,
            product.id,
            payload.plan_name,
            payload.duration_days,
            payload.price,
        )
    except InvalidArgumentError as exc:
        logger.warning("Rejected subscription plan: %s", exc)
        raise
    except CatalogError as exc:
        logger.error("Failed to create subscription plan: %s", exc)
        raise NotFoundError(
            f"Failed to create subscription plan: {exc.message}"
        ) from exc

    return CreateSubscriptionPlanResponse(subscription_plan=_to_read(plan))


@router.get("", response_model=ListSubscriptionPlansResponse)
def list_subscription_plans(
    product_id: str | None = None,
    session: Session = Depends(get_session),
):
    """
    List subscription plans, optionally only those of `product_id`.
    """
    parsed_product_id = (
        parse_uuid(product_id, "product") if product_id is not None else None
    )
    plans = service.list_subscription_plans(session, parsed_product_id)
    return ListSubscriptionPlansResponse(
        subscription_plans=[_to_read(p) for p in plans]
    )


@router.get("/{plan_id}", response_model=SubscriptionPlanRead)
def get_subscription_plan(
    plan_id: str,
    session: Session = Depends(get_session),
):
    """
    Get a single subscription plan by id.
    """
    plan = service.get_subscription_plan_by_id(
        session, parse_uuid(plan_id, "subscription plan")
    )
    return _to_read(plan)


@router.put("/{plan_id}", response_model=SubscriptionPlanRead)
def update_subscription_plan(
    plan_id: str,
    payload: SubscriptionPlanUpdate,
    session: Session = Depends(get_session),
):
    """
    Replace name, price and duration of a plan.

    The price is rounded to 2 decimal places before it is stored.
    """
    plan = service.update_subscription_plan(
        session,
        parse_uuid(plan_id, "subscription plan"),
        payload.plan_name,
        round_price(payload.price),
        payload.duration_days,
    )
    return _to_read(plan)


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_subscription(
    plan_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a subscription plan.

    Any failure after the id is parsed is reported as INTERNAL.
    """
    parsed_id = parse_uuid(plan_id, "subscription plan")
    try:
        service.delete_subscription_plan(session, parsed_id)
    except CatalogError as exc:
        logger.error("Failed to delete subscription plan %s: %s", parsed_id, exc)
        raise InternalError(
            f"Failed to delete subscription plan: {exc.message}"
        ) from exc
    return None
