"""Tests for SubscriptionService and SubscriptionRepository."""

import uuid
from decimal import Decimal

import pytest
from sqlmodel import Session

from app.core.errors import InvalidArgumentError, NotFoundError, StoreError
from app.models.subscription import SubscriptionPlan
from app.repositories.subscription_repo import SubscriptionRepository
from app.services.subscription_service import SubscriptionService


@pytest.fixture
def repo() -> SubscriptionRepository:
    return SubscriptionRepository()


@pytest.fixture
def service(repo: SubscriptionRepository) -> SubscriptionService:
    return SubscriptionService(repo)


class TestCreateSubscriptionPlan:
    """Tests for create_subscription_plan validation and persistence."""

    @pytest.mark.parametrize(
        ("plan_name", "duration_days", "price", "message"),
        [
            ("", 30, Decimal("9.99"), "name cannot be empty"),
            ("   ", 30, Decimal("9.99"), "name cannot be empty"),
            ("Basic", 0, Decimal("9.99"), "duration must be greater than zero"),
            ("Basic", -5, Decimal("9.99"), "duration must be greater than zero"),
            ("Basic", 30, Decimal("0"), "price must be greater than zero"),
            ("Basic", 30, Decimal("-1.00"), "price must be greater than zero"),
        ],
    )
    def test_invalid_fields_are_rejected(
        self, service, session, plan_name, duration_days, price, message
    ) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            service.create_subscription_plan(
                session, uuid.uuid4(), plan_name, duration_days, price
            )
        assert message in exc_info.value.message
        assert service.list_subscription_plans(session) == []

    def test_basic_plan_round_trip(self, service, session) -> None:
        product_id = uuid.uuid4()
        plan = service.create_subscription_plan(
            session, product_id, "Basic", 30, Decimal("9.99")
        )

        found = service.get_subscription_plan_by_id(session, plan.id)
        assert found.id == plan.id
        assert found.product_id == product_id
        assert found.plan_name == "Basic"
        assert found.duration_days == 30
        assert found.price == Decimal("9.99")

    def test_each_plan_gets_a_new_id(self, service, session) -> None:
        product_id = uuid.uuid4()
        first = service.create_subscription_plan(
            session, product_id, "Basic", 30, Decimal("9.99")
        )
        second = service.create_subscription_plan(
            session, product_id, "Pro", 365, Decimal("99.00")
        )
        assert first.id != second.id


class TestPlanLifecycle:
    """Tests for get / list / update / delete."""

    def test_delete_then_get_is_not_found(self, service, session) -> None:
        plan = service.create_subscription_plan(
            session, uuid.uuid4(), "Basic", 30, Decimal("9.99")
        )
        service.delete_subscription_plan(session, plan.id)

        with pytest.raises(NotFoundError) as exc_info:
            service.get_subscription_plan_by_id(session, plan.id)
        assert exc_info.value.message == "subscription plan not found"

    def test_delete_missing_plan(self, service, session) -> None:
        with pytest.raises(NotFoundError):
            service.delete_subscription_plan(session, uuid.uuid4())

    def test_update_overwrites_all_mutable_fields(self, service, session) -> None:
        product_id = uuid.uuid4()
        plan = service.create_subscription_plan(
            session, product_id, "Basic", 30, Decimal("9.99")
        )

        updated = service.update_subscription_plan(
            session, plan.id, "Premium", Decimal("19.99"), 90
        )

        assert updated.id == plan.id
        assert updated.product_id == product_id
        assert updated.plan_name == "Premium"
        assert updated.price == Decimal("19.99")
        assert updated.duration_days == 90

    def test_update_missing_plan(self, service, session) -> None:
        with pytest.raises(NotFoundError):
            service.update_subscription_plan(
                session, uuid.uuid4(), "Premium", Decimal("19.99"), 90
            )

    def test_list_all_and_by_product(self, service, session) -> None:
        product_a = uuid.uuid4()
        product_b = uuid.uuid4()
        service.create_subscription_plan(session, product_a, "A1", 30, Decimal("1.00"))
        service.create_subscription_plan(session, product_a, "A2", 60, Decimal("2.00"))
        service.create_subscription_plan(session, product_b, "B1", 30, Decimal("3.00"))

        assert len(service.list_subscription_plans(session)) == 3

        names = {p.plan_name for p in service.list_subscription_plans(session, product_a)}
        assert names == {"A1", "A2"}

        assert service.list_subscription_plans(session, uuid.uuid4()) == []


def test_save_duplicate_id_raises_store_error(repo, engine) -> None:
    plan_id = uuid.uuid4()

    def make_plan() -> SubscriptionPlan:
        return SubscriptionPlan(
            id=plan_id,
            product_id=uuid.uuid4(),
            plan_name="Basic",
            duration_days=30,
            price=Decimal("9.99"),
        )

    with Session(engine) as s:
        repo.save(s, make_plan())

    with Session(engine) as s:
        with pytest.raises(StoreError):
            repo.save(s, make_plan())


def test_listings_are_ordered_by_id(repo, service, session) -> None:
    product_id = uuid.uuid4()
    for n in (3, 1, 2):
        repo.save(
            session,
            SubscriptionPlan(
                id=uuid.UUID(int=n),
                product_id=product_id,
                plan_name=f"Plan {n}",
                duration_days=30,
                price=Decimal("9.99"),
            ),
        )

    expected = [uuid.UUID(int=n) for n in (1, 2, 3)]
    assert [p.id for p in service.list_subscription_plans(session)] == expected
    assert [p.id for p in service.list_subscription_plans(session, product_id)] == expected
