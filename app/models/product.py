# app/models/product.py
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKeyConstraint, UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship

# Allowed values for Product.kind / ProductDetail.kind
PRODUCT_KINDS: tuple[str, ...] = ("digital", "physical", "subscription")

# Largest magnitude a NUMERIC(12, 2) price column holds
MAX_PRICE = Decimal("9999999999.99")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(SQLModel, table=True):
    """
    Catalog entry, optionally specialized into one kind.

    Columns:
      - id, name, description, price, kind, created_at, updated_at

    `kind` is NULL for a plain product, otherwise one of PRODUCT_KINDS and
    the matching row lives in product_details. (id, kind) is unique so the
    detail row can reference both columns.
    """

    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("id", "kind", name="uq_products_id_kind"),)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=255,
        description="Display name of the product",
    )

    description: str = Field(
        default="",
        description="Free-form description",
    )

    price: Decimal = Field(
        default=Decimal("0"),
        max_digits=12,
        decimal_places=2,
        description="Unit price",
    )

    kind: str | None = Field(
        default=None,
        max_length=20,
        index=True,
        description="digital | physical | subscription, or NULL",
    )

    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_type=DateTime(timezone=True),
        description="Last update timestamp (UTC)",
    )

    detail: Optional["ProductDetail"] = Relationship(
        back_populates="product",
        sa_relationship_kwargs={
            "uselist": False,
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
        },
    )


class ProductDetail(SQLModel, table=True):
    """
    Kind-specific fields of a product.

    One row per product at most (product_id is unique). The composite
    foreign key (product_id, kind) -> products(id, kind) keeps the row's
    kind equal to its parent's. Only the columns of `kind` are populated:

      - digital:      file_size, download_link
      - physical:     weight, dimensions
      - subscription: subscription_period, renewal_price
    """

    __tablename__ = "product_details"
    __table_args__ = (
        ForeignKeyConstraint(
            ["product_id", "kind"],
            ["products.id", "products.kind"],
            name="fk_product_details_product",
            ondelete="CASCADE",
        ),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    product_id: uuid.UUID = Field(
        unique=True,
        index=True,
    )

    kind: str = Field(max_length=20)

    # digital
    file_size: int | None = None
    download_link: str | None = None

    # physical
    weight: float | None = None
    dimensions: str | None = None

    # subscription
    subscription_period: str | None = None
    renewal_price: float | None = None

    product: Optional[Product] = Relationship(back_populates="detail")
