# app/schemas/product.py
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, model_validator
from sqlmodel import Field, SQLModel

from app.models.product import MAX_PRICE


# ----- Kind-specific payloads (exactly one may be set on a product) -----


class DigitalProduct(SQLModel):
    model_config = ConfigDict(extra="forbid")

    file_size: int = 0
    download_link: str = ""


class PhysicalProduct(SQLModel):
    model_config = ConfigDict(extra="forbid")

    weight: float = 0.0
    dimensions: str = ""


class SubscriptionProduct(SQLModel):
    model_config = ConfigDict(extra="forbid")

    subscription_period: str = ""
    renewal_price: float = 0.0


# Wire field name -> Product.kind
PRODUCT_TYPE_FIELDS: dict[str, str] = {
    "digital_product": "digital",
    "physical_product": "physical",
    "subscription_product": "subscription",
}


class ProductTypeMixin(SQLModel):
    """
    The product-type "oneof": at most one of the three fields is set.
    """

    digital_product: DigitalProduct | None = None
    physical_product: PhysicalProduct | None = None
    subscription_product: SubscriptionProduct | None = None

    @model_validator(mode="after")
    def only_one_product_type(self):
        populated = [
            field for field in PRODUCT_TYPE_FIELDS if getattr(self, field) is not None
        ]
        if len(populated) > 1:
            raise ValueError(
                "only one of digital_product, physical_product, "
                f"subscription_product may be set (got {', '.join(populated)})"
            )
        return self


class ProductCreate(ProductTypeMixin):
    """
    Payload for CreateProduct.

    Ids and timestamps are assigned by the server.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=-MAX_PRICE, le=MAX_PRICE)


class ProductUpdate(SQLModel):
    """
    Payload for UpdateProduct.

    Only these three fields are mutable; all of them are overwritten.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str = ""
    price: Decimal = Field(ge=-MAX_PRICE, le=MAX_PRICE)


class ProductRead(ProductTypeMixin):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    created_at: datetime
    updated_at: datetime


class ListProductsResponse(SQLModel):
    products: list[ProductRead]
