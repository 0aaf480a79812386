# app/routers/products.py
import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.errors import parse_uuid
from app.database import get_session
from app.models.product import Product, ProductDetail
from app.repositories.product_repo import ProductRepository
from app.schemas.product import (
    ListProductsResponse,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo, logger=logging.getLogger("app.services.products"))


def _to_domain(payload: ProductCreate) -> Product:
    """
    Decode the create payload into a Product with fresh ids/timestamps
    and, when a product type is set, its detail row.
    """
    now = datetime.now(timezone.utc)
    product = Product(
        id=uuid.uuid4(),
        name=payload.name,
        description=payload.description,
        price=payload.price,
        created_at=now,
        updated_at=now,
    )

    if payload.digital_product is not None:
        product.kind = "digital"
        product.detail = ProductDetail(
            id=uuid.uuid4(),
            product_id=product.id,
            kind="digital",
            file_size=payload.digital_product.file_size,
            download_link=payload.digital_product.download_link,
        )
    elif payload.physical_product is not None:
        product.kind = "physical"
        product.detail = ProductDetail(
            id=uuid.uuid4(),
            product_id=product.id,
            kind="physical",
            weight=payload.physical_product.weight,
            dimensions=payload.physical_product.dimensions,
        )
    elif payload.subscription_product is not None:
        product.kind = "subscription"
        product.detail = ProductDetail(
            id=uuid.uuid4(),
            product_id=product.id,
            kind="subscription",
            subscription_period=payload.subscription_product.subscription_period,
            renewal_price=payload.subscription_product.renewal_price,
        )

    return product


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a product, optionally with one of
    digital_product / physical_product / subscription_product.

    The product-type payload is echoed back as sent.
    """
    created = service.create_product(session, _to_domain(payload))
    return ProductRead(
        id=created.id,
        name=created.name,
        description=created.description,
        price=created.price,
        created_at=created.created_at,
        updated_at=created.updated_at,
        digital_product=payload.digital_product,
        physical_product=payload.physical_product,
        subscription_product=payload.subscription_product,
    )


@router.get("", response_model=ListProductsResponse)
def list_products(
    product_type: str = Query(default="", alias="type"),
    session: Session = Depends(get_session),
):
    """
    List products.

    - `type=digital|physical|subscription` filters on the product kind.
    - Empty or unknown `type` returns every product.
    """
    return service.list_products(session, product_type)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    product = service.get_product_by_id(session, parse_uuid(product_id, "product"))
    return service.to_read(product)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Replace name, description and price of a product.
    """
    product = service.update_product(
        session, parse_uuid(product_id, "product"), payload
    )
    return service.to_read(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its kind-specific details.

    Deleting an id that does not exist is not an error.
    """
    service.delete_product(session, parse_uuid(product_id, "product"))
    return None
