# app/services/product_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from app.core.errors import InvalidArgumentError, NotFoundError, StoreError
from app.models.product import PRODUCT_KINDS, Product, ProductDetail
from app.repositories.product_repo import ProductRepository
from app.schemas.product import (
    DigitalProduct,
    ListProductsResponse,
    PhysicalProduct,
    ProductRead,
    ProductUpdate,
    SubscriptionProduct,
)


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - pass-through CRUD over ProductRepository
      - kind-filtered listing
      - ORM -> ProductRead assembly (all three kinds projected)

    No field validation happens here: the create/update payloads are
    accepted as decoded by the router.
    """

    def __init__(self, repo: ProductRepository, logger: logging.Logger | None = None):
        self.repo = repo
        self.logger = logger or logging.getLogger(__name__)

    # ----- Helpers -----

    @staticmethod
    def _detail_payload(detail: ProductDetail | None) -> dict:
        """
        Map a detail row back to its wire field, e.g.
        {"digital_product": DigitalProduct(...)}; {} for plain products.
        """
        if detail is None:
            return {}

        if detail.kind == "digital":
            return {
                "digital_product": DigitalProduct(
                    file_size=detail.file_size or 0,
                    download_link=detail.download_link or "",
                )
            }
        if detail.kind == "physical":
            return {
                "physical_product": PhysicalProduct(
                    weight=detail.weight or 0.0,
                    dimensions=detail.dimensions or "",
                )
            }
        if detail.kind == "subscription":
            return {
                "subscription_product": SubscriptionProduct(
                    subscription_period=detail.subscription_period or "",
                    renewal_price=detail.renewal_price or 0.0,
                )
            }
        return {}

    def to_read(self, product: Product) -> ProductRead:
        """
        Compose ProductRead from the ORM model, including its kind payload.
        """
        return ProductRead(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            created_at=product.created_at,
            updated_at=product.updated_at,
            **self._detail_payload(product.detail),
        )

    # ----- Products -----

    def create_product(self, session: Session, product: Product) -> Product:
        created = self.repo.create(session, product)
        self.logger.info(
            "Created product %s (kind=%s)", created.id, created.kind or "none"
        )
        return created

    def get_product_by_id(self, session: Session, product_id: uuid.UUID) -> Product:
        try:
            return self.repo.get_by_id(session, product_id)
        except (NotFoundError, StoreError) as exc:
            raise type(exc)(
                f"error fetching product with ID {product_id}: {exc.message}"
            ) from exc

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        patch: ProductUpdate,
    ) -> Product:
        """
        Overwrite name, description and price. The kind and its detail
        row are never touched.
        """
        try:
            product = self.repo.get_by_id(session, product_id)
        except NotFoundError as exc:
            raise NotFoundError(f"product not found: {exc.message}") from exc

        product.name = patch.name
        product.description = patch.description
        product.price = patch.price
        product.updated_at = datetime.now(timezone.utc)

        try:
            updated = self.repo.update(session, product)
        except StoreError as exc:
            raise StoreError(f"failed to update product: {exc.message}") from exc

        self.logger.info("Updated product %s", product_id)
        return updated

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        if self.repo.delete(session, product_id):
            self.logger.info("Deleted product %s", product_id)
        else:
            self.logger.info("Delete of product %s: nothing to delete", product_id)

    def list_products(self, session: Session, kind: str = "") -> ListProductsResponse:
        """
        List products, optionally restricted to one kind.

        "digital" | "physical" | "subscription" filter on the kind;
        anything else (including "") returns every product.
        """
        if kind in PRODUCT_KINDS:
            products = self.repo.get_by_kind(session, kind)
        else:
            products = self.repo.get_all(session)

        return ListProductsResponse(products=[self.to_read(p) for p in products])

    def find_product_by_id(self, session: Session, raw_id: str) -> Product:
        """
        Resolve a product from an unparsed id string (used by
        CreateSubscription before a plan is attached).
        """
        if not raw_id:
            raise InvalidArgumentError("product ID cannot be empty")
        return self.repo.find_by_id(session, raw_id)
