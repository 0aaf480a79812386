# app/repositories/product_repo.py
import uuid

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from app.core.errors import NotFoundError
from app.database import store_operation
from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product & its ProductDetail.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    - SQLAlchemy failures surface as StoreError, missing rows as NotFoundError.
    """

    # ----- Writes -----

    def create(self, session: Session, product: Product) -> Product:
        """
        Insert a product together with its detail row (if any) in one commit.
        """
        with store_operation(session, f"create product {product.id}"):
            session.add(product)
            session.commit()
            session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        with store_operation(session, f"update product {product.id}"):
            session.add(product)
            session.commit()
            session.refresh(product)
        return product

    def delete(self, session: Session, product_id: uuid.UUID) -> bool:
        """
        Delete a product (and its detail row) by id.

        Returns False when there was nothing to delete; that is not an error.
        """
        with store_operation(session, f"delete product {product_id}"):
            product = session.get(Product, product_id)
            if product is None:
                return False
            session.delete(product)
            session.commit()
        return True

    # ----- Reads -----

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product:
        stmt = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.detail))
        )
        with store_operation(session, f"fetch product with ID {product_id}"):
            product = session.exec(stmt).first()

        if product is None:
            raise NotFoundError(f"product with ID {product_id} not found")
        return product

    def find_by_id(self, session: Session, raw_id: str) -> Product:
        """
        Look a product up by its id exactly as received on the wire.

        A string that is not a UUID cannot match any row.
        """
        try:
            product_id = uuid.UUID(raw_id)
        except ValueError:
            raise NotFoundError(f"product with ID {raw_id} not found")

        with store_operation(session, f"find product {raw_id}"):
            product = session.exec(
                select(Product).where(Product.id == product_id)
            ).first()

        if product is None:
            raise NotFoundError(f"product with ID {raw_id} not found")
        return product

    def get_all(self, session: Session) -> list[Product]:
        stmt = (
            select(Product)
            .options(selectinload(Product.detail))
            .order_by(Product.created_at, Product.id)
        )
        with store_operation(session, "list products"):
            return list(session.exec(stmt).all())

    def get_by_kind(self, session: Session, kind: str) -> list[Product]:
        """
        Products whose discriminator equals `kind` (digital/physical/subscription).
        """
        stmt = (
            select(Product)
            .where(Product.kind == kind)
            .options(selectinload(Product.detail))
            .order_by(Product.created_at, Product.id)
        )
        with store_operation(session, f"list {kind} products"):
            return list(session.exec(stmt).all())
