"""Catalog operations over products and their stock counters."""

from decimal import Decimal
from typing import List

import structlog
from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError, ValidationError
from storefront.core.security import now_utc
from storefront.db.models import Product
from storefront.db.session import transaction
from storefront.schemas import ProductWrite
from storefront.store import catalog_store

logger = structlog.get_logger(__name__)


def _check_price_and_stock(payload: ProductWrite):
    if payload.price <= 0:
        raise ValidationError("Price must be greater than 0")
    if payload.stock < 0:
        raise ValidationError("Stock cannot be negative")


def create(db: Session, payload: ProductWrite) -> Product:
    _check_price_and_stock(payload)
    with transaction(db):
        product = catalog_store.add(db, Product(**payload.model_dump()))
    logger.info("product_created", product_id=product.id, price=str(product.price), stock=product.stock)
    return product


def find_by_id(db: Session, product_id: int) -> Product:
    product = catalog_store.get(db, product_id)
    if product is None:
        raise NotFoundError(f"Product not found with id {product_id}")
    return product


def list_products(db: Session) -> List[Product]:
    return catalog_store.list_all(db)


def search(db: Session, name: str) -> List[Product]:
    return catalog_store.search_by_name(db, name)


def list_available(db: Session) -> List[Product]:
    return catalog_store.list_in_stock(db)


def list_by_price_range(db: Session, min_price: Decimal, max_price: Decimal) -> List[Product]:
    if min_price > max_price:
        raise ValidationError("Minimum price cannot exceed maximum price")
    return catalog_store.list_by_price(db, min_price, max_price)


def is_available(db: Session, product_id: int) -> bool:
    return find_by_id(db, product_id).stock > 0


def update(db: Session, product_id: int, payload: ProductWrite) -> Product:
    _check_price_and_stock(payload)
    with transaction(db):
        product = find_by_id(db, product_id)
        for k, v in payload.model_dump().items():
            setattr(product, k, v)
        product.updated_at = now_utc()
        db.flush()
    logger.info("product_updated", product_id=product.id)
    return product


def delete(db: Session, product_id: int) -> None:
    with transaction(db):
        product = find_by_id(db, product_id)
        if catalog_store.is_referenced(db, product_id):
            raise ValidationError(f"Product {product_id} is referenced by existing orders")
        catalog_store.remove(db, product)
    logger.info("product_deleted", product_id=product_id)


def apply_stock_delta(db: Session, product_id: int, delta: int) -> Product:
    """Shift stock by ``delta`` inside the caller's transaction."""
    product = find_by_id(db, product_id)
    if not catalog_store.adjust_stock(db, product_id, delta):
        raise ValidationError(f"Not enough stock available for {product.name}")
    logger.debug("stock_adjusted", product_id=product_id, delta=delta, stock=product.stock)
    return product


def adjust_stock(db: Session, product_id: int, delta: int) -> Product:
    with transaction(db):
        product = apply_stock_delta(db, product_id, delta)
    return product
