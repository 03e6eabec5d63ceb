"""Store-level access to products. Callers own the transaction."""

from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy import select, update, exists
from sqlalchemy.orm import Session
from storefront.core.security import now_utc
from storefront.db.models import Product, LineItem

def get(db: Session, product_id: int) -> Optional[Product]:
    return db.get(Product, product_id)

def lock_many(db: Session, product_ids: Sequence[int]) -> dict[int, Product]:
    """Load products by id with a row lock held until the transaction ends.

    Backends without ``FOR UPDATE`` (SQLite) ignore the lock; the stock
    update in ``adjust_stock`` still refuses to go negative.
    """
    ids = sorted(set(product_ids))
    if not ids:
        return {}
    stmt = select(Product).where(Product.id.in_(ids)).order_by(Product.id).with_for_update().execution_options(populate_existing=True)
    return {p.id: p for p in db.execute(stmt).scalars()}

def list_all(db: Session) -> List[Product]:
    return list(db.execute(select(Product).order_by(Product.id)).scalars())

def search_by_name(db: Session, fragment: str) -> List[Product]:
    stmt = select(Product).where(Product.name.ilike(f"%{fragment}%")).order_by(Product.id)
    return list(db.execute(stmt).scalars())

def list_in_stock(db: Session) -> List[Product]:
    return list(db.execute(select(Product).where(Product.stock > 0).order_by(Product.id)).scalars())

def list_by_price(db: Session, min_price: Decimal, max_price: Decimal) -> List[Product]:
    stmt = select(Product).where(Product.price.between(min_price, max_price)).order_by(Product.price.asc(), Product.id)
    return list(db.execute(stmt).scalars())

def add(db: Session, product: Product) -> Product:
    db.add(product); db.flush()
    return product

def is_referenced(db: Session, product_id: int) -> bool:
    return db.execute(select(exists().where(LineItem.product_id == product_id))).scalar()

def remove(db: Session, product: Product):
    db.delete(product); db.flush()

def adjust_stock(db: Session, product_id: int, delta: int) -> bool:
    """Add ``delta`` to a product's stock unless the result would be negative.

    Read, check and write happen in one UPDATE statement. Returns False when
    no row qualified (missing product or not enough stock).
    """
    stmt = (
        update(Product)
        .where(Product.id == product_id, Product.stock + delta >= 0)
        .values(stock=Product.stock + delta, updated_at=now_utc())
        .execution_options(synchronize_session='evaluate')
    )
    return db.execute(stmt).rowcount == 1
