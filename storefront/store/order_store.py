"""Store-level access to orders and their line items. Callers own the transaction."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.db.models import Order, OrderStatus, LineItem

def _newest_first(stmt):
    return stmt.order_by(Order.created_at.desc(), Order.id.desc())

def get(db: Session, order_id: int) -> Optional[Order]:
    return db.get(Order, order_id)

def get_for_update(db: Session, order_id: int) -> Optional[Order]:
    # refreshed from the locked row, not the identity map
    stmt = select(Order).where(Order.id == order_id).with_for_update().execution_options(populate_existing=True)
    return db.execute(stmt).scalar_one_or_none()

def add(db: Session, order: Order) -> Order:
    # line items ride along on the relationship and flush with the order
    db.add(order); db.flush()
    return order

def list_all(db: Session) -> List[Order]:
    return list(db.execute(_newest_first(select(Order))).scalars())

def list_by_user(db: Session, user_id: int) -> List[Order]:
    return list(db.execute(_newest_first(select(Order).where(Order.user_id == user_id))).scalars())

def list_by_status(db: Session, status: OrderStatus) -> List[Order]:
    return list(db.execute(_newest_first(select(Order).where(Order.status == status))).scalars())

def list_items(db: Session, order_id: int) -> List[LineItem]:
    stmt = select(LineItem).where(LineItem.order_id == order_id).order_by(LineItem.id)
    return list(db.execute(stmt).scalars())

def save(db: Session, order: Order) -> Order:
    db.add(order); db.flush()
    return order
