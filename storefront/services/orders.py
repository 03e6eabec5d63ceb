"""Order engine.

Creates orders against the catalog and drives their lifecycle. Order
creation and cancellation each run in a single transaction: the order row,
its line items and every stock adjustment commit together or not at all.
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List

import structlog
from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError, ValidationError
from storefront.db.models import LineItem, Order, OrderStatus
from storefront.db.session import transaction
from storefront.services import accounts, catalog
from storefront.store import catalog_store, order_store

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class RequestedItem:
    product_id: int
    quantity: int


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_total(items: Iterable[LineItem]) -> Decimal:
    return to_money(sum((to_money(it.unit_price) * it.quantity for it in items), Decimal("0")))


def create(db: Session, user_id: int, requested: List[RequestedItem]) -> Order:
    with transaction(db):
        user = accounts.find_by_id(db, user_id)
        if not requested:
            raise ValidationError("An order must contain at least one item")
        for req in requested:
            if req.quantity <= 0:
                raise ValidationError(f"Quantity for product {req.product_id} must be greater than 0")

        products = catalog_store.lock_many(db, [req.product_id for req in requested])

        # validate every item before any stock moves
        demand = defaultdict(int)
        line_items = []
        for req in requested:
            product = products.get(req.product_id)
            if product is None:
                raise NotFoundError(f"Product not found with id {req.product_id}")
            demand[product.id] += req.quantity
            if product.stock < demand[product.id]:
                raise ValidationError(f"Insufficient stock for {product.name}")
            line_items.append(LineItem(product_id=product.id, quantity=req.quantity, unit_price=to_money(product.price)))

        order = order_store.add(
            db,
            Order(user_id=user.id, total=compute_total(line_items), status=OrderStatus.PENDING, items=line_items),
        )

        for product_id, quantity in demand.items():
            catalog.apply_stock_delta(db, product_id, -quantity)

    logger.info(
        "order_created",
        order_id=order.id,
        user_id=user.id,
        total=str(order.total),
        items=len(order.items),
    )
    return order


def find_by_id(db: Session, order_id: int) -> Order:
    order = order_store.get(db, order_id)
    if order is None:
        raise NotFoundError(f"Order not found with id {order_id}")
    return order


def _lock(db: Session, order_id: int) -> Order:
    order = order_store.get_for_update(db, order_id)
    if order is None:
        raise NotFoundError(f"Order not found with id {order_id}")
    return order


def list_orders(db: Session) -> List[Order]:
    return order_store.list_all(db)


def list_by_user(db: Session, user_id: int) -> List[Order]:
    accounts.find_by_id(db, user_id)
    return order_store.list_by_user(db, user_id)


def list_by_status(db: Session, status: OrderStatus) -> List[Order]:
    return order_store.list_by_status(db, status)


def list_items(db: Session, order_id: int) -> List[LineItem]:
    find_by_id(db, order_id)
    return order_store.list_items(db, order_id)


def update_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    """Set the order's status to anything, with no transition checks.

    Stock is left alone even when the new status is CANCELED; use
    ``cancel`` to give units back to the catalog.
    """
    with transaction(db):
        order = _lock(db, order_id)
        previous = order.status
        order.status = status
        order_store.save(db, order)
    logger.info("order_status_changed", order_id=order.id, previous=previous.value, status=status.value)
    return order


def cancel(db: Session, order_id: int) -> Order:
    with transaction(db):
        order = _lock(db, order_id)
        if order.status == OrderStatus.DELIVERED:
            raise ValidationError("Cannot cancel a delivered order")
        if order.status == OrderStatus.CANCELED:
            # stock was already given back by the first cancel
            logger.info("order_already_canceled", order_id=order.id)
            return order
        for item in order.items:
            catalog.apply_stock_delta(db, item.product_id, item.quantity)
        order.status = OrderStatus.CANCELED
        order_store.save(db, order)
    logger.info("order_canceled", order_id=order.id, items=len(order.items))
    return order
