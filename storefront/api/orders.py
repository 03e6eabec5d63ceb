from fastapi import APIRouter, Depends, status
from typing import List
from sqlalchemy.orm import Session
from storefront.api.deps import get_db
from storefront.db.models import OrderStatus
from storefront.schemas import OrderCreate, OrderRead, OrderStatusUpdate, LineItemRead
from storefront.services import orders
from storefront.services.orders import RequestedItem

router = APIRouter()

@router.post('', response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    items = [RequestedItem(product_id=it.product_id, quantity=it.quantity) for it in payload.items]
    return orders.create(db, payload.user_id, items)

@router.get('', response_model=List[OrderRead])
def list_orders(db: Session = Depends(get_db)):
    return orders.list_orders(db)

@router.get('/user/{user_id}', response_model=List[OrderRead])
def list_orders_for_user(user_id: int, db: Session = Depends(get_db)):
    return orders.list_by_user(db, user_id)

@router.get('/status/{order_status}', response_model=List[OrderRead])
def list_orders_by_status(order_status: OrderStatus, db: Session = Depends(get_db)):
    return orders.list_by_status(db, order_status)

@router.get('/{order_id}', response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return orders.find_by_id(db, order_id)

@router.get('/{order_id}/items', response_model=List[LineItemRead])
def get_order_items(order_id: int, db: Session = Depends(get_db)):
    return orders.list_items(db, order_id)

@router.put('/{order_id}/status', response_model=OrderRead)
def set_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)):
    return orders.update_status(db, order_id, payload.status)

@router.put('/{order_id}/cancel', response_model=OrderRead)
def cancel_order(order_id: int, db: Session = Depends(get_db)):
    return orders.cancel(db, order_id)
