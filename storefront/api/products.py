from fastapi import APIRouter, Depends, Query, status
from typing import List
from decimal import Decimal
from sqlalchemy.orm import Session
from storefront.api.deps import get_db
from storefront.schemas import ProductWrite, ProductRead, StockAdjustment, Availability
from storefront.services import catalog

router = APIRouter()

@router.get('', response_model=List[ProductRead])
def list_products(db: Session = Depends(get_db)):
    return catalog.list_products(db)

@router.get('/search', response_model=List[ProductRead])
def search_products(name: str = Query(min_length=1), db: Session = Depends(get_db)):
    return catalog.search(db, name)

@router.get('/available', response_model=List[ProductRead])
def available_products(db: Session = Depends(get_db)):
    return catalog.list_available(db)

@router.get('/price-range', response_model=List[ProductRead])
def products_in_price_range(min_price: Decimal = Query(alias="min", ge=0), max_price: Decimal = Query(alias="max", ge=0), db: Session = Depends(get_db)):
    return catalog.list_by_price_range(db, min_price, max_price)

@router.get('/{product_id}', response_model=ProductRead)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return catalog.find_by_id(db, product_id)

@router.get('/{product_id}/availability', response_model=Availability)
def product_availability(product_id: int, db: Session = Depends(get_db)):
    return Availability(product_id=product_id, available=catalog.is_available(db, product_id))

@router.post('', response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductWrite, db: Session = Depends(get_db)):
    return catalog.create(db, payload)

@router.put('/{product_id}', response_model=ProductRead)
def update_product(product_id: int, payload: ProductWrite, db: Session = Depends(get_db)):
    return catalog.update(db, product_id, payload)

@router.patch('/{product_id}/stock', response_model=ProductRead)
def adjust_stock(product_id: int, payload: StockAdjustment, db: Session = Depends(get_db)):
    return catalog.adjust_stock(db, product_id, payload.delta)

@router.delete('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    catalog.delete(db, product_id)
