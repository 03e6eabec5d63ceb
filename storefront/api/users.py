from fastapi import APIRouter, Depends, status
from typing import List
from sqlalchemy.orm import Session
from storefront.api.deps import get_db
from storefront.schemas import UserRead, UserUpdate
from storefront.services import accounts

router = APIRouter()

@router.get('', response_model=List[UserRead])
def list_users(db: Session = Depends(get_db)):
    return accounts.list_users(db)

@router.get('/{user_id}', response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return accounts.find_by_id(db, user_id)

@router.put('/{user_id}', response_model=UserRead)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    return accounts.update(db, user_id, payload)

@router.delete('/{user_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    accounts.delete(db, user_id)
