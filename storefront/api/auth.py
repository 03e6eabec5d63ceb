from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.api.deps import get_db
from storefront.core.security import create_access_token
from storefront.schemas import UserCreate, UserRead, LoginPayload, LoginResponse
from storefront.services import accounts

router = APIRouter()  # main.py mounts at /api/auth


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    return accounts.register(db, payload)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginPayload, db: Session = Depends(get_db)) -> LoginResponse:
    user = accounts.authenticate(db, str(payload.email), payload.password)
    access, _ = create_access_token(user.id, user.email)
    return LoginResponse(user=UserRead.model_validate(user), access_token=access)
