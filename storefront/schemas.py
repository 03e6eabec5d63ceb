from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from storefront.db.models import OrderStatus

class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    address: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=20)

    @field_validator("email")
    @classmethod
    def email_length(cls, v):
        if len(v) > 100:
            raise ValueError("email cannot exceed 100 characters")
        return v

class UserCreate(UserBase):
    password: str = Field(min_length=6)
class UserUpdate(UserBase):
    # empty keeps the current password
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v):
        if v and len(v) < 6:
            raise ValueError("password must have at least 6 characters")
        return v

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: EmailStr
    address: str
    phone: str
    registered_at: datetime

class LoginPayload(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
class LoginResponse(BaseModel):
    user: UserRead
    access_token: str
    token_type: str = 'bearer'

class ProductWrite(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    stock: int
    image: Optional[str] = Field(default=None, max_length=255)
class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
class StockAdjustment(BaseModel):
    delta: int
class Availability(BaseModel):
    product_id: int
    available: bool

class OrderItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
class OrderCreate(BaseModel):
    user_id: int
    items: List[OrderItemRequest]
class OrderStatusUpdate(BaseModel):
    status: OrderStatus
class LineItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    created_at: datetime
    total: Decimal
    status: OrderStatus
    items: List[LineItemRead] = []
