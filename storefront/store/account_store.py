"""Store-level access to users. Callers own the transaction."""

from typing import List, Optional
from sqlalchemy import select, exists
from sqlalchemy.orm import Session
from storefront.db.models import User, Order

def get(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()

def get_by_credentials(db: Session, email: str, password: str) -> Optional[User]:
    stmt = select(User).where(User.email == email, User.password == password)
    return db.execute(stmt).scalar_one_or_none()

def email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    cond = User.email == email
    if exclude_id is not None:
        cond = cond & (User.id != exclude_id)
    return db.execute(select(exists().where(cond))).scalar()

def list_all(db: Session) -> List[User]:
    return list(db.execute(select(User).order_by(User.id)).scalars())

def add(db: Session, user: User) -> User:
    db.add(user); db.flush()
    return user

def delete_with_orders(db: Session, user: User) -> int:
    """Delete ``user`` together with its orders and their line items.

    Returns the number of orders removed.
    """
    orders = list(db.execute(select(Order).where(Order.user_id == user.id)).scalars())
    # deleted through the session so the identity map forgets them too
    for order in orders:
        for item in order.items: db.delete(item)
        db.delete(order)
    db.flush()
    db.delete(user); db.flush()
    return len(orders)
