"""Account operations: registration, authentication and user maintenance."""

from typing import List, Optional

import structlog
from sqlalchemy.orm import Session

from storefront.core.errors import AuthError, NotFoundError, ValidationError
from storefront.db.models import User
from storefront.db.session import transaction
from storefront.schemas import UserCreate, UserUpdate
from storefront.store import account_store

logger = structlog.get_logger(__name__)


def register(db: Session, candidate: UserCreate) -> User:
    with transaction(db):
        if account_store.email_taken(db, str(candidate.email)):
            raise ValidationError(f"A user with email {candidate.email} already exists")
        user = account_store.add(
            db,
            User(
                name=candidate.name,
                email=str(candidate.email),
                password=candidate.password,
                address=candidate.address,
                phone=candidate.phone,
            ),
        )
    logger.info("user_registered", user_id=user.id, email=user.email)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    # passwords are stored as given, so this is a plaintext match
    user = account_store.get_by_credentials(db, email, password)
    if user is None:
        logger.warning("login_failed", email=email)
        raise AuthError("Credentials incorrect")
    return user


def find_by_id(db: Session, user_id: int) -> User:
    user = account_store.get(db, user_id)
    if user is None:
        raise NotFoundError(f"User not found with id {user_id}")
    return user


def find_by_email(db: Session, email: str) -> Optional[User]:
    return account_store.get_by_email(db, email)


def email_exists(db: Session, email: str) -> bool:
    return account_store.email_taken(db, email)


def list_users(db: Session) -> List[User]:
    return account_store.list_all(db)


def update(db: Session, user_id: int, fields: UserUpdate) -> User:
    """Overwrite a user's profile.

    The email must stay unique among the *other* users. The password only
    changes when a non-empty value is supplied.
    """
    with transaction(db):
        user = find_by_id(db, user_id)
        new_email = str(fields.email)
        if new_email != user.email and account_store.email_taken(db, new_email, exclude_id=user.id):
            raise ValidationError(f"A user with email {new_email} already exists")
        user.name = fields.name
        user.email = new_email
        user.address = fields.address
        user.phone = fields.phone
        if fields.password:
            user.password = fields.password
        db.flush()
    logger.info("user_updated", user_id=user.id)
    return user


def delete(db: Session, user_id: int) -> None:
    with transaction(db):
        user = find_by_id(db, user_id)
        removed = account_store.delete_with_orders(db, user)
    logger.info("user_deleted", user_id=user_id, orders_removed=removed)
