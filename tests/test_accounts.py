import pytest
from pydantic import ValidationError as SchemaError
from sqlalchemy import select

from storefront.core.errors import AuthError, NotFoundError, ValidationError
from storefront.db.models import LineItem
from storefront.schemas import UserCreate, UserUpdate
from storefront.services import accounts, orders
from storefront.services.orders import RequestedItem


def _update(user, **changes):
    data = {"name": user.name, "email": user.email, "address": user.address, "phone": user.phone}
    data.update(changes)
    return UserUpdate(**data)


def test_register_and_lookup_by_email(db, make_user):
    user = make_user(email="ana@example.com")
    assert user.id is not None
    assert user.registered_at is not None
    assert accounts.find_by_email(db, "ana@example.com").id == user.id
    assert accounts.email_exists(db, "ana@example.com")
    assert accounts.find_by_email(db, "nobody@example.com") is None


def test_register_duplicate_email(db, make_user):
    make_user(email="dup@example.com")
    with pytest.raises(ValidationError):
        make_user(email="dup@example.com")
    assert len(accounts.list_users(db)) == 1


def test_password_must_have_six_chars():
    with pytest.raises(SchemaError):
        UserCreate(name="A", email="a@example.com", password="12345", address="x", phone="1")


def test_authenticate(db, make_user):
    user = make_user(email="log@example.com", password="hunter22")
    assert accounts.authenticate(db, "log@example.com", "hunter22").id == user.id


@pytest.mark.parametrize("email,password", [("log@example.com", "wrong!"), ("nope@example.com", "hunter22")])
def test_authenticate_rejects_bad_credentials(db, make_user, email, password):
    make_user(email="log@example.com", password="hunter22")
    with pytest.raises(AuthError, match="Credentials incorrect"):
        accounts.authenticate(db, email, password)


def test_find_by_id_missing(db):
    with pytest.raises(NotFoundError):
        accounts.find_by_id(db, 3)


def test_update_keeps_password_when_blank(db, make_user):
    user = make_user(password="original")
    accounts.update(db, user.id, _update(user, name="Renamed", password=""))

    assert accounts.find_by_id(db, user.id).name == "Renamed"
    assert accounts.authenticate(db, user.email, "original").id == user.id


def test_update_replaces_password(db, make_user):
    user = make_user(password="original")
    accounts.update(db, user.id, _update(user, password="changed"))
    with pytest.raises(AuthError):
        accounts.authenticate(db, user.email, "original")
    assert accounts.authenticate(db, user.email, "changed").id == user.id


def test_update_rejects_short_password(db, make_user):
    user = make_user(password="original")
    with pytest.raises(SchemaError):
        _update(user, password="ab")
    assert accounts.authenticate(db, user.email, "original").id == user.id


def test_update_email_must_stay_unique(db, make_user):
    taken = make_user(email="taken@example.com")
    user = make_user(email="mine@example.com")

    with pytest.raises(ValidationError):
        accounts.update(db, user.id, _update(user, email=taken.email))

    # keeping one's own email is fine
    accounts.update(db, user.id, _update(user, phone="555-9999"))
    db.expire_all()
    assert accounts.find_by_id(db, user.id).email == "mine@example.com"


def test_delete_cascades_orders(db, make_user, make_product):
    user = make_user()
    product = make_product(stock=5)
    order_id = orders.create(db, user.id, [RequestedItem(product.id, 1)]).id

    accounts.delete(db, user.id)

    # same session: the deleted rows must not linger in the identity map
    with pytest.raises(NotFoundError):
        accounts.find_by_id(db, user.id)
    with pytest.raises(NotFoundError):
        orders.find_by_id(db, order_id)
    assert orders.list_orders(db) == []
    assert db.execute(select(LineItem)).scalars().all() == []


def test_delete_missing(db):
    with pytest.raises(NotFoundError):
        accounts.delete(db, 9)
