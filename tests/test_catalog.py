from decimal import Decimal

import pytest
from pydantic import ValidationError as SchemaError

from storefront.core.errors import NotFoundError, ValidationError
from storefront.schemas import ProductWrite
from storefront.services import catalog, orders
from storefront.services.orders import RequestedItem


def _payload(**overrides):
    data = {"name": "Lamp", "description": "Desk lamp", "price": Decimal("25.00"), "stock": 4}
    data.update(overrides)
    return ProductWrite(**data)


def test_create_assigns_id_and_timestamps(db):
    product = catalog.create(db, _payload(image="lamp.png"))
    assert product.id is not None
    assert product.created_at is not None
    assert product.updated_at is not None
    assert catalog.find_by_id(db, product.id).image == "lamp.png"


@pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1.50")])
def test_create_rejects_non_positive_price(db, price):
    with pytest.raises(ValidationError):
        catalog.create(db, _payload(price=price))
    assert catalog.list_products(db) == []


def test_create_rejects_negative_stock(db):
    with pytest.raises(ValidationError):
        catalog.create(db, _payload(stock=-1))


def test_name_and_description_limits():
    with pytest.raises(SchemaError):
        _payload(name="x" * 101)
    with pytest.raises(SchemaError):
        _payload(description="x" * 501)


def test_find_missing(db):
    with pytest.raises(NotFoundError):
        catalog.find_by_id(db, 1)


def test_search_is_case_insensitive(db, make_product):
    make_product("Blue Mug")
    make_product("mug holder")
    make_product("Plate")
    assert sorted(p.name for p in catalog.search(db, "MUG")) == ["Blue Mug", "mug holder"]


def test_list_available(db, make_product):
    make_product("In", stock=1)
    make_product("Out", stock=0)
    assert [p.name for p in catalog.list_available(db)] == ["In"]


def test_price_range_sorted_ascending(db, make_product):
    make_product("C", price="30.00")
    make_product("A", price="5.00")
    make_product("B", price="15.00")
    make_product("D", price="99.00")
    assert [p.name for p in catalog.list_by_price_range(db, Decimal("5.00"), Decimal("30.00"))] == ["A", "B", "C"]


def test_is_available(db, make_product):
    assert catalog.is_available(db, make_product(stock=2).id) is True
    assert catalog.is_available(db, make_product(stock=0).id) is False


def test_update_overwrites_and_refreshes_timestamp(db, make_product):
    product = make_product()
    before = product.updated_at

    updated = catalog.update(db, product.id, _payload(name="Lamp XL", price=Decimal("30.00"), stock=9))

    assert (updated.name, updated.price, updated.stock) == ("Lamp XL", Decimal("30.00"), 9)
    assert updated.image is None
    assert updated.updated_at >= before


def test_update_missing(db):
    with pytest.raises(NotFoundError):
        catalog.update(db, 5, _payload())


def test_delete(db, make_product):
    product = make_product()
    catalog.delete(db, product.id)
    with pytest.raises(NotFoundError):
        catalog.find_by_id(db, product.id)
    with pytest.raises(NotFoundError):
        catalog.delete(db, product.id)


def test_delete_refuses_products_on_orders(db, make_user, make_product):
    user = make_user()
    product = make_product()
    orders.create(db, user.id, [RequestedItem(product.id, 1)])

    with pytest.raises(ValidationError):
        catalog.delete(db, product.id)
    assert catalog.find_by_id(db, product.id) is not None


def test_adjust_stock(db, make_product):
    product = make_product(stock=3)
    assert catalog.adjust_stock(db, product.id, 4).stock == 7
    assert catalog.adjust_stock(db, product.id, -7).stock == 0


def test_adjust_stock_never_negative(db, make_product):
    product = make_product(stock=3)
    with pytest.raises(ValidationError):
        catalog.adjust_stock(db, product.id, -4)
    db.refresh(product)
    assert product.stock == 3


def test_adjust_stock_missing(db):
    with pytest.raises(NotFoundError):
        catalog.adjust_stock(db, 77, 1)
