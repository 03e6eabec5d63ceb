import os
from decimal import Decimal

os.environ["POSTGRES_DSN"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from storefront.api.deps import get_db
from storefront.db.session import Base, engine, init_db
from storefront.schemas import ProductWrite, UserCreate
from storefront.services import accounts, catalog

TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def schema():
    """Fresh schema for every test."""
    init_db(engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def other_db():
    """A second session on the same database, standing in for another request."""
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    from storefront.main import app

    def _get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    counter = iter(range(1, 1000))

    def _make(**overrides):
        n = next(counter)
        data = {
            "name": f"User {n}",
            "email": f"user{n}@example.com",
            "password": "secret1",
            "address": "1 Main St",
            "phone": "555-0100",
        }
        data.update(overrides)
        return accounts.register(db, UserCreate(**data))

    return _make


@pytest.fixture()
def make_product(db):
    def _make(name="Widget", price="10.00", stock=5, **overrides):
        data = {"name": name, "description": f"{name} description", "price": Decimal(price), "stock": stock}
        data.update(overrides)
        return catalog.create(db, ProductWrite(**data))

    return _make
