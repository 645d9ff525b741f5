import os

#ustawienia musza byc przed importem foodorder (settings czyta env przy imporcie)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["SMTP_HOST"] = ""

from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodorder.data.cache import get_cache
from foodorder.data.database import Base, get_db, init_db
from foodorder.data.models import (
    AccountModel,
    AccountRoleModel,
    CategoryModel,
    DishModel,
    RestaurantModel,
    RoleType,
    UserModel,
)
from foodorder.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def cache(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def client(session_factory, cache):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


# =====================================================
# dane w bazie dla testow serwisow
# =====================================================
@pytest.fixture
def make_customer(db):
    def _make(username="jan", full_name="Jan Kowalski"):
        account = AccountModel(
            username=username,
            email=f"{username}@example.com",
            password="x",
            roles=[AccountRoleModel(role_type=RoleType.CUSTOMER)],
        )
        db.add(account)
        db.flush()
        user = UserModel(account_id=account.id, full_name=full_name)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_restaurant(db):
    def _make(username="pho24", name="Pho 24"):
        account = AccountModel(
            username=username,
            email=f"{username}@example.com",
            password="x",
            roles=[AccountRoleModel(role_type=RoleType.RESTAURANT)],
        )
        db.add(account)
        db.flush()
        restaurant = RestaurantModel(account_id=account.id, name=name)
        db.add(restaurant)
        db.commit()
        return restaurant

    return _make


@pytest.fixture
def make_dish(db):
    def _make(restaurant, name, price, category_name=None):
        category = None
        if category_name:
            category = CategoryModel(restaurant_id=restaurant.id, name=category_name)
            db.add(category)
            db.flush()
        dish = DishModel(
            restaurant_id=restaurant.id,
            category_id=category.id if category else None,
            name=name,
            price=Decimal(price),
            thumbnail=f"https://img.example.com/{name}.jpg",
        )
        db.add(dish)
        db.commit()
        return dish

    return _make


# =====================================================
# konta przez API
# =====================================================
@pytest.fixture
def register_and_login(client):
    def _do(username, role="customer", password="secret123", full_name=None):
        resp = client.post(
            "/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": password,
                "role": role,
                "full_name": full_name or username,
            },
        )
        assert resp.status_code == 201, resp.text
        resp = client.post("/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _do
