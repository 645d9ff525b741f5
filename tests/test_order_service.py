from decimal import Decimal

import pytest
import redis
from sqlalchemy import delete, func, select

from foodorder.data.models import (
    AccountModel,
    AccountRoleModel,
    DishModel,
    OrderLineModel,
    OrderModel,
    OrderStatus,
    RoleType,
)
from foodorder.domain.errors import NotFoundError
from foodorder.services.cart_service import CartService
from foodorder.services.order_service import OrderService


@pytest.fixture
def restaurant(make_restaurant):
    return make_restaurant()


@pytest.fixture
def customer(make_customer):
    return make_customer()


@pytest.fixture
def dishes(make_dish, restaurant):
    return (
        make_dish(restaurant, "Pho bo", "50000.00"),
        make_dish(restaurant, "Goi cuon", "30000.00"),
    )


@pytest.fixture
def carts(db, cache):
    return CartService(db, cache)


@pytest.fixture
def service(db, cache, carts):
    return OrderService(db, cache, cart_service=carts)


def count_orders(db):
    return db.execute(select(func.count(OrderModel.id))).scalar_one()


def count_lines(db):
    return db.execute(select(func.count(OrderLineModel.id))).scalar_one()


def restaurant_account(db, restaurant):
    return db.get(AccountModel, restaurant.account_id)


def test_checkout_empty_cart_fails_without_rows(service, customer, db):
    with pytest.raises(ValueError):
        service.create_order_from_cart(customer.id)

    assert count_orders(db) == 0


def test_checkout_builds_order_from_cart(service, carts, customer, dishes, restaurant, db):
    pho, goi = dishes
    carts.add_line(customer.id, pho.id, 2)
    carts.add_line(customer.id, goi.id, 1)

    order = service.create_order_from_cart(customer.id, note="bez cebuli")

    assert order.total_price == Decimal("130000.00")
    assert order.status == OrderStatus.PENDING
    assert order.restaurant_id == restaurant.id
    assert order.user_id == customer.id
    assert order.note == "bez cebuli"
    assert order.total_items == 3
    assert order.restaurant.name == "Pho 24"
    assert [(i.dish_id, i.quantity, i.price) for i in order.items] == [
        (pho.id, 2, Decimal("50000.00")),
        (goi.id, 1, Decimal("30000.00")),
    ]
    assert order.items[0].dish_name == "Pho bo"
    assert order.items[0].subtotal == Decimal("100000.00")

    assert count_orders(db) == 1
    assert count_lines(db) == 2
    assert carts.get_cart(customer.id).items == []


def test_order_lines_keep_cart_price_snapshot(service, carts, customer, dishes, db):
    pho, _ = dishes
    carts.add_line(customer.id, pho.id, 1)

    pho.price = Decimal("99000.00")
    db.commit()

    order = service.create_order_from_cart(customer.id)

    assert order.items[0].price == Decimal("50000.00")
    assert order.total_price == Decimal("50000.00")


def test_checkout_for_unknown_customer_is_not_found(service, carts, dishes, db):
    carts.add_line(424242, dishes[0].id, 1)

    with pytest.raises(NotFoundError):
        service.create_order_from_cart(424242)

    assert count_orders(db) == 0


def test_checkout_when_first_dish_deleted_is_not_found(service, carts, customer, dishes, db):
    pho, goi = dishes
    carts.add_line(customer.id, pho.id, 1)
    carts.add_line(customer.id, goi.id, 1)

    db.execute(delete(DishModel).where(DishModel.id == pho.id))
    db.commit()
    db.expunge_all()

    with pytest.raises(NotFoundError):
        service.create_order_from_cart(customer.id)

    assert count_orders(db) == 0
    assert len(carts.get_cart(customer.id).items) == 2


def test_failed_line_insert_rolls_back_everything(service, carts, customer, dishes, db):
    pho, goi = dishes
    carts.add_line(customer.id, pho.id, 1)
    carts.add_line(customer.id, goi.id, 1)

    #danie usuniete w trakcie - insert pozycji lamie klucz obcy
    db.execute(delete(DishModel).where(DishModel.id == goi.id))
    db.commit()
    db.expunge_all()

    with pytest.raises(Exception):
        service.create_order_from_cart(customer.id)

    assert count_orders(db) == 0
    assert count_lines(db) == 0
    #koszyk nietkniety, mozna ponowic
    assert len(carts.get_cart(customer.id).items) == 2


def test_dish_added_during_checkout_stays_in_cart(service, carts, customer, dishes, monkeypatch):
    pho, goi = dishes
    carts.add_line(customer.id, pho.id, 1)
    create_order = service.repo.create_order

    def create_with_concurrent_add(order, lines):
        #inny request dodaje danie zanim zamowienie trafi do bazy
        carts.add_line(customer.id, goi.id, 3)
        return create_order(order, lines)

    monkeypatch.setattr(service.repo, "create_order", create_with_concurrent_add)

    order = service.create_order_from_cart(customer.id)

    assert [i.dish_id for i in order.items] == [pho.id]
    cart = carts.get_cart(customer.id)
    assert [(l.dish_id, l.quantity) for l in cart.items] == [(goi.id, 3)]
    assert cart.total_price == Decimal("90000.00")


@pytest.mark.parametrize(
    "error",
    [RuntimeError("Konflikt wspolbieznosci"), redis.ConnectionError("redis down")],
)
def test_cart_cleanup_failure_keeps_order(service, carts, customer, dishes, monkeypatch, db, error):
    carts.add_line(customer.id, dishes[0].id, 2)

    def boom(customer_id, ordered):
        raise error

    monkeypatch.setattr(carts, "remove_ordered", boom)

    order = service.create_order_from_cart(customer.id)

    assert order.total_price == Decimal("100000.00")
    assert count_orders(db) == 1


def test_status_moves_forward_one_step(service, carts, customer, dishes, restaurant, db):
    carts.add_line(customer.id, dishes[0].id, 1)
    order = service.create_order_from_cart(customer.id)
    account = restaurant_account(db, restaurant)

    for status in (
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.DELIVERING,
        OrderStatus.COMPLETED,
    ):
        order = service.update_order_status(order.id, status, account)
        assert order.status == status


def test_status_cannot_skip_or_cancel(service, carts, customer, dishes, restaurant, db):
    carts.add_line(customer.id, dishes[0].id, 1)
    order = service.create_order_from_cart(customer.id)
    account = restaurant_account(db, restaurant)

    with pytest.raises(ValueError):
        service.update_order_status(order.id, OrderStatus.DELIVERING, account)
    with pytest.raises(ValueError):
        service.update_order_status(order.id, OrderStatus.CANCELLED, account)

    assert service.repo.get_order(order.id).status == OrderStatus.PENDING.value


def test_other_restaurant_cannot_update_status(service, carts, customer, dishes, make_restaurant, db):
    carts.add_line(customer.id, dishes[0].id, 1)
    order = service.create_order_from_cart(customer.id)
    stranger = make_restaurant(username="bunbo", name="Bun Bo")

    with pytest.raises(PermissionError):
        service.update_order_status(order.id, OrderStatus.CONFIRMED, restaurant_account(db, stranger))


def test_admin_can_update_any_order(service, carts, customer, dishes, db):
    carts.add_line(customer.id, dishes[0].id, 1)
    order = service.create_order_from_cart(customer.id)
    admin = AccountModel(
        username="root",
        email="root@example.com",
        password="x",
        roles=[AccountRoleModel(role_type=RoleType.ADMIN)],
    )
    db.add(admin)
    db.commit()

    updated = service.update_order_status(order.id, OrderStatus.CONFIRMED, admin)
    assert updated.status == OrderStatus.CONFIRMED


def test_cancel_only_pending_and_own(service, carts, make_customer, dishes, restaurant, db):
    owner = make_customer()
    other = make_customer(username="ola", full_name="Ola Nowak")
    carts.add_line(owner.id, dishes[0].id, 1)
    order = service.create_order_from_cart(owner.id)

    with pytest.raises(PermissionError):
        service.cancel_order(order.id, other.id)
    assert service.repo.get_order(order.id).status == OrderStatus.PENDING.value

    cancelled = service.cancel_order(order.id, owner.id)
    assert cancelled.status == OrderStatus.CANCELLED

    carts.add_line(owner.id, dishes[0].id, 1)
    second = service.create_order_from_cart(owner.id)
    service.update_order_status(second.id, OrderStatus.CONFIRMED, restaurant_account(db, restaurant))

    with pytest.raises(ValueError):
        service.cancel_order(second.id, owner.id)
    assert service.repo.get_order(second.id).status == OrderStatus.CONFIRMED.value


def test_missing_order_is_not_found(service, customer):
    with pytest.raises(NotFoundError):
        service.cancel_order(12345, customer.id)
