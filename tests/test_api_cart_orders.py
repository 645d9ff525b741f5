from decimal import Decimal

import pytest

from foodorder.services.cart_service import CartService


@pytest.fixture
def restaurant_headers(register_and_login):
    return register_and_login("pho24", role="restaurant", full_name="Pho 24")


@pytest.fixture
def customer_headers(register_and_login):
    return register_and_login("jan")


@pytest.fixture
def dish_ids(client, restaurant_headers):
    ids = []
    for name, price in (("Pho bo", "50000"), ("Goi cuon", "30000")):
        resp = client.post("/dishes", json={"name": name, "price": price}, headers=restaurant_headers)
        assert resp.status_code == 201, resp.text
        ids.append(resp.json()["id"])
    return ids


def test_cart_requires_token(client):
    assert client.get("/cart").status_code == 401


def test_cart_requires_customer_role(client, restaurant_headers):
    assert client.get("/cart", headers=restaurant_headers).status_code == 403


def test_cart_flow(client, customer_headers, dish_ids):
    pho, goi = dish_ids

    resp = client.get("/cart", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["items"] == []

    resp = client.post(f"/cart/{pho}?quantity=2", headers=customer_headers)
    assert resp.status_code == 200
    resp = client.post(f"/cart/{goi}", headers=customer_headers)
    body = resp.json()
    assert body["total_items"] == 3
    assert Decimal(body["total_price"]) == Decimal("130000")

    resp = client.patch(f"/cart/item/{goi}", json={"quantity": 3}, headers=customer_headers)
    assert resp.status_code == 200
    assert Decimal(resp.json()["total_price"]) == Decimal("190000")

    resp = client.delete(f"/cart/{pho}", headers=customer_headers)
    assert [i["dish_id"] for i in resp.json()["items"]] == [goi]

    resp = client.delete("/cart", headers=customer_headers)
    assert resp.json()["items"] == []
    assert resp.json()["total_items"] == 0


def test_cart_errors(client, customer_headers, dish_ids):
    assert client.post("/cart/9999", headers=customer_headers).status_code == 404
    assert client.post(f"/cart/{dish_ids[0]}?quantity=0", headers=customer_headers).status_code == 400
    assert client.patch(
        f"/cart/item/{dish_ids[0]}", json={"quantity": 2}, headers=customer_headers
    ).status_code == 404
    assert client.patch(
        f"/cart/item/{dish_ids[0]}", json={"quantity": 0}, headers=customer_headers
    ).status_code == 400


def test_checkout_and_order_lifecycle(client, customer_headers, restaurant_headers, dish_ids):
    pho, goi = dish_ids
    client.post(f"/cart/{pho}?quantity=2", headers=customer_headers)
    client.post(f"/cart/{goi}?quantity=1", headers=customer_headers)

    resp = client.post("/orders", json={"note": "szybko"}, headers=customer_headers)
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert Decimal(order["total_price"]) == Decimal("130000")
    assert order["status"] == "pending"
    assert order["note"] == "szybko"
    assert order["total_items"] == 3
    assert order["restaurant"]["name"] == "Pho 24"
    assert len(order["items"]) == 2

    assert client.get("/cart", headers=customer_headers).json()["items"] == []

    resp = client.get(f"/orders/{order['id']}", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == order["id"]

    resp = client.get("/orders/my-orders", headers=customer_headers)
    assert resp.json()["total"] == 1

    resp = client.get("/orders/restaurant-orders", headers=restaurant_headers)
    assert resp.json()["content"][0]["id"] == order["id"]

    resp = client.patch(
        f"/orders/{order['id']}/status", json={"status": "processing"}, headers=restaurant_headers
    )
    assert resp.status_code == 400

    resp = client.patch(
        f"/orders/{order['id']}/status", json={"status": "confirmed"}, headers=restaurant_headers
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "confirmed"

    resp = client.patch(f"/orders/{order['id']}/cancel", headers=customer_headers)
    assert resp.status_code == 400
    assert client.get(f"/orders/{order['id']}", headers=customer_headers).json()["status"] == "confirmed"


def test_checkout_without_body_and_empty_cart(client, customer_headers, dish_ids):
    assert client.post("/orders", headers=customer_headers).status_code == 400

    client.post(f"/cart/{dish_ids[0]}", headers=customer_headers)
    resp = client.post("/orders", headers=customer_headers)
    assert resp.status_code == 201
    assert resp.json()["note"] is None


def test_customer_cannot_touch_other_customers_order(client, register_and_login, customer_headers, dish_ids):
    client.post(f"/cart/{dish_ids[0]}", headers=customer_headers)
    order_id = client.post("/orders", headers=customer_headers).json()["id"]

    other = register_and_login("ola")
    assert client.get(f"/orders/{order_id}", headers=other).status_code == 403
    assert client.patch(f"/orders/{order_id}/cancel", headers=other).status_code == 403

    resp = client.patch(f"/orders/{order_id}/cancel", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"


def test_other_restaurant_cannot_update_status(client, register_and_login, customer_headers, dish_ids):
    client.post(f"/cart/{dish_ids[0]}", headers=customer_headers)
    order_id = client.post("/orders", headers=customer_headers).json()["id"]

    stranger = register_and_login("bunbo", role="restaurant")
    resp = client.patch(f"/orders/{order_id}/status", json={"status": "confirmed"}, headers=stranger)
    assert resp.status_code == 403
    assert client.get(f"/orders/{order_id}", headers=stranger).status_code == 403


def test_order_not_found(client, customer_headers):
    assert client.get("/orders/999", headers=customer_headers).status_code == 404


def test_list_all_orders_is_admin_only(client, customer_headers):
    assert client.get("/orders", headers=customer_headers).status_code == 403


def test_checkout_succeeds_when_cart_cleanup_fails(client, customer_headers, dish_ids, monkeypatch):
    def boom(self, customer_id, ordered):
        raise RuntimeError("Konflikt wspolbieznosci")

    monkeypatch.setattr(CartService, "remove_ordered", boom)
    client.post(f"/cart/{dish_ids[0]}", headers=customer_headers)

    resp = client.post("/orders", headers=customer_headers)

    assert resp.status_code == 201
    assert client.get("/orders/my-orders", headers=customer_headers).json()["total"] == 1
