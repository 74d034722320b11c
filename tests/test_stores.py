"""Stores, souvenirs and souvenir orders."""
import pytest

from parkhub.models import StaffRole

STORE = {"name": "Gift Shop", "opening_time": "09:00:00", "closing_time": "21:00:00"}


@pytest.fixture
def retail_headers(headers_for):
    return headers_for(StaffRole.RETAIL_MANAGER)


@pytest.fixture
def store(client, retail_headers):
    r = client.post("/stores", json=STORE, headers=retail_headers)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def mug(client, store, retail_headers):
    body = {"name": "Mug", "price": "5.00", "stock": 10, "store_id": store["store_id"]}
    r = client.post("/souvenirs", json=body, headers=retail_headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_store_list_is_refreshed_after_update(client, store, retail_headers, customer_headers):
    assert [s["name"] for s in client.get("/stores", headers=customer_headers).json()] == ["Gift Shop"]
    r = client.patch(f"/stores/{store['store_id']}", json={"name": "Gift Emporium"}, headers=retail_headers)
    assert r.status_code == 200
    assert [s["name"] for s in client.get("/stores", headers=customer_headers).json()] == ["Gift Emporium"]


def test_souvenirs_per_store(client, store, mug, retail_headers):
    other = client.post("/stores", json={**STORE, "name": "Toy Box"}, headers=retail_headers).json()
    client.post(
        "/souvenirs",
        json={"name": "Plush", "price": "12.00", "store_id": other["store_id"]},
        headers=retail_headers,
    )
    in_store = client.get("/souvenirs", params={"store_id": store["store_id"]}, headers=retail_headers).json()
    assert [s["name"] for s in in_store] == ["Mug"]
    assert [s["name"] for s in client.get("/souvenirs", headers=retail_headers).json()] == ["Mug", "Plush"]

    # moving the mug refreshes both store lists
    r = client.patch(f"/souvenirs/{mug['souvenir_id']}", json={"store_id": other["store_id"]}, headers=retail_headers)
    assert r.status_code == 200
    assert client.get("/souvenirs", params={"store_id": store["store_id"]}, headers=retail_headers).json() == []
    moved = client.get("/souvenirs", params={"store_id": other["store_id"]}, headers=retail_headers).json()
    assert [s["name"] for s in moved] == ["Mug", "Plush"]


def test_stock_update(client, mug, retail_headers):
    url = f"/souvenirs/{mug['souvenir_id']}/stock"
    r = client.patch(url, json={"stock": 3}, headers=retail_headers)
    assert r.status_code == 200
    assert r.json()["stock"] == 3
    assert client.patch(url, json={"stock": -1}, headers=retail_headers).status_code == 422
    assert client.get("/souvenirs", headers=retail_headers).json()[0]["stock"] == 3


def test_souvenir_order_flow(client, store, mug, customer, customer_headers, retail_headers):
    body = {
        "customer_id": customer.customer_id,
        "store_id": store["store_id"],
        "souvenir_id": mug["souvenir_id"],
        "quantity": 2,
    }
    assert client.get("/souvenir-orders", headers=retail_headers).json() == []
    r = client.post("/souvenir-orders", json=body, headers=customer_headers)
    assert r.status_code == 201, r.text
    order = r.json()

    assert [o["order_souvenir_id"] for o in client.get("/souvenir-orders", headers=retail_headers).json()] == [
        order["order_souvenir_id"]
    ]
    mine = client.get(
        f"/souvenir-orders/customer/{customer.customer_id}/store/{store['store_id']}", headers=customer_headers
    )
    assert len(mine.json()) == 1
    assert client.get(f"/souvenir-orders/{order['order_souvenir_id']}", headers=customer_headers).status_code == 200

    url = f"/souvenir-orders/{order['order_souvenir_id']}"
    assert client.delete(url, headers=customer_headers).status_code == 403
    assert client.delete(url, headers=retail_headers).status_code == 204
    assert client.get("/souvenir-orders", headers=retail_headers).json() == []


def test_souvenir_order_wrong_store(client, mug, customer, customer_headers):
    body = {"customer_id": customer.customer_id, "store_id": "elsewhere", "souvenir_id": mug["souvenir_id"], "quantity": 1}
    r = client.post("/souvenir-orders", json=body, headers=customer_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Souvenir is not sold in this store"


def test_delete_souvenir(client, mug, retail_headers):
    url = f"/souvenirs/{mug['souvenir_id']}"
    assert client.delete(url, headers=retail_headers).status_code == 204
    assert client.get(url, headers=retail_headers).status_code == 404
    assert client.get("/souvenirs", headers=retail_headers).json() == []


def test_delete_store_with_stock_and_orders(client, store, mug, customer, customer_headers, retail_headers):
    body = {"customer_id": customer.customer_id, "store_id": store["store_id"], "souvenir_id": mug["souvenir_id"], "quantity": 1}
    assert client.post("/souvenir-orders", json=body, headers=customer_headers).status_code == 201
    # warm the cached lists
    assert len(client.get("/souvenirs", headers=retail_headers).json()) == 1
    assert len(client.get("/souvenir-orders", headers=retail_headers).json()) == 1

    assert client.delete(f"/stores/{store['store_id']}", headers=retail_headers).status_code == 204
    assert client.get("/stores", headers=customer_headers).json() == []
    assert client.get(f"/souvenirs/{mug['souvenir_id']}", headers=retail_headers).status_code == 404
    assert client.get("/souvenirs", headers=retail_headers).json() == []
    assert client.get("/souvenirs", params={"store_id": store["store_id"]}, headers=retail_headers).json() == []
    assert client.get("/souvenir-orders", headers=retail_headers).json() == []
