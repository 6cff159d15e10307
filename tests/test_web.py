import dataclasses

import pytest
from fastapi.testclient import TestClient

from eliteshop.constants import STATUS_TEXT
from eliteshop.web.main import create_app


def test_status(client):
    r = client.get("/status")
    assert r.status_code == 200
    assert r.text == STATUS_TEXT


def test_index_lists_products(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Ace Ergonomic Gaming Chair" in r.text
    assert "Your cart is empty" in r.text


def test_index_category_filter(client):
    r = client.get("/", params={"category": "health"})
    assert "Ace Gel Wrist Rest" in r.text
    assert "Ace Ergonomic Gaming Chair" not in r.text


def test_index_search_without_results(client):
    r = client.get("/", params={"q": "zzz-none"})
    assert "No products found" in r.text


def test_static_css_served(client):
    r = client.get("/static/css/shop.css")
    assert r.status_code == 200


def test_add_redirects_back_to_category(client, app):
    r = client.post(
        "/cart/add",
        data={"product_id": "ace-chair", "quantity": "2", "category": "home"},
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/?category=home"
    assert app.state.shop.cart.get("ace-chair").quantity == 2


def test_add_shows_toast_and_drawer(client):
    r = client.post("/cart/add", data={"product_id": "ace-chair"})
    assert r.status_code == 200
    assert "Ace Ergonomic Gaming Chair added to cart!" in r.text
    assert 'class="cart-drawer open"' in r.text
    assert "$349.00" in r.text

    # toasts are shown once
    assert "added to cart!" not in client.get("/").text


def test_update_and_remove(client, app):
    client.post("/cart/add", data={"product_id": "ace-hoodie"})
    client.post("/cart/update", data={"product_id": "ace-hoodie", "quantity": "4"})
    assert app.state.shop.cart.get("ace-hoodie").quantity == 4

    client.post("/cart/remove", data={"product_id": "ace-hoodie"})
    assert app.state.shop.cart.is_empty


def test_open_close_drawer(client, app):
    client.post("/cart/open")
    assert app.state.shop.cart_open
    client.post("/cart/close")
    assert not app.state.shop.cart_open


def test_checkout_empty_cart_warns(client):
    r = client.post("/cart/checkout")
    assert r.status_code == 200
    assert "Your cart is empty!" in r.text


def test_checkout_flow(client, app):
    client.post("/cart/add", data={"product_id": "ace-jersey", "quantity": "2"})
    r = client.post("/cart/checkout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/checkout/done"

    done = client.get("/checkout/done")
    assert "Checkout Summary" in done.text
    assert "$139.98" in done.text
    assert app.state.shop.cart.is_empty

    receipt = app.state.shop.last_receipt.rsplit("/", 1)[-1]
    pdf = client.get(f"/receipts/{receipt}")
    assert pdf.status_code == 200
    assert pdf.content.startswith(b"%PDF")


def test_checkout_done_without_checkout_redirects(client):
    r = client.get("/checkout/done", follow_redirects=False)
    assert r.status_code == 303


def test_checkout_gateway_failure(test_settings, storage, failing_gateway):
    app = create_app(test_settings, storage=storage, gateway=failing_gateway)
    client = TestClient(app)
    client.post("/cart/add", data={"product_id": "ace-jersey"})
    r = client.post("/cart/checkout")
    assert "Checkout failed: card declined" in r.text
    assert "ace-jersey" in app.state.shop.cart


@pytest.mark.parametrize("name", ["../shop.db", "missing.pdf", "notes.txt"])
def test_receipt_download_is_confined(client, name):
    assert client.get(f"/receipts/{name}").status_code == 404


def test_wishlist_toggle(client, app):
    client.post("/wishlist/toggle", data={"product_id": "ace-led-strip"})
    assert app.state.shop.wishlist.contains("ace-led-strip")
    r = client.get("/api/wishlist")
    assert r.json() == {"items": ["ace-led-strip"]}


def test_contact(client):
    r = client.post("/contact", data={"name": "Sam", "email": "s@example.com", "message": "Hello"})
    assert "We&#39;ll get back to you soon." in r.text or "We'll get back to you soon." in r.text


def test_api_products_marks_wishlist(client):
    client.post("/wishlist/toggle", data={"product_id": "ace-chair"})
    r = client.get("/api/products", params={"category": "home"})
    data = {p["id"]: p for p in r.json()}
    assert data["ace-chair"]["in_wishlist"] is True
    assert data["ace-desk-mat"]["in_wishlist"] is False


def test_api_cart_add(client):
    r = client.post("/api/cart/items", json={"product_id": "ace-mouse-ultralight", "quantity": 3})
    assert r.status_code == 200
    body = r.json()
    assert body["total_items"] == 3
    assert body["total"] == 238.5
    assert body["items"][0]["id"] == "ace-mouse-ultralight"


def test_api_cart_add_unknown_product(client):
    r = client.post("/api/cart/items", json={"product_id": "nope"})
    assert r.status_code == 404


def test_api_cart_add_bad_quantity(client):
    r = client.post("/api/cart/items", json={"product_id": "ace-chair", "quantity": 0})
    assert r.status_code == 422


def test_state_restored_by_new_app(test_settings, storage, gateway):
    first = create_app(test_settings, storage=storage, gateway=gateway)
    first.state.shop.cart.add("ace-chair", "349.00", "Ace Ergonomic Gaming Chair")

    second = create_app(test_settings, storage=storage, gateway=gateway)
    assert "ace-chair" in second.state.shop.cart


def test_checkout_completes_when_receipt_dir_unwritable(test_settings, storage, gateway, tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("x")
    settings = dataclasses.replace(test_settings, receipt_dir=str(blocker / "receipts"))
    app = create_app(settings, storage=storage, gateway=gateway)
    client = TestClient(app)
    client.post("/cart/add", data={"product_id": "ace-jersey"})

    r = client.post("/cart/checkout", follow_redirects=False)

    assert r.status_code == 303
    assert r.headers["location"] == "/checkout/done"
    assert app.state.shop.cart.is_empty
    assert app.state.shop.last_receipt is None
