"""HTTP tests for /cart."""
from bson import ObjectId

from app.routes.cart import CART_CHANGED_HEADER
from app.services import cart_service

MISSING_ID = str(ObjectId())


def test_get_empty_cart(client):
    response = client.get("/cart")
    assert response.status_code == 200
    assert response.json() == []


def test_add_to_cart(client, book):
    response = client.post("/cart", json={"bookId": book["id"], "quantity": 2})

    assert response.status_code == 201
    body = response.json()
    assert body["item"]["bookId"] == book["id"]
    assert body["item"]["quantity"] == 2
    assert body["notification"] == {"event": "cart-updated", "action": "item_added"}
    assert response.headers[CART_CHANGED_HEADER] == "item_added"


def test_add_to_cart_merges(client, book):
    client.post("/cart", json={"bookId": book["id"], "quantity": 2})
    client.post("/cart", json={"bookId": book["id"], "quantity": 3})

    lines = client.get("/cart").json()
    assert [(l["bookId"], l["quantity"]) for l in lines] == [(book["id"], 5)]


def test_add_to_cart_missing_fields(client):
    response = client.post("/cart", json={"quantity": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: bookId"}


def test_add_to_cart_bad_quantity(client, book):
    for quantity in (0, -2):
        response = client.post("/cart", json={"bookId": book["id"], "quantity": quantity})
        assert response.status_code == 400
        assert "Quantity must be a positive integer" in response.json()["error"]
    assert client.post("/cart", json={"bookId": book["id"], "quantity": "lots"}).status_code == 400


def test_add_to_cart_rejects_coercible_quantities(client, db, book):
    for quantity in ("2", 2.0, True):
        response = client.post("/cart", json={"bookId": book["id"], "quantity": quantity})
        assert response.status_code == 400, quantity
    assert cart_service.list_cart(db) == []


def test_add_to_cart_malformed_and_unknown_book(client, db):
    assert client.post("/cart", json={"bookId": "B1", "quantity": 1}).status_code == 400
    assert client.post("/cart", json={"bookId": MISSING_ID, "quantity": 1}).status_code == 404
    assert cart_service.list_cart(db) == []


def test_update_quantity_overwrites(client, db, book):
    line = cart_service.add_or_merge(db, book["id"], 5)

    response = client.put("/cart", json={"cartItemId": line["id"], "quantity": 1})

    assert response.status_code == 200
    assert response.json()["item"]["quantity"] == 1
    assert response.headers[CART_CHANGED_HEADER] == "quantity_updated"


def test_update_quantity_zero_removes(client, db, book):
    line = cart_service.add_or_merge(db, book["id"], 5)

    response = client.put("/cart", json={"cartItemId": line["id"], "quantity": 0})

    assert response.status_code == 200
    assert "removed" in response.json()["message"]
    assert response.json()["notification"]["action"] == "item_removed"
    assert cart_service.list_cart(db) == []


def test_update_quantity_errors(client):
    assert client.put("/cart", json={"cartItemId": MISSING_ID, "quantity": 2}).status_code == 404
    assert client.put("/cart", json={"cartItemId": MISSING_ID, "quantity": 0}).status_code == 404
    assert client.put("/cart", json={"cartItemId": "bad", "quantity": 2}).status_code == 400
    assert client.put("/cart", json={"cartItemId": MISSING_ID, "quantity": -1}).status_code == 400
    assert client.put("/cart", json={"quantity": 1}).status_code == 400


def test_update_quantity_rejects_coercible_quantities(client, db, book):
    line = cart_service.add_or_merge(db, book["id"], 3)

    for quantity in ("1", 2.0, True):
        response = client.put("/cart", json={"cartItemId": line["id"], "quantity": quantity})
        assert response.status_code == 400, quantity

    assert cart_service.get_line(db, line["id"])["quantity"] == 3


def test_remove_item(client, db, book):
    line = cart_service.add_or_merge(db, book["id"], 1)

    response = client.delete("/cart", params={"cartItemId": line["id"]})

    assert response.status_code == 200
    assert response.json()["cartItemId"] == line["id"]
    assert cart_service.list_cart(db) == []


def test_remove_item_not_found(client):
    assert client.delete("/cart", params={"cartItemId": MISSING_ID}).status_code == 404
    assert client.delete("/cart", params={"cartItemId": "bad"}).status_code == 404


def test_clear_cart(client, db, book, other_book):
    cart_service.add_or_merge(db, book["id"], 1)
    cart_service.add_or_merge(db, other_book["id"], 1)

    response = client.delete("/cart", params={"clear": "true"})

    assert response.status_code == 200
    assert response.json()["deletedCount"] == 2
    assert response.headers[CART_CHANGED_HEADER] == "cart_cleared"
    assert client.get("/cart").json() == []


def test_clear_empty_cart(client):
    response = client.delete("/cart", params={"clear": "true"})
    assert response.status_code == 200
    assert response.json()["deletedCount"] == 0


def test_delete_without_parameters(client):
    response = client.delete("/cart")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing cartItemId or clear=true parameter"}


def test_cart_summary(client, db, book):
    cart_service.add_or_merge(db, book["id"], 2)

    body = client.get("/cart/summary").json()

    assert body["itemCount"] == 2
    assert body["total"] == 49.98
    assert body["items"][0]["book"]["title"] == book["title"]
