"""
Cart line storage for the single, store-wide shopping cart.

The cart holds at most one line per book. ``add_or_merge`` keeps that true
under concurrent requests by doing the lookup and the increment in one
``find_one_and_update`` upsert, backed by the unique index on
``cart.bookId`` (see ``app.database.ensure_indexes``). No lock is held in
the process.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple, Optional

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.database import CART
from app.errors import InvalidQuantity
from app.services.book_service import get_books_by_ids
from app.utils.identifiers import is_valid_id, to_external, to_storage_id

logger = logging.getLogger(__name__)


class CartUpdate(str, Enum):
    UPDATED = "updated"
    REMOVED = "removed"
    NOT_FOUND = "not_found"


class RemoveOutcome(str, Enum):
    REMOVED = "removed"
    NOT_FOUND = "not_found"
    INVALID_ID = "invalid_id"


class CartLineUpdate(NamedTuple):
    outcome: CartUpdate
    line: Optional[dict] = None


def _line_out(doc: dict) -> dict:
    return to_external(doc, "bookId")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_cart(db: Database) -> list[dict]:
    return [_line_out(doc) for doc in db[CART].find({})]


def get_line(db: Database, line_id: str) -> dict | None:
    if not is_valid_id(line_id):
        return None
    doc = db[CART].find_one({"_id": to_storage_id(line_id)})
    return _line_out(doc) if doc else None


def get_line_for_book(db: Database, book_id: str) -> dict | None:
    if not is_valid_id(book_id):
        return None
    doc = db[CART].find_one({"bookId": to_storage_id(book_id)})
    return _line_out(doc) if doc else None


def _upsert_line(db: Database, book_oid, quantity: int) -> dict:
    return db[CART].find_one_and_update(
        {"bookId": book_oid},
        {"$inc": {"quantity": quantity}, "$setOnInsert": {"addedAt": _now()}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )


def add_or_merge(db: Database, book_id: str, quantity: int) -> dict:
    """Add ``quantity`` copies of a book, merging into its existing line.

    Raises ``InvalidIdentifier`` for a malformed ``book_id`` and
    ``InvalidQuantity`` unless ``quantity`` is a positive integer.
    """
    book_oid = to_storage_id(book_id, "bookId")
    if not _is_int(quantity) or quantity <= 0:
        raise InvalidQuantity(quantity)

    try:
        doc = _upsert_line(db, book_oid, quantity)
    except DuplicateKeyError:
        # A concurrent upsert inserted the line first; this pass matches it and increments
        logger.info(f"Concurrent insert for book {book_id}, merging into existing line")
        doc = _upsert_line(db, book_oid, quantity)

    line = _line_out(doc)
    if line["quantity"] == quantity:
        logger.info(f"Cart line {line['id']} added: book {book_id} x{quantity}")
    else:
        logger.info(f"Cart line {line['id']} merged: book {book_id} +{quantity} -> {line['quantity']}")
    return line


def update_line(db: Database, line_id: str, quantity: int) -> CartLineUpdate:
    """Overwrite a line's quantity; zero or less removes the line."""
    oid = to_storage_id(line_id, "cartItemId")
    if not _is_int(quantity):
        raise InvalidQuantity(quantity)

    if quantity <= 0:
        if remove_line(db, line_id) is RemoveOutcome.REMOVED:
            return CartLineUpdate(CartUpdate.REMOVED)
        return CartLineUpdate(CartUpdate.NOT_FOUND)

    doc = db[CART].find_one_and_update(
        {"_id": oid},
        {"$set": {"quantity": quantity}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        return CartLineUpdate(CartUpdate.NOT_FOUND)

    logger.info(f"Cart line {line_id} quantity set to {quantity}")
    return CartLineUpdate(CartUpdate.UPDATED, _line_out(doc))


def set_quantity(db: Database, line_id: str, quantity: int) -> dict | None:
    """Returns the updated line, or ``None`` when it was removed or not found.

    Use ``update_line`` to tell those two apart.
    """
    return update_line(db, line_id, quantity).line


def remove_line(db: Database, line_id: str) -> RemoveOutcome:
    if not is_valid_id(line_id):
        return RemoveOutcome.INVALID_ID
    result = db[CART].delete_one({"_id": to_storage_id(line_id)})
    if result.deleted_count == 1:
        logger.info(f"Cart line {line_id} removed")
        return RemoveOutcome.REMOVED
    return RemoveOutcome.NOT_FOUND


def remove(db: Database, line_id: str) -> bool:
    return remove_line(db, line_id) is RemoveOutcome.REMOVED


def clear(db: Database) -> int:
    result = db[CART].delete_many({})
    logger.info(f"Cart cleared, {result.deleted_count} lines removed")
    return result.deleted_count


def summarize_cart(db: Database) -> dict:
    """Cart lines joined with their books, plus item count and total.

    Lines whose book has been deleted are kept with ``book: None`` and left
    out of the total.
    """
    lines = list_cart(db)
    books = get_books_by_ids(db, [line["bookId"] for line in lines])

    items = []
    item_count = 0
    total = 0.0

    for line in lines:
        book = books.get(line["bookId"])
        line_total = round(book["price"] * line["quantity"], 2) if book else None
        item_count += line["quantity"]
        if line_total is not None:
            total += line_total

        items.append({**line, "book": book, "lineTotal": line_total})

    return {
        "items": items,
        "itemCount": item_count,
        "total": round(total, 2),
    }
