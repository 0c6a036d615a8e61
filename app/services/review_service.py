import logging
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from app.database import REVIEWS
from app.errors import StorageFailure
from app.utils.identifiers import is_valid_id, to_external, to_storage_id

logger = logging.getLogger(__name__)

# set by the server on create, never rewritten
PROTECTED_FIELDS = {"_id", "id", "timestamp"}


def _review_out(doc: dict) -> dict:
    return to_external(doc, "bookId")


def list_reviews(db: Database) -> list[dict]:
    return [_review_out(doc) for doc in db[REVIEWS].find({})]


def get_review(db: Database, review_id: str) -> dict | None:
    if not is_valid_id(review_id):
        return None
    doc = db[REVIEWS].find_one({"_id": to_storage_id(review_id)})
    return _review_out(doc) if doc else None


def list_reviews_for_book(db: Database, book_id: str) -> list[dict] | None:
    """Reviews for one book.

    Returns ``None`` when ``book_id`` is malformed, and an empty list when
    the id is well formed but nothing references it.
    """
    if not is_valid_id(book_id):
        return None
    cursor = db[REVIEWS].find({"bookId": to_storage_id(book_id)})
    return [_review_out(doc) for doc in cursor]


def create_review(db: Database, data: dict) -> dict:
    document = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
    document["bookId"] = to_storage_id(data.get("bookId"), "bookId")
    document["timestamp"] = datetime.now(timezone.utc).isoformat()
    document["verified"] = bool(data.get("verified") or False)

    result = db[REVIEWS].insert_one(document)
    created = db[REVIEWS].find_one({"_id": result.inserted_id})
    if not created:
        raise StorageFailure("Failed to create and retrieve the new review.")

    logger.info(f"Review created: {result.inserted_id} for book {data.get('bookId')}")
    return _review_out(created)


def update_review(db: Database, review_id: str, updates: dict) -> dict | None:
    if not is_valid_id(review_id):
        return None

    changes = {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}

    # A bad bookId rejects the whole update before anything is written
    if "bookId" in changes:
        if changes["bookId"] is None:
            del changes["bookId"]
        else:
            changes["bookId"] = to_storage_id(changes["bookId"], "bookId")

    oid = to_storage_id(review_id)
    if not changes:
        doc = db[REVIEWS].find_one({"_id": oid})
    else:
        doc = db[REVIEWS].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    if doc is None:
        return None

    logger.info(f"Review updated: {review_id} fields={sorted(changes)}")
    return _review_out(doc)


def delete_review(db: Database, review_id: str) -> bool:
    if not is_valid_id(review_id):
        return False
    result = db[REVIEWS].delete_one({"_id": to_storage_id(review_id)})
    if result.deleted_count == 1:
        logger.info(f"Review deleted: {review_id}")
        return True
    return False


def rating_summary(reviews: list[dict]) -> tuple[float | None, int]:
    if not reviews:
        return None, 0
    average = sum(r["rating"] for r in reviews) / len(reviews)
    return round(average, 2), len(reviews)
