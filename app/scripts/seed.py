"""
Load the sample catalog into MongoDB.

    python -m app.scripts.seed

Clears the books, reviews and cart collections, inserts the sample books,
then inserts the sample reviews with their legacy ``bookId`` values
rewritten to the ObjectIds the books were given.
"""

import json
import logging
from pathlib import Path

from bson import ObjectId
from pymongo.database import Database

from app.database import BOOKS, CART, REVIEWS, ensure_indexes, get_db

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def load_sample(name: str) -> list[dict]:
    with (DATA_DIR / name).open("r", encoding="utf-8") as f:
        return json.load(f)


def seed_books(db: Database, books: list[dict]) -> dict[str, ObjectId]:
    """Insert books and return the mapping legacy id -> new ObjectId."""
    deleted = db[BOOKS].delete_many({}).deleted_count
    logger.info(f"Deleted {deleted} existing books")

    if not books:
        return {}

    legacy_ids = [str(book["id"]) for book in books]
    documents = [{k: v for k, v in book.items() if k != "id"} for book in books]

    result = db[BOOKS].insert_many(documents)
    logger.info(f"Inserted {len(result.inserted_ids)} books")

    # insert_many keeps input order in inserted_ids
    return dict(zip(legacy_ids, result.inserted_ids))


def seed_reviews(db: Database, reviews: list[dict], id_mapping: dict[str, ObjectId]) -> int:
    deleted = db[REVIEWS].delete_many({}).deleted_count
    logger.info(f"Deleted {deleted} existing reviews")

    documents = []
    for review in reviews:
        book_oid = id_mapping.get(str(review.get("bookId")))
        if book_oid is None:
            logger.warning(f"Skipping review {review.get('id')}: unknown book {review.get('bookId')}")
            continue

        doc = {k: v for k, v in review.items() if k != "id"}
        doc["bookId"] = book_oid
        doc.setdefault("verified", False)
        documents.append(doc)

    if not documents:
        return 0

    result = db[REVIEWS].insert_many(documents)
    logger.info(f"Inserted {len(result.inserted_ids)} reviews")
    return len(result.inserted_ids)


def seed(db: Database, books: list[dict] | None = None, reviews: list[dict] | None = None) -> dict:
    if books is None:
        books = load_sample("books.json")
    if reviews is None:
        reviews = load_sample("reviews.json")

    id_mapping = seed_books(db, books)
    review_count = seed_reviews(db, reviews, id_mapping)

    cleared = db[CART].delete_many({}).deleted_count
    logger.info(f"Cleared {cleared} cart lines")

    ensure_indexes(db)

    return {
        "books": len(id_mapping),
        "reviews": review_count,
        "id_mapping": {legacy: str(oid) for legacy, oid in id_mapping.items()},
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    summary = seed(get_db())
    logger.info(f"Seeding complete: {summary['books']} books, {summary['reviews']} reviews")
