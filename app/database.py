import logging
from functools import lru_cache

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from app.config import settings

logger = logging.getLogger(__name__)

BOOKS = "books"
REVIEWS = "reviews"
CART = "cart"


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    # MongoClient is thread-safe and pools its own connections
    logger.info(f"Connecting to MongoDB database '{settings.mongodb_db}'")
    return MongoClient(settings.mongodb_uri)


def close_client():
    if get_client.cache_info().currsize:
        get_client().close()
        get_client.cache_clear()


def get_db() -> Database:
    return get_client()[settings.mongodb_db]


def ensure_indexes(db: Database) -> None:
    """Create the indexes the services rely on. Safe to call repeatedly.

    - cart.bookId is unique: one line per book, the upsert in
      ``cart_service.add_or_merge`` depends on it.
    - reviews.bookId speeds up the per-book review listing.
    """
    db[CART].create_index([("bookId", ASCENDING)], unique=True, name="cart_book_unique")
    db[REVIEWS].create_index([("bookId", ASCENDING)], name="reviews_book")


def ping(db: Database) -> bool:
    db.command("ping")
    return True
