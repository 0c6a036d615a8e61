import logging

from pymongo import ReturnDocument
from pymongo.database import Database

from app.database import BOOKS
from app.errors import StorageFailure
from app.utils.identifiers import is_valid_id, to_external, to_storage_id

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = {"_id", "id"}


def list_books(db: Database) -> list[dict]:
    return [to_external(doc) for doc in db[BOOKS].find({})]


def get_book(db: Database, book_id: str) -> dict | None:
    if not is_valid_id(book_id):
        return None
    doc = db[BOOKS].find_one({"_id": to_storage_id(book_id)})
    return to_external(doc) if doc else None


def get_books_by_ids(db: Database, book_ids) -> dict[str, dict]:
    """Fetch several books in one query, keyed by their public id.

    Malformed ids are skipped.
    """
    oids = [to_storage_id(b) for b in set(book_ids) if is_valid_id(b)]
    if not oids:
        return {}
    return {
        book["id"]: book
        for book in (to_external(doc) for doc in db[BOOKS].find({"_id": {"$in": oids}}))
    }


def create_book(db: Database, data: dict) -> dict:
    document = {k: v for k, v in data.items() if k not in IMMUTABLE_FIELDS}
    result = db[BOOKS].insert_one(document)

    created = db[BOOKS].find_one({"_id": result.inserted_id})
    if not created:
        raise StorageFailure("Failed to create and retrieve the new book.")

    logger.info(f"Book created: {result.inserted_id} ({document.get('title')})")
    return to_external(created)


def update_book(db: Database, book_id: str, updates: dict) -> dict | None:
    if not is_valid_id(book_id):
        return None

    changes = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
    oid = to_storage_id(book_id)

    if not changes:
        doc = db[BOOKS].find_one({"_id": oid})
    else:
        doc = db[BOOKS].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    if doc is None:
        return None

    logger.info(f"Book updated: {book_id} fields={sorted(changes)}")
    return to_external(doc)


def delete_book(db: Database, book_id: str) -> bool:
    # Reviews and cart lines keep their reference, nothing cascades
    if not is_valid_id(book_id):
        return False
    result = db[BOOKS].delete_one({"_id": to_storage_id(book_id)})
    if result.deleted_count == 1:
        logger.info(f"Book deleted: {book_id}")
        return True
    return False
