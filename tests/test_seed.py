"""Tests for the sample data loader."""
from bson import ObjectId

from app.database import BOOKS, CART, REVIEWS
from app.scripts.seed import load_sample, seed
from app.services import book_service, review_service


def test_seed_sample_data(db):
    summary = seed(db)

    books = load_sample("books.json")
    reviews = load_sample("reviews.json")
    assert summary["books"] == len(books) == db[BOOKS].count_documents({})
    assert summary["reviews"] == len(reviews) == db[REVIEWS].count_documents({})


def test_seed_remaps_review_book_ids(db):
    books = [{"id": "1", "title": "One"}, {"id": "2", "title": "Two"}]
    reviews = [
        {"id": "r1", "bookId": "1", "rating": 5},
        {"id": "r2", "bookId": "1", "rating": 3},
        {"id": "r3", "bookId": "2", "rating": 4},
    ]

    summary = seed(db, books, reviews)

    mapping = summary["id_mapping"]
    assert set(mapping) == {"1", "2"}
    assert book_service.get_book(db, mapping["1"])["title"] == "One"
    assert len(review_service.list_reviews_for_book(db, mapping["1"])) == 2
    assert len(review_service.list_reviews_for_book(db, mapping["2"])) == 1

    stored = db[REVIEWS].find_one({"rating": 4})
    assert stored["bookId"] == ObjectId(mapping["2"])
    assert stored["verified"] is False
    assert "id" not in stored


def test_seed_skips_reviews_for_unknown_books(db):
    summary = seed(db, [{"id": "1", "title": "One"}], [{"id": "r1", "bookId": "404", "rating": 1}])
    assert summary["reviews"] == 0
    assert db[REVIEWS].count_documents({}) == 0


def test_seed_replaces_existing_data(db, book):
    db[CART].insert_one({"bookId": ObjectId(book["id"]), "quantity": 1, "addedAt": "x"})

    seed(db, [{"id": "1", "title": "Fresh"}], [])

    assert [b["title"] for b in book_service.list_books(db)] == ["Fresh"]
    assert db[CART].count_documents({}) == 0
