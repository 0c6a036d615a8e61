from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from app.database import get_db
from app.services import book_service, cart_service, review_service

router = APIRouter()


# ---------------------------------------------------------
# Book detail page: book, its reviews and the cart state
# ---------------------------------------------------------
@router.get("/{book_id}/detail")
def get_book_detail(book_id: str, db: Database = Depends(get_db)):
    book = book_service.get_book(db, book_id)
    if not book:
        raise HTTPException(404, "Book not found")

    reviews = review_service.list_reviews_for_book(db, book_id) or []
    avg_rating, total_reviews = review_service.rating_summary(reviews)

    line = cart_service.get_line_for_book(db, book_id)

    return {
        "book": book,
        "averageRating": avg_rating,
        "totalReviews": total_reviews,
        "reviews": reviews,
        "inCart": line["quantity"] if line else 0,
    }
