from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.database import Database

from app.database import get_db
from app.errors import InvalidIdentifier, NotFound
from app.schemas.review_schemas import ReviewCreate, ReviewUpdate
from app.services import book_service, review_service
from app.utils.identifiers import is_valid_id

router = APIRouter()


# ---------------------------------------------------------
# LIST REVIEWS (ALL, OR FOR ONE BOOK)
# ---------------------------------------------------------
@router.get("")
def list_reviews(bookId: Optional[str] = None, db: Database = Depends(get_db)):
    if not bookId:
        return review_service.list_reviews(db)

    reviews = review_service.list_reviews_for_book(db, bookId)
    if reviews is None:
        raise InvalidIdentifier(bookId, "bookId")
    return reviews


# ---------------------------------------------------------
# CREATE A REVIEW
# ---------------------------------------------------------
@router.post("", status_code=status.HTTP_201_CREATED)
def create_review(data: ReviewCreate, db: Database = Depends(get_db)):
    # bookId must be well formed and point at an existing book at write time
    if not is_valid_id(data.bookId):
        raise InvalidIdentifier(data.bookId, "bookId")
    if book_service.get_book(db, data.bookId) is None:
        raise NotFound("Book", data.bookId)

    review = review_service.create_review(db, data.model_dump())
    return {"message": "Review added successfully", "review": review}


@router.get("/{review_id}")
def get_review(review_id: str, db: Database = Depends(get_db)):
    review = review_service.get_review(db, review_id)
    if not review:
        raise HTTPException(404, "Review not found")
    return {"review": review}


# ---------------------------------------------------------
# UPDATE A REVIEW
# ---------------------------------------------------------
@router.put("/{review_id}")
def update_review(review_id: str, data: ReviewUpdate, db: Database = Depends(get_db)):
    updates = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    new_book_id = updates.get("bookId")
    if is_valid_id(new_book_id) and book_service.get_book(db, new_book_id) is None:
        raise NotFound("Book", new_book_id)

    review = review_service.update_review(db, review_id, updates)
    if not review:
        raise HTTPException(404, "Review not found or invalid ID")

    return {"message": "Review updated successfully", "review": review}


# ---------------------------------------------------------
# DELETE A REVIEW
# ---------------------------------------------------------
@router.delete("/{review_id}")
def delete_review(review_id: str, db: Database = Depends(get_db)):
    if not review_service.delete_review(db, review_id):
        raise HTTPException(404, "Review not found or failed to delete")
    return {"message": "Review deleted successfully", "id": review_id}
