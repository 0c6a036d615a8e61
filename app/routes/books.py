from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.database import Database

from app.database import get_db
from app.schemas.book_schemas import BookCreate, BookUpdate
from app.services import book_service

router = APIRouter()


@router.get("")
def list_books(db: Database = Depends(get_db)):
    return book_service.list_books(db)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_book(data: BookCreate, db: Database = Depends(get_db)):
    book = book_service.create_book(db, data.model_dump())
    return {"message": "Book added successfully", "book": book}


@router.get("/{book_id}")
def get_book(book_id: str, db: Database = Depends(get_db)):
    book = book_service.get_book(db, book_id)
    if not book:
        raise HTTPException(404, "Book not found")
    return {"book": book}


@router.put("/{book_id}")
def update_book(book_id: str, data: BookUpdate, db: Database = Depends(get_db)):
    updates = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    book = book_service.update_book(db, book_id, updates)
    if not book:
        raise HTTPException(404, "Book not found or invalid ID")

    return {"message": "Book updated successfully", "book": book}


@router.delete("/{book_id}")
def delete_book(book_id: str, db: Database = Depends(get_db)):
    if not book_service.delete_book(db, book_id):
        raise HTTPException(404, "Book not found")
    return {"message": "Book deleted successfully", "id": book_id}
