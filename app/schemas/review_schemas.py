from pydantic import BaseModel, Field
from typing import Optional


class ReviewCreate(BaseModel):
    bookId: str
    author: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    title: str
    comment: str
    verified: bool = False


class ReviewUpdate(BaseModel):
    bookId: Optional[str] = None
    author: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    title: Optional[str] = None
    comment: Optional[str] = None
    verified: Optional[bool] = None
