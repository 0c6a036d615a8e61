from pydantic import BaseModel, Field
from typing import Optional, List


class BookCreate(BaseModel):
    # Every attribute is required, the catalog has no defaults
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1, max_length=100)
    description: str
    price: float = Field(..., ge=0)
    image: str
    isbn: str
    genre: List[str]
    tags: List[str]
    datePublished: str
    pages: int = Field(..., ge=0)
    language: str
    publisher: str
    rating: float = Field(..., ge=0, le=5)
    reviewCount: int = Field(..., ge=0)
    inStock: bool
    featured: bool


class BookUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    isbn: Optional[str] = None
    genre: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    datePublished: Optional[str] = None
    pages: Optional[int] = Field(None, ge=0)
    language: Optional[str] = None
    publisher: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    reviewCount: Optional[int] = Field(None, ge=0)
    inStock: Optional[bool] = None
    featured: Optional[bool] = None
