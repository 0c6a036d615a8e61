import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import close_client, ensure_indexes, get_db
from app.errors import register_exception_handlers
from app.routes import (
    book_detail,
    books,
    cart,
    health,
    review,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes(get_db())
    logger.info(f"Amana Bookstore API started (env={settings.env})")
    yield
    close_client()

app = FastAPI(title="Amana Bookstore API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[cart.CART_CHANGED_HEADER],
)

register_exception_handlers(app)

app.include_router(books.router, prefix="/books", tags=["Books"])
app.include_router(book_detail.router, prefix="/books", tags=["Book Details"])
app.include_router(review.router, prefix="/reviews", tags=["Reviews"])
app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "books": [
            "/books", "/books/{book_id}", "/books/{book_id}/detail"
        ],
        "reviews": [
            "/reviews", "/reviews?bookId={book_id}", "/reviews/{review_id}"
        ],
        "cart": [
            "/cart", "/cart/summary",
            "/cart?cartItemId={id}", "/cart?clear=true"
        ],
        "health": [
            "/health/check"
        ]
    }
