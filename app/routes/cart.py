from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pymongo.database import Database

from app.database import get_db
from app.errors import InvalidIdentifier, NotFound
from app.notifications import CartEvent, dispatch_cart_event
from app.schemas.cart_schemas import CartAddRequest, CartUpdateRequest
from app.services import book_service, cart_service
from app.services.cart_service import CartUpdate, RemoveOutcome
from app.utils.identifiers import is_valid_id

router = APIRouter()

CART_CHANGED_HEADER = "X-Cart-Changed"


def _notify(response: Response, event: CartEvent, **kwargs):
    response.headers[CART_CHANGED_HEADER] = event.value
    return dispatch_cart_event(event, **kwargs)


# View Cart

@router.get("")
def get_cart(db: Database = Depends(get_db)):
    return cart_service.list_cart(db)


@router.get("/summary")
def get_cart_summary(db: Database = Depends(get_db)):
    return cart_service.summarize_cart(db)


# Add to Cart (merges into the existing line for the book)

@router.post("", status_code=status.HTTP_201_CREATED)
def add_to_cart(data: CartAddRequest, response: Response, db: Database = Depends(get_db)):
    if not is_valid_id(data.bookId):
        raise InvalidIdentifier(data.bookId, "bookId")
    if book_service.get_book(db, data.bookId) is None:
        raise NotFound("Book", data.bookId)

    item = cart_service.add_or_merge(db, data.bookId, data.quantity)
    notification = _notify(response, CartEvent.ITEM_ADDED, line=item)

    return {
        "message": "Item added/updated in cart successfully",
        "item": item,
        "notification": notification,
    }


# Update Cart

@router.put("")
def update_cart_item(data: CartUpdateRequest, response: Response, db: Database = Depends(get_db)):
    result = cart_service.update_line(db, data.cartItemId, data.quantity)

    if result.outcome is CartUpdate.NOT_FOUND:
        raise HTTPException(404, "Failed to update item. Item not found.")

    if result.outcome is CartUpdate.REMOVED:
        notification = _notify(
            response, CartEvent.ITEM_REMOVED, extra={"cartItemId": data.cartItemId}
        )
        return {
            "message": "Cart item removed successfully (quantity set to 0)",
            "cartItemId": data.cartItemId,
            "notification": notification,
        }

    notification = _notify(response, CartEvent.QUANTITY_UPDATED, line=result.line)
    return {
        "message": "Cart item updated successfully",
        "item": result.line,
        "notification": notification,
    }


# Remove item / Clear Cart

@router.delete("")
def delete_from_cart(
    response: Response,
    cartItemId: Optional[str] = None,
    clear: Optional[str] = None,
    db: Database = Depends(get_db),
):
    if cartItemId:
        outcome = cart_service.remove_line(db, cartItemId)
        if outcome is not RemoveOutcome.REMOVED:
            raise HTTPException(404, "Failed to remove item. Item not found.")

        notification = _notify(
            response, CartEvent.ITEM_REMOVED, extra={"cartItemId": cartItemId}
        )
        return {
            "message": "Item removed from cart successfully",
            "cartItemId": cartItemId,
            "notification": notification,
        }

    if clear == "true":
        deleted_count = cart_service.clear(db)
        notification = _notify(
            response, CartEvent.CART_CLEARED, extra={"deletedCount": deleted_count}
        )
        return {
            "message": f"Cart cleared successfully. {deleted_count} items removed.",
            "deletedCount": deleted_count,
            "notification": notification,
        }

    raise HTTPException(400, "Missing cartItemId or clear=true parameter")
