from enum import Enum


class CartEvent(str, Enum):
    ITEM_ADDED = "item_added"
    QUANTITY_UPDATED = "quantity_updated"
    ITEM_REMOVED = "item_removed"
    CART_CLEARED = "cart_cleared"

# event name the storefront listens for to refresh cart-derived views
CLIENT_EVENT_NAME = "cart-updated"
