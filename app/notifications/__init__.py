from .events import CartEvent
from .dispatcher import dispatch_cart_event, subscribe, unsubscribe

__all__ = [
    "CartEvent",
    "dispatch_cart_event",
    "subscribe",
    "unsubscribe",
]
