import logging
import threading
from typing import Callable

from app.notifications.channels import Channel
from app.notifications.events import CLIENT_EVENT_NAME, CartEvent
from app.notifications.rules import NOTIFICATION_RULES

logger = logging.getLogger(__name__)

CartListener = Callable[[CartEvent, dict], None]

_listeners: list[CartListener] = []
_listeners_lock = threading.Lock()


def subscribe(listener: CartListener) -> None:
    with _listeners_lock:
        _listeners.append(listener)


def unsubscribe(listener: CartListener) -> None:
    with _listeners_lock:
        if listener in _listeners:
            _listeners.remove(listener)


def _current_listeners() -> list[CartListener]:
    with _listeners_lock:
        return list(_listeners)


def dispatch_cart_event(
    event: CartEvent,
    *,
    line: dict | None = None,
    extra: dict | None = None,
) -> dict | None:
    """
    Central cart notification dispatcher.

    Handles:
    - the client "cart-updated" event payload (returned to the caller)
    - the mutation log line
    - in-process listeners
    """

    rules = NOTIFICATION_RULES.get(event, {})
    payload = {"line": line, **(extra or {})}

    if rules.get(Channel.LOG):
        logger.info(f"Cart event {event.value}: {payload}")

    for listener in _current_listeners():
        try:
            listener(event, payload)
        except Exception:
            logger.exception(f"Cart listener {listener!r} failed for {event.value}")

    if rules.get(Channel.CLIENT_EVENT):
        return {"event": CLIENT_EVENT_NAME, "action": event.value}
    return None
