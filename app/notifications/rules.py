from app.notifications.events import CartEvent
from app.notifications.channels import Channel


NOTIFICATION_RULES = {

    CartEvent.ITEM_ADDED: {
        Channel.CLIENT_EVENT: True,
        Channel.LOG: True,
    },

    CartEvent.QUANTITY_UPDATED: {
        Channel.CLIENT_EVENT: True,
        Channel.LOG: True,
    },

    CartEvent.ITEM_REMOVED: {
        Channel.CLIENT_EVENT: True,
        Channel.LOG: True,
    },

    CartEvent.CART_CLEARED: {
        Channel.CLIENT_EVENT: True,
        Channel.LOG: True,
    },
}
