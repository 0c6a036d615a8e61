from enum import Enum


class Channel(str, Enum):
    CLIENT_EVENT = "client_event"
    LOG = "log"
