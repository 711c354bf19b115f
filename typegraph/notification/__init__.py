"""Type-definition change notifications."""

from .consumer import NotificationConsumer, NotificationMessage

__all__ = [
    "NotificationConsumer",
    "NotificationMessage",
]
