from .badge import BadgeCounter
from .dispatcher import NotificationDispatcher, build_message
from .retention import RetentionSweeper

__all__ = ["BadgeCounter", "NotificationDispatcher", "RetentionSweeper", "build_message"]
