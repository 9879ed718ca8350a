"""Bodies of the event-triggered functions.

Event triggers have no caller to report to, so failures are logged and
the invocation ends normally instead of crash-looping the trigger.
"""
import logging

from .services import Services

logger = logging.getLogger(__name__)


def on_notification_created(event, services: Services) -> None:
    notification_id = event.params["notificationId"]
    if event.data is None:
        logger.error(f"Notification {notification_id} created without data")
        return
    try:
        services.dispatcher.dispatch(notification_id, event.data.to_dict() or {})
    except Exception as e:
        logger.error(f"Error dispatching notification {notification_id}: {e}", exc_info=True)


def on_cleanup_schedule(services: Services) -> None:
    try:
        services.sweeper.sweep()
    except Exception as e:
        logger.error(f"[cleanup_old_notifications] Error in scheduled task: {e}", exc_info=True)
