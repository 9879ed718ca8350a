"""
Cloud Functions for Firebase entry points.

Deploy with ``firebase deploy --only functions``; the runtime discovers
the decorated functions below. Firebase clients are created lazily on
the first invocation, not at import time.
"""
import logging
from typing import Any, Dict

from firebase_functions import firestore_fn, https_fn, scheduler_fn

from byteplus_functions import callables, triggers
from byteplus_functions.config import settings
from byteplus_functions.logging_config import setup_logging
from byteplus_functions.services import get_services

setup_logging()
logger = logging.getLogger(__name__)


@firestore_fn.on_document_created(document=f"{settings.notifications_collection}/{{notificationId}}")
def send_push_notification(event: firestore_fn.Event[firestore_fn.DocumentSnapshot]) -> None:
    """Send a push notification when a notification document is created."""
    triggers.on_notification_created(event, get_services())


@scheduler_fn.on_schedule(schedule=settings.cleanup_schedule, timezone=settings.cleanup_timezone)
def cleanup_old_notifications(event: scheduler_fn.ScheduledEvent) -> None:
    """Delete notifications older than the retention window."""
    triggers.on_cleanup_schedule(get_services())


@https_fn.on_call()
def sync_badge_count(req: https_fn.CallableRequest) -> Dict[str, Any]:
    return callables.sync_badge_count(req, get_services())


@https_fn.on_call()
def create_user(req: https_fn.CallableRequest) -> Dict[str, Any]:
    return callables.create_user(req, get_services())


@https_fn.on_call()
def delete_user(req: https_fn.CallableRequest) -> Dict[str, Any]:
    return callables.delete_user(req, get_services())
