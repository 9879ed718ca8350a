import logging
from typing import Any, Dict, Optional

import google.cloud.firestore
from firebase_admin import firestore, messaging
from pydantic import ValidationError

from .schemas import NotificationRecord
from ..clients.push_gateway import FcmPushGateway, PushDeliveryError
from ..config import Settings, settings as default_settings
from ..firebase.collections import FIELD_FCM_TOKEN

logger = logging.getLogger(__name__)


def build_message(token: str, notification: NotificationRecord, settings: Settings) -> messaging.Message:
    """
    Build the FCM message for a notification record.

    Args:
        token: Device registration token of the recipient
        notification: The notification being delivered
        settings: Provides fallback texts and the Android channel

    Returns:
        A single-device FCM message
    """
    return messaging.Message(
        token=token,
        notification=messaging.Notification(
            title=notification.title or settings.default_title,
            body=notification.body or settings.default_body,
        ),
        data={
            'type': notification.type or settings.default_type,
            'orderId': notification.orderId or '',
            'storeId': notification.storeId or '',
            'click_action': settings.click_action,
        },
        android=messaging.AndroidConfig(
            priority='high',
            notification=messaging.AndroidNotification(
                channel_id=settings.android_channel_id,
                priority='high',
                default_sound=True,
            ),
        ),
        apns=messaging.APNSConfig(
            payload=messaging.APNSPayload(
                aps=messaging.Aps(sound='default', badge=1),
            ),
        ),
    )


class NotificationDispatcher:
    """Delivers newly created notification records as push messages."""

    def __init__(self,
                 firestore_db: google.cloud.firestore.Client,
                 push_gateway: FcmPushGateway,
                 settings: Settings = default_settings):
        self.db = firestore_db
        self.push = push_gateway
        self.settings = settings

    def dispatch(self, notification_id: str, data: Dict[str, Any]) -> Optional[str]:
        """
        Send the push message for a notification record and record the outcome on it.

        Args:
            notification_id: Document ID of the notification
            data: Field map of the notification document

        Returns:
            The FCM message id if a message was delivered, None otherwise
        """
        try:
            notification = NotificationRecord.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed notification {notification_id}: {e}")
            return None

        if notification.sent:
            logger.info(f"Notification {notification_id} already sent, skipping.")
            return None

        user_id = notification.userId
        if not user_id:
            logger.error(f"No userId in notification document {notification_id}")
            return None

        notification_ref = self.db.collection(self.settings.notifications_collection).document(notification_id)
        user_ref = self.db.collection(self.settings.users_collection).document(user_id)

        try:
            return self._deliver(notification_id, notification, notification_ref, user_ref)
        except Exception as e:
            logger.error(f"Error sending notification {notification_id} to {user_id}: {e}", exc_info=True)
            self._mark_failed(notification_ref, str(e))
            return None

    def _deliver(self, notification_id: str, notification: NotificationRecord,
                 notification_ref, user_ref) -> Optional[str]:
        user_id = notification.userId
        user = user_ref.get()
        if not user.exists:
            logger.error(f"User {user_id} not found for notification {notification_id}")
            if self.settings.mark_missing_user_failed:
                self._mark_failed(notification_ref, f"User {user_id} not found")
            return None

        fcm_token = (user.to_dict() or {}).get(FIELD_FCM_TOKEN)
        if not fcm_token:
            logger.info(f"User {user_id} has no FCM token, skipping push.")
            # Mark as sent so the record reaches a terminal state
            notification_ref.update({
                'sent': True,
                'sentAt': firestore.SERVER_TIMESTAMP,
            })
            return None

        message = build_message(fcm_token, notification, self.settings)

        try:
            response = self.push.send(message)
        except PushDeliveryError as e:
            logger.error(f"Error sending notification {notification_id} to {user_id}: [{e.code}] {e.message}")
            if e.is_invalid_token:
                logger.info(f"Removing invalid FCM token for user {user_id}")
                user_ref.update({FIELD_FCM_TOKEN: firestore.DELETE_FIELD})
            self._mark_failed(notification_ref, e.message)
            return None

        logger.info(f"Successfully sent notification {notification_id} to {user_id}: {response}")
        notification_ref.update({
            'sent': True,
            'sentAt': firestore.SERVER_TIMESTAMP,
            'fcmResponse': response,
        })
        return response

    @staticmethod
    def _mark_failed(notification_ref, error_message: str) -> None:
        notification_ref.update({
            'sent': False,
            'error': error_message,
            'sentAt': firestore.SERVER_TIMESTAMP,
        })
