import logging

import google.cloud.firestore

from ..config import Settings, settings as default_settings
from ..context import CallerContext
from ..errors import ErrorCode, FunctionError
from ..firebase.collections import SUBCOLLECTION_NOTIFICATIONS

logger = logging.getLogger(__name__)


class BadgeCounter:
    def __init__(self, firestore_db: google.cloud.firestore.Client, settings: Settings = default_settings):
        self.db = firestore_db
        self.settings = settings

    def count_unread(self, caller: CallerContext) -> int:
        """Count the caller's own unread notification entries."""
        if not caller.is_authenticated:
            raise FunctionError(ErrorCode.UNAUTHENTICATED, "User must be logged in")

        unread = self.db.collection(self.settings.users_collection) \
            .document(caller.uid) \
            .collection(SUBCOLLECTION_NOTIFICATIONS) \
            .where('read', '==', False) \
            .get()

        logger.debug(f"User {caller.uid} has {len(unread)} unread notifications")
        return len(unread)
