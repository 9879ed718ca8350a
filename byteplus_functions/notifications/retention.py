import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import google.cloud.firestore

from ..config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class RetentionSweeper:
    """Deletes notification records older than the retention window."""

    def __init__(self, firestore_db: google.cloud.firestore.Client, settings: Settings = default_settings):
        self.db = firestore_db
        self.settings = settings

    def cutoff(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        return now - timedelta(days=self.settings.retention_days)

    def sweep(self, now: Optional[datetime] = None) -> int:
        """
        Delete one bounded batch of expired notifications.

        Records beyond the batch limit are left for the next scheduled run.

        Args:
            now: Run time; defaults to the current UTC time

        Returns:
            Number of deleted notifications
        """
        cutoff = self.cutoff(now)
        query = self.db.collection(self.settings.notifications_collection) \
            .where('createdAt', '<', cutoff) \
            .limit(self.settings.retention_batch_limit)

        docs = query.get()
        if not docs:
            logger.info("No old notifications to clean up.")
            return 0

        batch = self.db.batch()
        for doc in docs:
            batch.delete(doc.reference)
        batch.commit()

        logger.info(f"Deleted {len(docs)} old notifications created before {cutoff.isoformat()}.")
        return len(docs)
