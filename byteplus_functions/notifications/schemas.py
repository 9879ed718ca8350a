from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class NotificationRecord(BaseModel):
    """A document in the top-level notifications collection."""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    userId: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    type: Optional[str] = None
    orderId: Optional[str] = None
    storeId: Optional[str] = None
    sent: bool = False
    sentAt: Optional[datetime] = None
    error: Optional[str] = None
    fcmResponse: Optional[Any] = None
    createdAt: Optional[datetime] = None


class BadgeCountResponse(BaseModel):
    unreadCount: int
