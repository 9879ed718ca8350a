import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from .badge import BadgeCounter
from .schemas import BadgeCountResponse
from ..dependencies import CurrentCaller, get_badge_counter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notifications"])


@router.get('/notifications/badge-count', response_model=BadgeCountResponse)
def get_badge_count(
    caller: CurrentCaller,
    badge_counter: Annotated[BadgeCounter, Depends(get_badge_counter)],
):
    """
    Get the number of unread notifications of the current user
    """
    return BadgeCountResponse(unreadCount=badge_counter.count_unread(caller))
