import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from .lifecycle import UserLifecycleManager
from .schemas import UserMutationResponse
from ..dependencies import CurrentCaller, get_user_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post('/users', response_model=UserMutationResponse, status_code=201)
def create_user(
    caller: CurrentCaller,
    user_manager: Annotated[UserLifecycleManager, Depends(get_user_manager)],
    payload: Optional[Dict[str, Any]] = Body(None),
):
    """
    Create a user account (admin only)
    """
    uid = user_manager.create_user(caller, payload)
    return UserMutationResponse(userId=uid)


@router.delete('/users/{user_id}', response_model=UserMutationResponse)
def delete_user(
    user_id: str,
    caller: CurrentCaller,
    user_manager: Annotated[UserLifecycleManager, Depends(get_user_manager)],
):
    """
    Delete a user account with all of its data (admin only)
    """
    uid = user_manager.delete_user(caller, {'userId': user_id})
    return UserMutationResponse(userId=uid)
