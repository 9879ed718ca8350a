"""Adapters between Firebase callable requests and the handlers."""
import logging
from typing import Any, Dict

from firebase_functions import https_fn

from .context import CallerContext
from .errors import FunctionError
from .services import Services

logger = logging.getLogger(__name__)


def caller_from_request(req: https_fn.CallableRequest) -> CallerContext:
    auth = getattr(req, 'auth', None)
    return CallerContext(uid=auth.uid if auth else None)


def to_https_error(error: FunctionError) -> https_fn.HttpsError:
    return https_fn.HttpsError(
        code=https_fn.FunctionsErrorCode(error.code.value),
        message=error.message,
        details=error.details,
    )


def sync_badge_count(req: https_fn.CallableRequest, services: Services) -> Dict[str, Any]:
    try:
        count = services.badge_counter.count_unread(caller_from_request(req))
    except FunctionError as e:
        raise to_https_error(e)
    return {'unreadCount': count}


def create_user(req: https_fn.CallableRequest, services: Services) -> Dict[str, Any]:
    try:
        uid = services.user_manager.create_user(caller_from_request(req), req.data)
    except FunctionError as e:
        raise to_https_error(e)
    return {'success': True, 'userId': uid}


def delete_user(req: https_fn.CallableRequest, services: Services) -> Dict[str, Any]:
    try:
        uid = services.user_manager.delete_user(caller_from_request(req), req.data)
    except FunctionError as e:
        raise to_https_error(e)
    return {'success': True, 'userId': uid}
