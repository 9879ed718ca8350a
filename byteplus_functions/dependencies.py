import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth

from .context import CallerContext
from .notifications import BadgeCounter
from .service_env import Environment
from .services import get_services
from .users import UserLifecycleManager

logger = logging.getLogger(__name__)

# A missing header is not rejected here; handlers raise unauthenticated themselves
security = HTTPBearer(scheme_name='Authorization', auto_error=False)


async def decode_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CallerContext:
    if credentials is None:
        return CallerContext()

    token = credentials.credentials

    if Environment.is_dev_environment():
        # In DEV the bearer token is the uid itself
        logger.info(f"Dev caller: {token}")
        return CallerContext(uid=token)

    try:
        decoded = auth.verify_id_token(token, check_revoked=True)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token format")
    except auth.ExpiredIdTokenError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except auth.RevokedIdTokenError:
        raise HTTPException(status_code=401, detail="Token has been revoked")
    except auth.InvalidIdTokenError:
        raise HTTPException(status_code=401, detail="Invalid ID token")
    except auth.CertificateFetchError:
        raise HTTPException(status_code=500, detail="Error fetching certificates")
    except auth.UserDisabledError:
        raise HTTPException(status_code=403, detail="User account is disabled")
    except Exception as e:
        logger.error(f"Token verification error: {str(e)}")
        raise HTTPException(status_code=500, detail="Authentication error")
    return CallerContext(uid=decoded['uid'])


CurrentCaller = Annotated[CallerContext, Depends(decode_token)]


def get_badge_counter() -> BadgeCounter:
    return get_services().badge_counter


def get_user_manager() -> UserLifecycleManager:
    return get_services().user_manager
