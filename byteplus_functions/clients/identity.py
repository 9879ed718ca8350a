import logging

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError, InvalidArgumentError

logger = logging.getLogger(__name__)

EMAIL_ALREADY_EXISTS = "email-already-exists"
INVALID_EMAIL = "invalid-email"
WEAK_PASSWORD = "weak-password"
USER_NOT_FOUND = "user-not-found"


class IdentityError(Exception):
    """Typed failure returned by the identity provider."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def _argument_error_code(message: str) -> str:
    lowered = message.lower()
    if 'password' in lowered:
        return WEAK_PASSWORD
    if 'email' in lowered:
        return INVALID_EMAIL
    return "invalid-argument"


class FirebaseIdentityProvider:
    """Thin wrapper over Firebase Authentication user management."""

    def __init__(self, app: firebase_admin.App = None):
        self.app = app

    def create_user(self, email: str, password: str, display_name: str) -> str:
        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                app=self.app,
            )
            return user.uid
        except auth.EmailAlreadyExistsError as e:
            raise IdentityError(EMAIL_ALREADY_EXISTS, str(e)) from e
        except InvalidArgumentError as e:
            raise IdentityError(_argument_error_code(str(e)), str(e)) from e
        except FirebaseError as e:
            raise IdentityError(str(e.code).lower().replace('_', '-'), str(e)) from e
        except ValueError as e:
            # The SDK validates email and password locally before calling the backend
            raise IdentityError(_argument_error_code(str(e)), str(e)) from e

    def delete_user(self, uid: str) -> None:
        try:
            auth.delete_user(uid, app=self.app)
        except auth.UserNotFoundError as e:
            raise IdentityError(USER_NOT_FOUND, str(e)) from e
        except FirebaseError as e:
            raise IdentityError(str(e.code).lower().replace('_', '-'), str(e)) from e
