import logging

import firebase_admin
from firebase_admin import messaging
from firebase_admin.exceptions import FirebaseError, InvalidArgumentError

logger = logging.getLogger(__name__)

INVALID_REGISTRATION_TOKEN = "invalid-registration-token"
REGISTRATION_TOKEN_NOT_REGISTERED = "registration-token-not-registered"


class PushDeliveryError(Exception):
    """Typed failure returned by the push-delivery gateway."""

    # Error kinds that mean the device token will never work again
    INVALID_TOKEN_CODES = (
        INVALID_REGISTRATION_TOKEN,
        REGISTRATION_TOKEN_NOT_REGISTERED,
    )

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def is_invalid_token(self) -> bool:
        return self.code in self.INVALID_TOKEN_CODES


def _argument_error_code(message: str) -> str:
    # INVALID_ARGUMENT also covers payload problems such as oversized messages
    if "registration token" in message.lower():
        return INVALID_REGISTRATION_TOKEN
    return "invalid-argument"


def _error_code(error: FirebaseError) -> str:
    if isinstance(error, messaging.UnregisteredError):
        return REGISTRATION_TOKEN_NOT_REGISTERED
    if isinstance(error, InvalidArgumentError):
        return _argument_error_code(str(error))
    return str(error.code).lower().replace('_', '-')


class FcmPushGateway:
    """Sends single-device messages through Firebase Cloud Messaging."""

    def __init__(self, app: firebase_admin.App = None):
        self.app = app

    def send(self, message: messaging.Message) -> str:
        """
        Send a message to the device token it is addressed to.

        Args:
            message: Fully built FCM message

        Returns:
            The FCM message id (delivery receipt)

        Raises:
            PushDeliveryError: If FCM rejects the message
        """
        try:
            return messaging.send(message, app=self.app)
        except FirebaseError as e:
            raise PushDeliveryError(_error_code(e), str(e)) from e
        except ValueError as e:
            # Raised locally by the SDK for malformed messages
            raise PushDeliveryError(_argument_error_code(str(e)), str(e)) from e
