from .identity import FirebaseIdentityProvider, IdentityError
from .push_gateway import FcmPushGateway, PushDeliveryError

__all__ = [
    "FcmPushGateway",
    "FirebaseIdentityProvider",
    "IdentityError",
    "PushDeliveryError",
]
