from dataclasses import dataclass
from functools import lru_cache

from .clients import FcmPushGateway, FirebaseIdentityProvider
from .config import Settings, settings as default_settings
from .firebase import FirebaseApp
from .notifications import BadgeCounter, NotificationDispatcher, RetentionSweeper
from .users import UserLifecycleManager


@dataclass
class Services:
    dispatcher: NotificationDispatcher
    sweeper: RetentionSweeper
    badge_counter: BadgeCounter
    user_manager: UserLifecycleManager


def build_services(firestore_db, push_gateway, identity, settings: Settings = default_settings) -> Services:
    """Wire the handlers to explicit collaborator clients."""
    return Services(
        dispatcher=NotificationDispatcher(firestore_db, push_gateway, settings),
        sweeper=RetentionSweeper(firestore_db, settings),
        badge_counter=BadgeCounter(firestore_db, settings),
        user_manager=UserLifecycleManager(firestore_db, identity, settings),
    )


@lru_cache(maxsize=1)
def get_services() -> Services:
    """Handlers backed by the default Firebase app, built once per process."""
    firebase = FirebaseApp()
    app = firebase.get_app()
    return build_services(
        firestore_db=firebase.get_firestore_db(),
        push_gateway=FcmPushGateway(app),
        identity=FirebaseIdentityProvider(app),
    )
