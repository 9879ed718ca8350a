from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the BytePlus Cloud Functions"""

    # Application settings
    service_name: str = "byteplus-functions"
    log_level: str = "INFO"
    environment: str = "DEV"

    # Firebase settings
    firebase_secret: Optional[str] = None

    # Firestore layout
    notifications_collection: str = "notifications"
    users_collection: str = "users"
    user_subcollections: List[str] = ["cartItems", "favorites", "notifications", "orders"]

    # Retention settings
    retention_days: int = 30
    retention_batch_limit: int = 500
    batch_write_limit: int = 500  # Firestore caps a WriteBatch at 500 operations
    cleanup_schedule: str = "0 0 * * *"
    cleanup_timezone: str = "Asia/Manila"

    # Push message settings
    default_title: str = "BytePlus"
    default_body: str = "You have a new notification"
    default_type: str = "general"
    click_action: str = "FLUTTER_NOTIFICATION_CLICK"
    android_channel_id: str = "byteplus_orders"

    # Mark notifications whose user no longer exists as failed instead of leaving them pending
    mark_missing_user_failed: bool = True

    # HTTP surface settings
    path_prefix: str = ''
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()


def get_prefix(api_version: str) -> str:
    path_prefix = settings.path_prefix
    if not path_prefix.startswith('/'):
        path_prefix = f'/{path_prefix}'
    if path_prefix.endswith('/'):
        path_prefix = path_prefix.rstrip('/')
    return f'{path_prefix}{api_version}'
