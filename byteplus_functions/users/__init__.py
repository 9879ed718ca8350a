from .lifecycle import UserLifecycleManager
from .schemas import UserRecord, UserRole

__all__ = ["UserLifecycleManager", "UserRecord", "UserRole"]
