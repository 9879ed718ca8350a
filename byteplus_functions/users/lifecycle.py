import logging
from typing import Any, Dict, List, Optional

import google.cloud.firestore
from firebase_admin import firestore
from pydantic import ValidationError

from .schemas import CreateUserRequest, DeleteUserRequest, UserRecord, UserRole
from ..clients.identity import (
    EMAIL_ALREADY_EXISTS,
    INVALID_EMAIL,
    USER_NOT_FOUND,
    WEAK_PASSWORD,
    FirebaseIdentityProvider,
    IdentityError,
)
from ..config import Settings, settings as default_settings
from ..context import CallerContext
from ..errors import ErrorCode, FunctionError

logger = logging.getLogger(__name__)

IDENTITY_ERROR_CODES = {
    EMAIL_ALREADY_EXISTS: ErrorCode.ALREADY_EXISTS,
    INVALID_EMAIL: ErrorCode.INVALID_ARGUMENT,
    WEAK_PASSWORD: ErrorCode.INVALID_ARGUMENT,
}


def _validation_message(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err['loc'])
        problems.append(f"{field}: {err['msg']}")
    return "; ".join(problems)


class UserLifecycleManager:
    """Admin-only creation and deletion of user accounts.

    Both operations span two systems (Firebase Auth and Firestore) that
    share no transaction. Creation compensates a failed profile write by
    removing the freshly created account. Deletion removes the account
    first and then the Firestore data one batch at a time; if it stops
    partway the completed steps are reported, and calling it again
    finishes the job because a missing account is not an error.
    """

    def __init__(self,
                 firestore_db: google.cloud.firestore.Client,
                 identity: FirebaseIdentityProvider,
                 settings: Settings = default_settings):
        self.db = firestore_db
        self.identity = identity
        self.settings = settings

    def _require_admin(self, caller: CallerContext) -> str:
        if not caller.is_authenticated:
            raise FunctionError(ErrorCode.UNAUTHENTICATED, "User must be logged in")

        caller_doc = self.db.collection(self.settings.users_collection).document(caller.uid).get()
        caller_data = caller_doc.to_dict() if caller_doc.exists else None
        if not caller_data or caller_data.get('role') != UserRole.ADMIN.value:
            logger.warning(f"User {caller.uid} attempted an admin operation without the admin role")
            raise FunctionError(ErrorCode.PERMISSION_DENIED, "Only admins can manage users")
        return caller.uid

    def create_user(self, caller: CallerContext, data: Optional[Dict[str, Any]]) -> str:
        """
        Create a Firebase Auth account and its user document.

        Args:
            caller: Identity of the calling admin
            data: Callable arguments with email, password, name and role

        Returns:
            The uid of the new user

        Raises:
            FunctionError: unauthenticated, permission-denied, invalid-argument,
                already-exists or internal
        """
        admin_uid = self._require_admin(caller)

        try:
            request = CreateUserRequest.model_validate(data or {})
        except ValidationError as e:
            raise FunctionError(
                ErrorCode.INVALID_ARGUMENT,
                f"Missing or invalid fields: {_validation_message(e)}"
            )

        try:
            uid = self.identity.create_user(
                email=request.email,
                password=request.password,
                display_name=request.name,
            )
        except IdentityError as e:
            logger.warning(f"Failed to create auth account for {request.email}: [{e.code}] {e.message}")
            raise FunctionError(IDENTITY_ERROR_CODES.get(e.code, ErrorCode.INTERNAL), e.message)

        record = UserRecord(
            name=request.name,
            email=request.email,
            role=request.role,
            emailVerified=True,
            createdBy=admin_uid,
        ).model_dump(mode='json', exclude_none=True)
        record['createdAt'] = firestore.SERVER_TIMESTAMP

        try:
            self.db.collection(self.settings.users_collection).document(uid).set(record)
        except Exception as e:
            logger.error(f"Failed to write user document for {uid}, removing auth account: {e}", exc_info=True)
            try:
                self.identity.delete_user(uid)
            except IdentityError as rollback_error:
                logger.error(f"Failed to remove auth account {uid}: {rollback_error.message}")
            raise FunctionError(ErrorCode.INTERNAL, f"Failed to create user document: {e}")

        logger.info(f"Admin {admin_uid} created user {uid} with role {request.role.value}")
        return uid

    def delete_user(self, caller: CallerContext, data: Optional[Dict[str, Any]]) -> str:
        """
        Delete a user's auth account, subcollections and user document.

        Args:
            caller: Identity of the calling admin
            data: Callable arguments with userId

        Returns:
            The uid of the deleted user

        Raises:
            FunctionError: unauthenticated, permission-denied, invalid-argument or internal
        """
        admin_uid = self._require_admin(caller)

        try:
            request = DeleteUserRequest.model_validate(data or {})
        except ValidationError:
            raise FunctionError(ErrorCode.INVALID_ARGUMENT, "userId is required")

        user_id = request.userId
        if user_id == admin_uid:
            raise FunctionError(ErrorCode.INVALID_ARGUMENT, "Admins cannot delete their own account")

        try:
            self.identity.delete_user(user_id)
        except IdentityError as e:
            if e.code != USER_NOT_FOUND:
                logger.error(f"Failed to delete auth account {user_id}: [{e.code}] {e.message}")
                raise FunctionError(ErrorCode.INTERNAL, f"Failed to delete auth account: {e.message}")
            logger.warning(f"Auth account {user_id} already absent, cleaning up Firestore data")

        completed: List[str] = ["auth"]
        user_ref = self.db.collection(self.settings.users_collection).document(user_id)
        try:
            for name in self.settings.user_subcollections:
                deleted = self._delete_subcollection(user_ref, name)
                logger.info(f"Deleted {deleted} documents from users/{user_id}/{name}")
                completed.append(name)

            user_ref.delete()
            completed.append("user")
        except Exception as e:
            logger.error(
                f"Deletion of user {user_id} stopped after steps {completed}: {e}",
                exc_info=True
            )
            raise FunctionError(
                ErrorCode.INTERNAL,
                f"User deletion incomplete: {e}",
                details={'userId': user_id, 'completed': completed},
            )

        logger.info(f"Admin {admin_uid} deleted user {user_id}")
        return user_id

    def _delete_subcollection(self, user_ref, name: str) -> int:
        docs = user_ref.collection(name).get()
        if not docs:
            return 0

        limit = self.settings.batch_write_limit
        for start in range(0, len(docs), limit):
            batch = self.db.batch()
            for doc in docs[start:start + limit]:
                batch.delete(doc.reference)
            batch.commit()
        return len(docs)
