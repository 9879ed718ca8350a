from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"


class UserRecord(BaseModel):
    """A document in the users collection."""
    name: str
    email: str
    role: UserRole
    status: UserStatus = UserStatus.ACTIVE
    fcmToken: Optional[str] = None
    emailVerified: bool = False
    createdAt: Optional[datetime] = None
    createdBy: Optional[str] = None


class CreateUserRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: UserRole


class DeleteUserRequest(BaseModel):
    userId: str = Field(min_length=1)


class UserMutationResponse(BaseModel):
    success: bool = True
    userId: str
